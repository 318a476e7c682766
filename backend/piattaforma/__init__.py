"""
Piattaforma B2B - backend cataloghi e notifiche.
"""

__version__ = "1.0.0"
