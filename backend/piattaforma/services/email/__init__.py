"""
Sistema Email - invio transazionale via SMTP con template.
"""

from .constants import EmailStatus, EmailType
from .sender import EmailSender
from .templates import render_template, TEMPLATES

__all__ = [
    'EmailStatus',
    'EmailType',
    'EmailSender',
    'render_template',
    'TEMPLATES',
]
