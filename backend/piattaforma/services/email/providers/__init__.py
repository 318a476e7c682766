"""
Provider Email - Implementazioni specifiche per ogni servizio email.

Estendere BaseEmailProvider per aggiungere nuovi provider.
"""

from .base import BaseEmailProvider
from .smtp import SmtpProvider

__all__ = [
    'BaseEmailProvider',
    'SmtpProvider',
]
