"""
Notifiche - destinatari, fan-out pubblicazione catalogo e inbox utente.
"""

from .constants import TipoNotifica, CanaleNotifica, INBOX_PAGE_SIZE
from .models import Destinatario, CatalogoDettaglio, RecipientOutcome, PublicationResult
from .recipients import resolve_active_clients_for_brand
from .publication import PublicationNotifier
from .inbox import list_notifiche, count_non_lette, segna_come_letta

__all__ = [
    # Constants
    'TipoNotifica',
    'CanaleNotifica',
    'INBOX_PAGE_SIZE',
    # Models
    'Destinatario',
    'CatalogoDettaglio',
    'RecipientOutcome',
    'PublicationResult',
    # Recipients
    'resolve_active_clients_for_brand',
    # Publication
    'PublicationNotifier',
    # Inbox
    'list_notifiche',
    'count_non_lette',
    'segna_come_letta',
]
