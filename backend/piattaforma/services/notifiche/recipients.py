"""
Risoluzione destinatari per le notifiche di un brand.
"""

import logging
from typing import List

from .models import Destinatario
from ...persistence.repositories import ClientiRepository

logger = logging.getLogger(__name__)


def resolve_active_clients_for_brand(db, brand_id: str) -> List[Destinatario]:
    """
    Clienti attivi associati al brand, uno per utente.

    Criteri:
    - associazione in client_brands
    - clients.stato = 'attivo'
    - users.attivo = TRUE

    Ordinati per user_id. Lista vuota se nessun cliente soddisfa i criteri.
    """
    rows = ClientiRepository(db).get_attivi_per_brand(brand_id)
    destinatari = [Destinatario.from_row(r) for r in rows]
    logger.debug("Brand %s: %d destinatari attivi", brand_id, len(destinatari))
    return destinatari
