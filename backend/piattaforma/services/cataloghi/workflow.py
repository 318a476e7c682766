# =============================================================================
# PIATTAFORMA B2B - CATALOGHI WORKFLOW
# =============================================================================
# Scrittura (transazione) + fan-out pubblicazione dopo il commit
# =============================================================================

import logging
from typing import Dict, Any, Optional

from .commands import update_catalogo, update_stato_catalogo
from ...exceptions import PiattaformaException

logger = logging.getLogger(__name__)


def _notifica_pubblicazione(notifier, catalogo: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """
    Esegue il fan-out; un errore qui non annulla la modifica già committata.
    """
    try:
        result = notifier.notify_catalog_publication(catalogo['id'], catalogo['brand_id'])
    except PiattaformaException as e:
        logger.error("Fan-out catalogo %s non eseguito: %s", catalogo['codice'], e.detail)
        return {'success': False, 'errore': e.to_dict()}
    return result.to_dict()


def _esito(notifier, catalogo, pubblicato: bool, stato_precedente: str) -> Dict[str, Any]:
    return {
        'catalogo': catalogo,
        'stato_precedente': stato_precedente,
        'pubblicazione': _notifica_pubblicazione(notifier, catalogo) if pubblicato else None,
    }


def aggiorna_catalogo(db, notifier, catalogo_id: int, modifiche: Dict[str, Any]) -> Dict[str, Any]:
    """
    Aggiorna i campi (ed eventualmente lo stato) di un catalogo.

    Il fan-out parte solo sul passaggio effettivo a 'pubblicato'.

    Returns:
        {'catalogo', 'stato_precedente', 'pubblicazione'}; pubblicazione è
        None se il catalogo non è appena stato pubblicato
    """
    catalogo, pubblicato, stato_precedente = update_catalogo(db, catalogo_id, modifiche)
    return _esito(notifier, catalogo, pubblicato, stato_precedente)


def cambia_stato_catalogo(db, notifier, catalogo_id: int, nuovo_stato: str) -> Dict[str, Any]:
    """Transizione di stato esplicita, con fan-out su bozza -> pubblicato."""
    catalogo, pubblicato, stato_precedente = update_stato_catalogo(db, catalogo_id, nuovo_stato)
    return _esito(notifier, catalogo, pubblicato, stato_precedente)
