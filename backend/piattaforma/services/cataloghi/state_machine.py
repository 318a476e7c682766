"""
Macchina a stati del catalogo.

Le transizioni ammesse sono dichiarate in TRANSIZIONI e verificate
prima di qualsiasi scrittura. Un catalogo archiviato non accetta
alcuna modifica, né di stato né di campo.
"""

import logging
from typing import FrozenSet

from .constants import StatoCatalogo, TRANSIZIONI
from ...exceptions import InvalidTransitionError, CatalogImmutableError

logger = logging.getLogger(__name__)


def _value(stato) -> str:
    return stato.value if isinstance(stato, StatoCatalogo) else stato


def allowed_targets(stato_corrente) -> FrozenSet[str]:
    """Stati raggiungibili da stato_corrente (vuoto se sconosciuto o terminale)."""
    return TRANSIZIONI.get(_value(stato_corrente), frozenset())


def is_valid_transition(da, a) -> bool:
    return _value(a) in allowed_targets(da)


def validate_transition(da, a) -> None:
    """
    Verifica la transizione da -> a.

    Raises:
        InvalidTransitionError: per qualsiasi transizione non in tabella,
            incluse le richieste che lasciano lo stato invariato e tutte
            quelle in uscita da archiviato
    """
    da, a = _value(da), _value(a)
    if not is_valid_transition(da, a):
        logger.info("Transizione rifiutata: %s -> %s", da, a)
        raise InvalidTransitionError(da, a)


def ensure_mutable(stato_corrente) -> None:
    """Solleva CatalogImmutableError se lo stato memorizzato è archiviato."""
    if _value(stato_corrente) == StatoCatalogo.ARCHIVIATO.value:
        raise CatalogImmutableError()


def became_published(stato_precedente, stato_nuovo) -> bool:
    """True solo sul passaggio effettivo a pubblicato."""
    pubblicato = StatoCatalogo.PUBBLICATO.value
    return _value(stato_precedente) != pubblicato and _value(stato_nuovo) == pubblicato
