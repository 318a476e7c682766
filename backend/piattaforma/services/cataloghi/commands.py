# =============================================================================
# PIATTAFORMA B2B - CATALOGHI COMMANDS
# =============================================================================
# Command functions per mutazioni cataloghi. Ogni comando è una transazione:
# lettura con FOR UPDATE, validazione, scrittura.
# =============================================================================

import logging
from typing import Dict, Any, Tuple

from .constants import StatoCatalogo, CAMPI_MODIFICABILI
from .state_machine import validate_transition, ensure_mutable, became_published
from ...exceptions import (
    BrandNotFoundError,
    CatalogoNotFoundError,
    ConflictError,
    IntegrityViolationError,
)
from ...persistence.repositories import BrandRepository, CataloghiRepository
from ...utils.codes import next_codice_catalogo

logger = logging.getLogger(__name__)

# Tentativi di assegnazione codice in caso di collisione concorrente
CODICE_MAX_TENTATIVI = 3

# (catalogo aggiornato, passaggio a pubblicato, stato precedente)
EsitoAggiornamento = Tuple[Dict[str, Any], bool, str]


def _ensure_brand(db, brand_id: str) -> None:
    if not BrandRepository(db).exists(brand_id):
        raise BrandNotFoundError(detail=f"Brand {brand_id} non trovato")


def _lock_catalogo(repo: CataloghiRepository, catalogo_id: int) -> Dict[str, Any]:
    current = repo.get_for_update(catalogo_id)
    if not current:
        raise CatalogoNotFoundError(detail=f"Catalogo {catalogo_id} non trovato")
    return current


def create_catalogo(db, dati: Dict[str, Any]) -> Dict[str, Any]:
    """
    Crea un catalogo in bozza con codice generato.

    Args:
        dati: Campi del catalogo (stato e codice ignorati)

    Returns:
        Catalogo creato, con brand_name

    Raises:
        BrandNotFoundError: brand inesistente
        IntegrityViolationError: codice in collisione dopo CODICE_MAX_TENTATIVI
    """
    campi = {k: v for k, v in dati.items() if k in CAMPI_MODIFICABILI}
    campi['stato'] = StatoCatalogo.BOZZA.value

    for tentativo in range(1, CODICE_MAX_TENTATIVI + 1):
        try:
            with db.transaction():
                _ensure_brand(db, campi['brand_id'])
                repo = CataloghiRepository(db)
                campi['codice'] = next_codice_catalogo(repo.get_ultimo_codice())
                row = repo.insert(campi)
                catalogo = repo.get_con_brand(row['id'])
        except IntegrityViolationError:
            if tentativo == CODICE_MAX_TENTATIVI:
                raise
            logger.warning("Codice %s già assegnato, nuovo tentativo", campi['codice'])
            continue

        logger.info("Catalogo %s creato (brand %s)", catalogo['codice'], catalogo['brand_id'])
        return catalogo


def update_catalogo(db, catalogo_id: int, modifiche: Dict[str, Any]) -> EsitoAggiornamento:
    """
    Aggiornamento parziale dei campi di un catalogo.

    Se modifiche contiene uno stato uguale a quello memorizzato è un
    semplice aggiornamento campi; se diverso la transizione viene validata.
    Il codice non è mai modificabile.

    Raises:
        CatalogoNotFoundError: catalogo inesistente
        CatalogImmutableError: catalogo archiviato
        InvalidTransitionError: cambio di stato non ammesso
        BrandNotFoundError: nuovo brand inesistente
    """
    with db.transaction():
        repo = CataloghiRepository(db)
        current = _lock_catalogo(repo, catalogo_id)
        stato_precedente = current['stato']
        ensure_mutable(stato_precedente)

        campi = {k: v for k, v in modifiche.items() if k in CAMPI_MODIFICABILI}

        nuovo_stato = modifiche.get('stato')
        if nuovo_stato is not None:
            nuovo_stato = getattr(nuovo_stato, 'value', nuovo_stato)
            if nuovo_stato != stato_precedente:
                validate_transition(stato_precedente, nuovo_stato)
                campi['stato'] = nuovo_stato

        if 'brand_id' in campi and campi['brand_id'] != current['brand_id']:
            _ensure_brand(db, campi['brand_id'])

        if campi:
            repo.update_campi(catalogo_id, campi)
        catalogo = repo.get_con_brand(catalogo_id)

    pubblicato = became_published(stato_precedente, catalogo['stato'])
    logger.info(
        "Catalogo %s aggiornato (%s -> %s, campi: %s)",
        catalogo['codice'], stato_precedente, catalogo['stato'], sorted(campi)
    )
    return catalogo, pubblicato, stato_precedente


def update_stato_catalogo(db, catalogo_id: int, nuovo_stato: str) -> EsitoAggiornamento:
    """
    Transizione di stato esplicita.

    Richieste che lasciano lo stato invariato sono rifiutate.

    Raises:
        CatalogoNotFoundError: catalogo inesistente
        InvalidTransitionError: transizione non in tabella (incluse quelle
            da archiviato)
    """
    nuovo_stato = getattr(nuovo_stato, 'value', nuovo_stato)

    with db.transaction():
        repo = CataloghiRepository(db)
        current = _lock_catalogo(repo, catalogo_id)
        stato_precedente = current['stato']
        validate_transition(stato_precedente, nuovo_stato)
        repo.update_stato(catalogo_id, nuovo_stato)
        catalogo = repo.get_con_brand(catalogo_id)

    logger.info("Catalogo %s: %s -> %s", catalogo['codice'], stato_precedente, nuovo_stato)
    return catalogo, became_published(stato_precedente, nuovo_stato), stato_precedente


def delete_catalogo(db, catalogo_id: int) -> str:
    """
    Elimina un catalogo in bozza.

    Returns:
        Codice del catalogo eliminato

    Raises:
        CatalogoNotFoundError: catalogo inesistente
        CatalogImmutableError: catalogo archiviato
        ConflictError: catalogo pubblicato
    """
    with db.transaction():
        repo = CataloghiRepository(db)
        current = _lock_catalogo(repo, catalogo_id)
        ensure_mutable(current['stato'])
        if current['stato'] != StatoCatalogo.BOZZA.value:
            raise ConflictError(
                detail="Solo i cataloghi in bozza possono essere eliminati",
                extra={"stato": current['stato']}
            )
        repo.delete(catalogo_id)

    logger.info("Catalogo %s eliminato", current['codice'])
    return current['codice']
