# =============================================================================
# PIATTAFORMA B2B - CATALOGHI QUERIES
# =============================================================================
# Query functions per lettura cataloghi
# =============================================================================

from typing import Dict, Any, List, Tuple

from ...exceptions import CatalogoNotFoundError
from ...persistence.repositories import CataloghiRepository
from ...utils.codes import next_codice_catalogo


def get_catalogo(db, catalogo_id: int) -> Dict[str, Any]:
    """
    Catalogo con nome brand.

    Raises:
        CatalogoNotFoundError: se non esiste
    """
    row = CataloghiRepository(db).get_con_brand(catalogo_id)
    if not row:
        raise CatalogoNotFoundError(detail=f"Catalogo {catalogo_id} non trovato")
    return row


def list_cataloghi(
    db,
    filtri: Dict[str, Any] = None,
    limit: int = 50,
    offset: int = 0
) -> Tuple[List[Dict[str, Any]], int]:
    """
    Lista cataloghi filtrata e paginata.

    Args:
        filtri: brand_id, stato, tipo, stagione, anno, search
        limit: Max record
        offset: Offset paginazione

    Returns:
        (cataloghi, totale)
    """
    return CataloghiRepository(db).list_cataloghi(filtri, limit=limit, offset=offset)


def get_next_codice(db) -> str:
    """Prossimo codice CATG disponibile (solo anteprima, non riservato)."""
    return next_codice_catalogo(CataloghiRepository(db).get_ultimo_codice())
