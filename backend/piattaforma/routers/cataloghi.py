# =============================================================================
# PIATTAFORMA B2B - CATALOGHI ROUTER
# =============================================================================
# Endpoint gestione cataloghi e transizioni di stato
# =============================================================================

from typing import Dict, Any, Optional

from fastapi import APIRouter, Depends, Query

from ..dependencies import get_db, get_notifier
from ..exceptions import PiattaformaException
from ..models import CatalogoCreate, CatalogoUpdate, CambioStatoRequest
from ..services.cataloghi import (
    StatoCatalogo,
    TipoCatalogo,
    Stagione,
    get_catalogo,
    list_cataloghi,
    get_next_codice,
    create_catalogo,
    delete_catalogo,
    aggiorna_catalogo,
    cambia_stato_catalogo,
)
from ..utils.response import success_response, paginated_response


router = APIRouter(prefix="/cataloghi")


def _value(enum_value):
    return enum_value.value if enum_value is not None else None


# =============================================================================
# LISTA E DETTAGLIO
# =============================================================================

@router.get("")
def lista_cataloghi(
    brand_id: Optional[str] = Query(None, description="ID brand"),
    stato: Optional[StatoCatalogo] = Query(None, description="bozza, pubblicato, archiviato"),
    tipo: Optional[TipoCatalogo] = Query(None),
    stagione: Optional[Stagione] = Query(None),
    anno: Optional[int] = Query(None, ge=2000, le=2100),
    search: Optional[str] = Query(None, description="Ricerca su nome e codice"),
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
    db=Depends(get_db)
) -> Dict[str, Any]:
    """Lista cataloghi con filtri, più recenti prima."""
    filtri = {
        'brand_id': brand_id,
        'stato': _value(stato),
        'tipo': _value(tipo),
        'stagione': _value(stagione),
        'anno': anno,
        'search': search,
    }
    try:
        cataloghi, totale = list_cataloghi(db, filtri, limit=limit, offset=offset)
    except PiattaformaException as e:
        raise e.to_http_exception()
    return paginated_response(cataloghi, totale, limit, offset)


@router.get("/next-code")
def prossimo_codice(db=Depends(get_db)) -> Dict[str, Any]:
    """Anteprima del prossimo codice catalogo."""
    try:
        codice = get_next_codice(db)
    except PiattaformaException as e:
        raise e.to_http_exception()
    return success_response(data={'codice': codice})


@router.get("/{catalogo_id}")
def dettaglio_catalogo(catalogo_id: int, db=Depends(get_db)) -> Dict[str, Any]:
    try:
        catalogo = get_catalogo(db, catalogo_id)
    except PiattaformaException as e:
        raise e.to_http_exception()
    return success_response(data=catalogo)


# =============================================================================
# MUTAZIONI
# =============================================================================

@router.post("", status_code=201)
def crea_catalogo(body: CatalogoCreate, db=Depends(get_db)) -> Dict[str, Any]:
    """Crea un catalogo in bozza con codice generato."""
    try:
        catalogo = create_catalogo(db, body.model_dump(mode='json'))
    except PiattaformaException as e:
        raise e.to_http_exception()
    return success_response(data=catalogo, message=f"Catalogo {catalogo['codice']} creato")


@router.put("/{catalogo_id}")
def modifica_catalogo(
    catalogo_id: int,
    body: CatalogoUpdate,
    db=Depends(get_db),
    notifier=Depends(get_notifier)
) -> Dict[str, Any]:
    """
    Aggiorna i campi indicati.

    Se lo stato passa a 'pubblicato' parte la notifica ai clienti del brand;
    l'esito è in 'pubblicazione' e non influisce sullo status HTTP.
    """
    try:
        esito = aggiorna_catalogo(
            db, notifier, catalogo_id, body.model_dump(mode='json', exclude_unset=True)
        )
    except PiattaformaException as e:
        raise e.to_http_exception()
    return success_response(
        data=esito['catalogo'],
        stato_precedente=esito['stato_precedente'],
        pubblicazione=esito['pubblicazione'],
    )


@router.patch("/{catalogo_id}/stato")
def cambia_stato(
    catalogo_id: int,
    body: CambioStatoRequest,
    db=Depends(get_db),
    notifier=Depends(get_notifier)
) -> Dict[str, Any]:
    """
    Transizione di stato.

    Transizioni: bozza -> pubblicato | archiviato, pubblicato -> archiviato.
    """
    try:
        esito = cambia_stato_catalogo(db, notifier, catalogo_id, body.stato.value)
    except PiattaformaException as e:
        raise e.to_http_exception()
    return success_response(
        data=esito['catalogo'],
        stato_precedente=esito['stato_precedente'],
        pubblicazione=esito['pubblicazione'],
    )


@router.delete("/{catalogo_id}")
def elimina_catalogo(catalogo_id: int, db=Depends(get_db)) -> Dict[str, Any]:
    """Elimina un catalogo in bozza."""
    try:
        codice = delete_catalogo(db, catalogo_id)
    except PiattaformaException as e:
        raise e.to_http_exception()
    return success_response(message=f"Catalogo {codice} eliminato")
