# =============================================================================
# PIATTAFORMA B2B - NOTIFICHE ROUTER
# =============================================================================
# Inbox notifiche in-app dell'utente
# =============================================================================

from typing import Dict, Any

from fastapi import APIRouter, Depends, Query

from ..dependencies import get_db
from ..exceptions import PiattaformaException
from ..services.notifiche import (
    INBOX_PAGE_SIZE,
    list_notifiche,
    count_non_lette,
    segna_come_letta,
)
from ..utils.response import success_response


router = APIRouter(prefix="/utenti/{user_id}/notifiche")


@router.get("")
def lista_notifiche(
    user_id: int,
    page: int = Query(1, ge=1),
    limit: int = Query(INBOX_PAGE_SIZE, ge=1, le=100),
    db=Depends(get_db)
) -> Dict[str, Any]:
    """Notifiche dell'utente, più recenti prima."""
    try:
        result = list_notifiche(db, user_id, page=page, limit=limit)
    except PiattaformaException as e:
        raise e.to_http_exception()
    return success_response(data=result['notifiche'], pagination=result['pagination'])


@router.get("/unread-count")
def contatore_non_lette(user_id: int, db=Depends(get_db)) -> Dict[str, Any]:
    try:
        count = count_non_lette(db, user_id)
    except PiattaformaException as e:
        raise e.to_http_exception()
    return success_response(data={'count': count})


@router.post("/{notifica_id}/read")
def segna_letta(user_id: int, notifica_id: int, db=Depends(get_db)) -> Dict[str, Any]:
    try:
        notifica = segna_come_letta(db, notifica_id, user_id)
    except PiattaformaException as e:
        raise e.to_http_exception()
    return success_response(data=notifica)
