# =============================================================================
# PIATTAFORMA B2B - UTILS/RESPONSE
# =============================================================================
# Envelope delle risposte API e metadati di paginazione
# =============================================================================

from typing import Any, Dict, List


def _pagine(totale: int, limit: int) -> int:
    return (totale + limit - 1) // limit if limit > 0 else 1


def success_response(data: Any = None, message: str = None, **extra) -> Dict[str, Any]:
    """
    Envelope {'success': True, 'data', 'message', ...extra}.

    data e message sono omessi se vuoti; extra (es. stato_precedente,
    pubblicazione, pagination) è aggiunto così com'è, anche se None.
    """
    response = {"success": True}
    if data is not None:
        response["data"] = data
    if message:
        response["message"] = message
    response.update(extra)
    return response


def paginazione_pagina(totale: int, page: int, limit: int) -> Dict[str, int]:
    """Metadati per paginazione a pagine (inbox notifiche)."""
    return {
        'total': totale,
        'pages': _pagine(totale, limit),
        'current': page,
        'limit': limit,
    }


def paginated_response(items: List[Any], totale: int, limit: int, offset: int) -> Dict[str, Any]:
    """Lista con paginazione limit/offset (liste cataloghi)."""
    return success_response(
        data=items,
        pagination={
            "totale": totale,
            "limit": limit,
            "offset": offset,
            "pages": _pagine(totale, limit),
        }
    )
