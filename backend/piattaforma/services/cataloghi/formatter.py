"""
Testi per la pubblicazione di un catalogo (oggetto email e notifica).

Oggetto e messaggio condividono la stessa derivazione.
"""

from typing import Any, Mapping

from .constants import TipoCatalogo


def _field(catalogo: Any, name: str):
    if isinstance(catalogo, Mapping):
        return catalogo[name]
    return getattr(catalogo, name)


def season_code(stagione: str) -> str:
    """'MAIN FALL-WINTER' -> 'FW', 'PRE SPRING-SUMMER' -> 'SS', altrimenti ''."""
    if 'FALL-WINTER' in stagione:
        return 'FW'
    if 'SPRING-SUMMER' in stagione:
        return 'SS'
    return ''


def _headline(catalogo: Any) -> str:
    brand = _field(catalogo, 'brand_name')
    tipo = _field(catalogo, 'tipo')
    tipo = tipo.value if isinstance(tipo, TipoCatalogo) else tipo

    if tipo == TipoCatalogo.PREORDINE.value:
        stagione = _field(catalogo, 'stagione')
        stagione = getattr(stagione, 'value', stagione)
        year_suffix = str(_field(catalogo, 'anno'))[-2:]
        pre_prefix = 'PRE ' if 'PRE' in stagione else ''
        return f"{brand} {pre_prefix}{season_code(stagione)}{year_suffix} Preorders Open Now!"

    if tipo == TipoCatalogo.DISPONIBILE.value:
        return f"New List {brand} Available Now!"

    return f"New List {brand} {tipo} Available Now!"


def format_subject(catalogo: Any) -> str:
    """Oggetto email pubblicazione catalogo."""
    return _headline(catalogo)


def format_body(catalogo: Any) -> str:
    """Messaggio della notifica in-app."""
    return _headline(catalogo)
