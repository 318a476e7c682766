# =============================================================================
# PIATTAFORMA B2B - UTILS PACKAGE
# =============================================================================
#   utils/codes.py       - format_codice_catalogo, next_codice_catalogo
#   utils/db_helpers.py  - QueryFilters
#   utils/response.py    - success_response, paginated_response, paginazione_pagina
# =============================================================================

from .codes import (
    format_codice_catalogo,
    parse_numero_catalogo,
    next_codice_catalogo,
)

from .db_helpers import QueryFilters

from .response import (
    success_response,
    paginated_response,
    paginazione_pagina,
)

__all__ = [
    'format_codice_catalogo',
    'parse_numero_catalogo',
    'next_codice_catalogo',
    'QueryFilters',
    'success_response',
    'paginated_response',
    'paginazione_pagina',
]
