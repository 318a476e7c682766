# =============================================================================
# PIATTAFORMA B2B - CATALOGHI SERVICE PACKAGE
# =============================================================================
# Ciclo di vita catalogo: creazione, aggiornamento, transizioni di stato
# =============================================================================

from .constants import (
    StatoCatalogo,
    TipoCatalogo,
    Stagione,
    TRANSIZIONI,
    CAMPI_MODIFICABILI,
)

from .state_machine import (
    allowed_targets,
    is_valid_transition,
    validate_transition,
    ensure_mutable,
    became_published,
)

from .formatter import (
    season_code,
    format_subject,
    format_body,
)

from .queries import (
    get_catalogo,
    list_cataloghi,
    get_next_codice,
)

from .commands import (
    create_catalogo,
    update_catalogo,
    update_stato_catalogo,
    delete_catalogo,
)

from .workflow import (
    aggiorna_catalogo,
    cambia_stato_catalogo,
)

__all__ = [
    # Constants
    'StatoCatalogo',
    'TipoCatalogo',
    'Stagione',
    'TRANSIZIONI',
    'CAMPI_MODIFICABILI',
    # State machine
    'allowed_targets',
    'is_valid_transition',
    'validate_transition',
    'ensure_mutable',
    'became_published',
    # Formatter
    'season_code',
    'format_subject',
    'format_body',
    # Queries
    'get_catalogo',
    'list_cataloghi',
    'get_next_codice',
    # Commands
    'create_catalogo',
    'update_catalogo',
    'update_stato_catalogo',
    'delete_catalogo',
    # Workflow
    'aggiorna_catalogo',
    'cambia_stato_catalogo',
]
