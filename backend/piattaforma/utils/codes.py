# =============================================================================
# PIATTAFORMA B2B - UTILS/CODES
# =============================================================================
# Codici catalogo: CATG + 9 cifre (es. CATG000000042)
# =============================================================================

import re
from typing import Optional

CODICE_PREFIX = 'CATG'
CODICE_DIGITS = 9

_CODICE_RE = re.compile(rf'^{CODICE_PREFIX}(\d{{{CODICE_DIGITS}}})$')


def format_codice_catalogo(numero: int) -> str:
    """12 -> 'CATG000000012'."""
    if numero < 1 or numero >= 10 ** CODICE_DIGITS:
        raise ValueError(f"Numero catalogo fuori range: {numero}")
    return f"{CODICE_PREFIX}{numero:0{CODICE_DIGITS}d}"


def parse_numero_catalogo(codice: Optional[str]) -> Optional[int]:
    """'CATG000000012' -> 12. None se il codice non è nel formato atteso."""
    if not codice:
        return None
    match = _CODICE_RE.match(codice.strip())
    return int(match.group(1)) if match else None


def next_codice_catalogo(ultimo_codice: Optional[str]) -> str:
    """Codice successivo all'ultimo assegnato (CATG000000001 se nessuno)."""
    ultimo = parse_numero_catalogo(ultimo_codice) or 0
    return format_codice_catalogo(ultimo + 1)
