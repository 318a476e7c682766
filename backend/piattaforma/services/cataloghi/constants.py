"""
Costanti cataloghi - stati, tipi, stagioni e tabella transizioni.
"""

from enum import Enum
from typing import Dict, FrozenSet


class StatoCatalogo(str, Enum):
    """Ciclo di vita catalogo: bozza -> pubblicato -> archiviato."""
    BOZZA = "bozza"
    PUBBLICATO = "pubblicato"
    ARCHIVIATO = "archiviato"


class TipoCatalogo(str, Enum):
    PREORDINE = "Preordine"
    DISPONIBILE = "Disponibile"
    RIASSORTIMENTO = "Riassortimento"
    STOCK = "Stock"
    RIMANENZE = "Rimanenze"


class Stagione(str, Enum):
    PRE_FALL_WINTER = "PRE FALL-WINTER"
    MAIN_FALL_WINTER = "MAIN FALL-WINTER"
    PRE_SPRING_SUMMER = "PRE SPRING-SUMMER"
    MAIN_SPRING_SUMMER = "MAIN SPRING-SUMMER"
    OTHER = "OTHER"


# Stato corrente -> stati di destinazione ammessi. archiviato è terminale.
TRANSIZIONI: Dict[str, FrozenSet[str]] = {
    StatoCatalogo.BOZZA.value: frozenset({
        StatoCatalogo.PUBBLICATO.value,
        StatoCatalogo.ARCHIVIATO.value,
    }),
    StatoCatalogo.PUBBLICATO.value: frozenset({
        StatoCatalogo.ARCHIVIATO.value,
    }),
    StatoCatalogo.ARCHIVIATO.value: frozenset(),
}

# Campi modificabili via update; codice e stato esclusi (stato ha un percorso dedicato)
CAMPI_MODIFICABILI = frozenset({
    'nome', 'brand_id', 'tipo', 'stagione', 'anno',
    'data_inizio_ordini', 'data_fine_ordini', 'data_consegna',
    'note', 'condizioni', 'cover_url',
})
