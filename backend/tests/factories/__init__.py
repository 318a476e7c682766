# =============================================================================
# PIATTAFORMA B2B - TEST FACTORIES
# =============================================================================
# Factory Boy factories per generazione dati di test
# =============================================================================

from .brands import BrandFactory
from .cataloghi import CatalogoFactory
from .utenti import UtenteFactory, ClienteFactory

__all__ = [
    "BrandFactory",
    "CatalogoFactory",
    "UtenteFactory",
    "ClienteFactory",
]
