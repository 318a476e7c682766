"""Repository per accesso ai dati: ogni repository lavora su una connessione."""

from .base import BaseRepository
from .cataloghi import BrandRepository, CataloghiRepository
from .clienti import ClientiRepository
from .notifiche import NotificheRepository

__all__ = [
    'BaseRepository',
    'BrandRepository',
    'CataloghiRepository',
    'ClientiRepository',
    'NotificheRepository',
]
