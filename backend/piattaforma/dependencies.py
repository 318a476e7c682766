# =============================================================================
# PIATTAFORMA B2B - DEPENDENCIES
# =============================================================================
# Dependency FastAPI: connessione per richiesta, servizi dall'app state
# =============================================================================

from typing import Iterator

from fastapi import Request

from .database_pg import PostgreSQLConnection
from .services.email import EmailSender
from .services.notifiche import PublicationNotifier


def get_db(request: Request) -> Iterator[PostgreSQLConnection]:
    """Connessione dal pool per la durata della richiesta."""
    with request.app.state.gateway.connection() as db:
        yield db


def get_notifier(request: Request) -> PublicationNotifier:
    return request.app.state.notifier


def get_email_sender(request: Request) -> EmailSender:
    return request.app.state.email_sender
