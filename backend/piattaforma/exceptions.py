# =============================================================================
# PIATTAFORMA B2B - ECCEZIONI CENTRALIZZATE
# =============================================================================
# Sistema di eccezioni custom per gestione errori uniforme
# =============================================================================

from fastapi import HTTPException
from typing import Optional, Dict, Any


class PiattaformaException(Exception):
    """
    Eccezione base della piattaforma.

    Tutte le eccezioni custom devono estendere questa classe.
    Fornisce conversione automatica a HTTPException.
    """
    status_code: int = 500
    code: str = "INTERNAL_ERROR"
    detail: str = "Errore interno del server"

    def __init__(self, detail: Optional[str] = None, extra: Dict[str, Any] = None):
        self.detail = detail or self.__class__.detail
        self.extra = extra or {}
        super().__init__(self.detail)

    def to_http_exception(self) -> HTTPException:
        """Converte in HTTPException per FastAPI."""
        return HTTPException(
            status_code=self.status_code,
            detail={
                "code": self.code,
                "message": self.detail,
                **self.extra
            }
        )

    def to_dict(self) -> Dict[str, Any]:
        """Converte in dizionario per logging."""
        return {
            "code": self.code,
            "status_code": self.status_code,
            "message": self.detail,
            **self.extra
        }


# =============================================================================
# ECCEZIONI HTTP STANDARD
# =============================================================================

class NotFoundError(PiattaformaException):
    """Risorsa non trovata (404)."""
    status_code = 404
    code = "NOT_FOUND"
    detail = "Risorsa non trovata"


class BadRequestError(PiattaformaException):
    """Richiesta non valida (400)."""
    status_code = 400
    code = "BAD_REQUEST"
    detail = "Richiesta non valida"


class ConflictError(PiattaformaException):
    """Conflitto con stato attuale (409)."""
    status_code = 409
    code = "CONFLICT"
    detail = "Conflitto con lo stato attuale della risorsa"


# =============================================================================
# ECCEZIONI PERSISTENZA
# =============================================================================

class DatabaseConnectionError(PiattaformaException):
    """Database non raggiungibile o connessione persa."""
    code = "DB_CONNECTION_ERROR"
    detail = "Connessione al database non disponibile"


class QueryError(PiattaformaException):
    """Errore in esecuzione query."""
    code = "QUERY_ERROR"
    detail = "Errore nell'esecuzione della query"


class IntegrityViolationError(QueryError):
    """Violazione vincolo (unique, foreign key, check)."""
    status_code = 409
    code = "INTEGRITY_VIOLATION"
    detail = "Violazione di un vincolo del database"


# =============================================================================
# ECCEZIONI DOMINIO - CATALOGHI
# =============================================================================

class CatalogoNotFoundError(NotFoundError):
    """Catalogo non trovato."""
    code = "CATALOGO_NOT_FOUND"
    detail = "Catalogo non trovato"


class BrandNotFoundError(NotFoundError):
    """Brand non trovato."""
    code = "BRAND_NOT_FOUND"
    detail = "Brand non trovato"


class InvalidTransitionError(BadRequestError):
    """Transizione di stato catalogo non consentita."""
    code = "INVALID_TRANSITION"
    detail = "Transizione di stato non valida"

    def __init__(self, from_stato: str, to_stato: str):
        self.from_stato = from_stato
        self.to_stato = to_stato
        super().__init__(
            detail=f"Transizione di stato non valida: da {from_stato} a {to_stato}",
            extra={"from": from_stato, "to": to_stato}
        )


class CatalogImmutableError(BadRequestError):
    """Catalogo archiviato: nessuna modifica consentita."""
    code = "CATALOGO_IMMUTABILE"
    detail = "Il catalogo è archiviato e non può essere modificato"


# =============================================================================
# ECCEZIONI DOMINIO - NOTIFICHE
# =============================================================================

class NotificaNotFoundError(NotFoundError):
    """Notifica non trovata o di un altro utente."""
    code = "NOTIFICA_NOT_FOUND"
    detail = "Notifica non trovata"


class NotificationDispatchError(PiattaformaException):
    """
    Errore nel fan-out per un singolo destinatario.

    Non viene mai propagato al chiamante: è raccolto nel risultato
    aggregato della pubblicazione.
    """
    code = "NOTIFICATION_DISPATCH_ERROR"
    detail = "Invio notifica fallito"

    def __init__(self, user_id: int, canale: str, errore: str):
        self.user_id = user_id
        self.canale = canale
        super().__init__(
            detail=f"Notifica {canale} fallita per utente {user_id}: {errore}",
            extra={"user_id": user_id, "canale": canale, "errore": errore}
        )
