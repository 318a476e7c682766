# =============================================================================
# PIATTAFORMA B2B - CONFIGURAZIONE
# =============================================================================
# Impostazioni lette da variabili ambiente (.env se presente)
# =============================================================================

import os

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """Configurazione globale dell'applicazione."""

    # Database PostgreSQL
    PG_HOST: str = os.getenv("PG_HOST", "localhost")
    PG_PORT: int = int(os.getenv("PG_PORT", "5432"))
    PG_DATABASE: str = os.getenv("PG_DATABASE", "piattaforma")
    PG_USER: str = os.getenv("PG_USER", "postgres")
    PG_PASSWORD: str = os.getenv("PG_PASSWORD", "")
    PG_POOL_MIN: int = int(os.getenv("PG_POOL_MIN", "2"))
    PG_POOL_MAX: int = int(os.getenv("PG_POOL_MAX", "20"))
    PG_POOL_TIMEOUT: float = float(os.getenv("PG_POOL_TIMEOUT", "10"))

    # SMTP (credenziali solo da .env)
    SMTP_HOST: str = os.getenv("SMTP_HOST", "")
    SMTP_PORT: int = int(os.getenv("SMTP_PORT", "465"))
    SMTP_USER: str = os.getenv("SMTP_USER", "")
    SMTP_PASSWORD: str = os.getenv("SMTP_PASS", os.getenv("SMTP_PASSWORD", ""))
    SMTP_FROM: str = os.getenv("SMTP_FROM", "")
    SMTP_SENDER_NAME: str = os.getenv("SMTP_SENDER_NAME", "ARTEXMODA")
    SMTP_USE_SSL: bool = _env_bool("SMTP_USE_SSL", "true")
    SMTP_USE_TLS: bool = _env_bool("SMTP_USE_TLS", "false")

    # Fan-out notifiche pubblicazione
    EMAIL_SEND_TIMEOUT: float = float(os.getenv("EMAIL_SEND_TIMEOUT", "20"))
    NOTIFY_MAX_WORKERS: int = int(os.getenv("NOTIFY_MAX_WORKERS", "8"))

    # Applicazione
    APP_URL: str = os.getenv("APP_URL", "http://localhost:3000")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    VERSION: str = "1.0.0"
    APP_NAME: str = "PIATTAFORMA B2B"


# Istanza singleton
config = Settings()
