# =============================================================================
# PIATTAFORMA B2B - FASTAPI MAIN
# =============================================================================
# Applicazione FastAPI principale
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import Settings, config
from .database_pg import DatabaseGateway
from .exceptions import PiattaformaException
from .routers import cataloghi, email, notifiche
from .services.email import EmailSender
from .services.notifiche import PublicationNotifier

logger = logging.getLogger(__name__)

# Prefisso API
API_PREFIX = "/api/v1"


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    )


def create_app(
    gateway: DatabaseGateway = None,
    email_sender: EmailSender = None,
    settings: Settings = None
) -> FastAPI:
    """
    Costruisce l'applicazione.

    Gateway e sender possono essere iniettati (test); altrimenti sono
    creati dalla configurazione. Il pool viene aperto nello startup e
    chiuso nello shutdown.
    """
    settings = settings or config
    gateway = gateway or DatabaseGateway(settings)
    email_sender = email_sender or EmailSender(settings)

    # =========================================================================
    # LIFESPAN - Startup/Shutdown
    # =========================================================================

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Gestisce startup e shutdown dell'applicazione."""
        configure_logging(settings)
        logger.info("%s v%s - Avvio...", settings.APP_NAME, settings.VERSION)

        gateway.open()
        gateway.init_schema()
        if not email_sender.is_configured:
            logger.warning("SMTP non configurato: le email di notifica saranno saltate")

        yield

        gateway.close()
        logger.info("%s - Arresto...", settings.APP_NAME)

    app = FastAPI(
        title="Piattaforma B2B API",
        description="Cataloghi brand e notifiche ai clienti",
        version=settings.VERSION,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.state.settings = settings
    app.state.gateway = gateway
    app.state.email_sender = email_sender
    app.state.notifier = PublicationNotifier(
        gateway,
        email_sender,
        max_workers=settings.NOTIFY_MAX_WORKERS,
        send_timeout=settings.EMAIL_SEND_TIMEOUT,
        settings=settings,
    )

    # =========================================================================
    # CORS MIDDLEWARE
    # =========================================================================

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.APP_URL],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # ROUTERS
    # =========================================================================

    app.include_router(cataloghi.router, prefix=API_PREFIX, tags=["Cataloghi"])
    app.include_router(notifiche.router, prefix=API_PREFIX, tags=["Notifiche"])
    app.include_router(email.router, prefix=API_PREFIX, tags=["Email"])

    # =========================================================================
    # ROOT ENDPOINTS
    # =========================================================================

    @app.get("/", tags=["Root"])
    async def root():
        """Endpoint root - info applicazione."""
        return {
            "app": settings.APP_NAME,
            "version": settings.VERSION,
            "status": "running",
            "docs": "/docs",
            "api": API_PREFIX
        }

    @app.get("/health", tags=["Root"])
    def health_check():
        """Health check endpoint."""
        try:
            gateway.ping()
        except PiattaformaException as e:
            return JSONResponse(
                status_code=503,
                content={"status": "unhealthy", "error": e.detail}
            )
        return {
            "status": "healthy",
            "database": "connected",
            "smtp_configured": email_sender.is_configured
        }

    # =========================================================================
    # ERROR HANDLERS
    # =========================================================================

    @app.exception_handler(Exception)
    async def global_exception_handler(request, exc):
        """Handler globale per eccezioni non gestite."""
        logger.exception("Errore non gestito su %s", request.url.path)
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal Server Error",
                "detail": str(exc),
                "path": str(request.url)
            }
        )

    return app


app = create_app()


# =============================================================================
# RUN (per sviluppo)
# =============================================================================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "piattaforma.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True
    )
