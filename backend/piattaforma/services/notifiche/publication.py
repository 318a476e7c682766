# =============================================================================
# PIATTAFORMA B2B - NOTIFICA PUBBLICAZIONE CATALOGO
# =============================================================================
# Fan-out per destinatario (notifica in-app + email) dopo il commit del
# passaggio a 'pubblicato'. Best-effort, at-most-once.
# =============================================================================

import logging
import math
from concurrent.futures import ThreadPoolExecutor, wait
from typing import List

from .constants import TipoNotifica, CanaleNotifica
from .models import CatalogoDettaglio, Destinatario, RecipientOutcome, PublicationResult
from .recipients import resolve_active_clients_for_brand
from ..cataloghi.formatter import format_subject, format_body
from ..email import EmailSender, EmailType
from ...config import Settings, config as default_config
from ...database_pg import DatabaseGateway
from ...exceptions import PiattaformaException, CatalogoNotFoundError
from ...persistence.repositories import CataloghiRepository, NotificheRepository

logger = logging.getLogger(__name__)


class PublicationNotifier:
    """
    Notifica ai clienti attivi del brand la pubblicazione di un catalogo.

    Ogni destinatario è un task del pool (max_workers), con una propria
    connessione e transazione per la notifica. L'email usa send_timeout
    come timeout socket SMTP. Gli errori restano confinati al destinatario
    e finiscono in PublicationResult.errori.

    Uso:
        notifier = PublicationNotifier(gateway, EmailSender(config))
        result = notifier.notify_catalog_publication(catalogo_id, brand_id)
        result.to_dict()
    """

    def __init__(
        self,
        gateway: DatabaseGateway,
        email_sender: EmailSender,
        max_workers: int = None,
        send_timeout: float = None,
        settings: Settings = None
    ):
        settings = settings or default_config
        self.gateway = gateway
        self.email_sender = email_sender
        # una connessione del pool resta alla richiesta che pubblica
        self.max_workers = max(1, min(max_workers or settings.NOTIFY_MAX_WORKERS,
                                      settings.PG_POOL_MAX - 1))
        self.send_timeout = send_timeout or settings.EMAIL_SEND_TIMEOUT

    def notify_catalog_publication(self, catalogo_id: int, brand_id: str) -> PublicationResult:
        """
        Esegue il fan-out della pubblicazione.

        Raises:
            CatalogoNotFoundError: catalogo inesistente
            DatabaseConnectionError, QueryError: errore in caricamento o
                risoluzione destinatari (nessun side effect eseguito)
        """
        with self.gateway.connection() as db:
            row = CataloghiRepository(db).get_dettaglio_pubblicazione(catalogo_id)
            if not row:
                raise CatalogoNotFoundError(detail=f"Catalogo {catalogo_id} non trovato")
            catalogo = CatalogoDettaglio.from_row(row)
            destinatari = resolve_active_clients_for_brand(db, brand_id)

        result = PublicationResult(
            catalogo_id=catalogo_id,
            brand_id=brand_id,
            destinatari=len(destinatari),
        )

        if not destinatari:
            logger.info("Catalogo %s pubblicato: nessun cliente attivo per brand %s",
                        catalogo.codice, brand_id)
            return result

        logger.info("Catalogo %s pubblicato: notifica a %d destinatari",
                    catalogo.codice, len(destinatari))

        result.esiti = self._fan_out(catalogo, destinatari)

        logger.info(
            "Fan-out %s completato: %d notifiche, %d email inviate, %d saltate, %d errori",
            catalogo.codice, result.notifiche_create, result.email_inviate,
            result.email_saltate, len(result.errori)
        )
        return result

    # =========================================================================
    # FAN-OUT
    # =========================================================================

    def _fan_out(self, catalogo: CatalogoDettaglio,
                 destinatari: List[Destinatario]) -> List[RecipientOutcome]:
        subject = format_subject(catalogo)
        message = format_body(catalogo)
        workers = min(self.max_workers, len(destinatari))

        # ogni ondata del pool ha send_timeout, più un'ondata per le insert
        deadline = self.send_timeout * (math.ceil(len(destinatari) / workers) + 1)

        esiti = [RecipientOutcome(user_id=d.user_id, email=d.email) for d in destinatari]
        executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix='notify')
        try:
            futures = [
                executor.submit(self._dispatch, catalogo, d, esito, subject, message)
                for d, esito in zip(destinatari, esiti)
            ]
            wait(futures, timeout=deadline)
        finally:
            # i task in corso non vengono attesi, quelli in coda non partono
            executor.shutdown(wait=False, cancel_futures=True)

        for future, esito in zip(futures, esiti):
            if future.cancelled():
                motivo = f"non avviato entro {deadline:g}s"
            elif not future.done():
                motivo = f"timeout dopo {deadline:g}s"
            elif future.exception() is not None:
                motivo = str(future.exception())
            else:
                motivo = "esito mancante"

            mancanti = esito.chiudi(motivo)
            if mancanti:
                logger.error("Fan-out %s: destinatario %s senza esito %s: %s",
                             catalogo.codice, esito.email, mancanti, motivo)

        return esiti

    def _dispatch(self, catalogo: CatalogoDettaglio, d: Destinatario, esito: RecipientOutcome,
                  subject: str, message: str) -> None:
        """Notifica + email per un destinatario; i due side effect sono indipendenti."""
        try:
            with self.gateway.connection() as db:
                with db.transaction():
                    row = NotificheRepository(db).insert(
                        user_id=d.user_id,
                        tipo=TipoNotifica.CATALOG_ADDED,
                        icon=TipoNotifica.ICONS[TipoNotifica.CATALOG_ADDED],
                        color=TipoNotifica.COLORS[TipoNotifica.CATALOG_ADDED],
                        message=message,
                        brand_id=catalogo.brand_id,
                        brand_name=catalogo.brand_name,
                    )
            esito.registra_notifica(row['id'])
        except PiattaformaException as e:
            esito.registra_errore(CanaleNotifica.NOTIFICA, e.detail)
            logger.error("Notifica catalogo %s per utente %s fallita: %s",
                         catalogo.codice, d.user_id, e.detail)

        try:
            risposta = self.email_sender.send_email(
                to=d.email,
                subject=subject,
                template=EmailType.CATALOG_PUBLISHED,
                data={
                    'userName': d.nome_completo,
                    'brandName': catalogo.brand_name,
                    'catalogName': catalogo.nome or '',
                    'catalogCode': catalogo.codice,
                },
                timeout=self.send_timeout,
            )
        except Exception as e:
            logger.exception("Email catalogo %s a %s: errore inatteso", catalogo.codice, d.email)
            risposta = {'success': False, 'error': str(e)}

        if risposta.get('success') or risposta.get('skipped'):
            registrato = esito.registra_email(
                inviata=bool(risposta.get('success')),
                saltata=bool(risposta.get('skipped')),
            )
        else:
            registrato = esito.registra_errore(
                CanaleNotifica.EMAIL, risposta.get('error') or 'invio fallito'
            )
            logger.error("Email catalogo %s a %s fallita: %s",
                         catalogo.codice, d.email, risposta.get('error'))

        if not registrato:
            logger.warning("Email catalogo %s a %s conclusa dopo la scadenza del fan-out",
                           catalogo.codice, d.email)
