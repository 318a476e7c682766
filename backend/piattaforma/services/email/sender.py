"""
Email sender - Servizio invio email basato su template.
"""

import logging
import smtplib
from typing import Dict, Any, Optional

from ...config import Settings, config as default_config
from .constants import EmailStatus, EmailType
from .providers.smtp import SmtpProvider
from .templates import render_template

logger = logging.getLogger(__name__)


class EmailSender:
    """
    Servizio invio email da template.

    Non solleva mai per errori di trasporto: l'esito è sempre un dict.

    Uso:
        sender = EmailSender(config)
        result = sender.send_email(
            to='cliente@example.com',
            subject='Acme FW25 Preorders Open Now!',
            template='catalog-published',
            data={'userName': 'Mario Rossi', 'brandName': 'Acme', ...}
        )
        # {'success': True, 'status': 'sent'}
    """

    def __init__(self, settings: Settings = None):
        self.settings = settings or default_config
        self._provider = None

    @property
    def is_configured(self) -> bool:
        """True se host e credenziali SMTP sono presenti."""
        s = self.settings
        return bool(s.SMTP_HOST and s.SMTP_USER and s.SMTP_PASSWORD)

    @property
    def provider(self) -> SmtpProvider:
        """Lazy load provider con config da Settings"""
        if self._provider is None:
            s = self.settings
            self._provider = SmtpProvider({
                'smtp_host': s.SMTP_HOST,
                'smtp_port': s.SMTP_PORT,
                'smtp_user': s.SMTP_USER,
                'smtp_password': s.SMTP_PASSWORD,
                'smtp_from': s.SMTP_FROM,
                'smtp_sender_name': s.SMTP_SENDER_NAME,
                'smtp_use_ssl': s.SMTP_USE_SSL,
                'smtp_use_tls': s.SMTP_USE_TLS,
                'timeout': s.EMAIL_SEND_TIMEOUT,
            })
        return self._provider

    def send_email(self, to: str, subject: Optional[str], template: str,
                   data: Dict[str, Any], timeout: Optional[float] = None) -> Dict[str, Any]:
        """
        Renderizza il template e invia.

        Args:
            to: Destinatario
            subject: Oggetto (None = oggetto di default del template)
            template: Nome template (da EmailType)
            data: Valori per i placeholder
            timeout: Timeout socket SMTP (default EMAIL_SEND_TIMEOUT)

        Returns:
            Dict con 'success', 'status' ed eventuale 'skipped' / 'error'
        """
        if not self.is_configured:
            logger.warning(
                "SMTP non configurato: email '%s' a %s non inviata", template, to
            )
            return {'success': False, 'skipped': True, 'status': EmailStatus.SKIPPED}

        try:
            default_subject, body_html, body_text = render_template(template, data)
        except ValueError as e:
            logger.error("Template email non valido: %s", e)
            return {'success': False, 'status': EmailStatus.FAILED, 'error': str(e)}

        subject = subject or default_subject
        try:
            self.provider.send_email(to, subject, body_html, body_text, timeout=timeout)
        except (smtplib.SMTPException, OSError, ValueError) as e:
            logger.error("Invio email a %s fallito (%s): %s", to, template, e)
            return {'success': False, 'status': EmailStatus.FAILED, 'error': str(e)}

        logger.info("Email '%s' inviata a %s", template, to)
        return {'success': True, 'status': EmailStatus.SENT}

    def send_test_email(self, to: str) -> Dict[str, Any]:
        """Invia email di test."""
        return self.send_email(to, None, EmailType.TEST, {})
