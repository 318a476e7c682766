"""
SMTP provider - Invio via smtplib con SSL implicito o STARTTLS.
"""

import logging
import smtplib
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from email.utils import formataddr
from typing import Optional

from .base import BaseEmailProvider
from ..constants import SMTP_SSL_PORT, SMTP_TIMEOUT

logger = logging.getLogger(__name__)


class SmtpProvider(BaseEmailProvider):
    """Provider SMTP generico (Aruba, Gmail, Office365, ...)"""

    def _validate_config(self) -> None:
        """Valida presenza host e credenziali"""
        missing = [k for k in ('smtp_host', 'smtp_user', 'smtp_password')
                   if not self.config.get(k)]
        if missing:
            raise ValueError(
                f"Configurazione SMTP incompleta ({', '.join(missing)}). "
                "Configurare SMTP_HOST/SMTP_USER/SMTP_PASS nel file .env"
            )

    def connect_smtp(self, timeout: Optional[float] = None) -> smtplib.SMTP:
        """Connessione SMTP: SSL implicito o STARTTLS secondo config"""
        host = self.config['smtp_host']
        port = int(self.config.get('smtp_port', SMTP_SSL_PORT))
        timeout = timeout or self.config.get('timeout', SMTP_TIMEOUT)

        if self.config.get('smtp_use_ssl', True):
            server = smtplib.SMTP_SSL(host, port, timeout=timeout)
        else:
            server = smtplib.SMTP(host, port, timeout=timeout)
            if self.config.get('smtp_use_tls', False):
                server.starttls()

        server.login(self.config['smtp_user'], self.config['smtp_password'])
        return server

    def send_email(self, to: str, subject: str, body_html: str,
                   body_text: Optional[str] = None,
                   timeout: Optional[float] = None) -> bool:
        """Invia email via SMTP"""
        msg = MIMEMultipart('alternative')
        msg['Subject'] = subject

        sender_email = self.config.get('smtp_from') or self.config['smtp_user']
        msg['From'] = formataddr((self.config.get('smtp_sender_name', ''), sender_email))
        msg['To'] = to

        # text prima di html: i client mostrano l'ultima alternativa supportata
        if body_text:
            msg.attach(MIMEText(body_text, 'plain', 'utf-8'))
        msg.attach(MIMEText(body_html, 'html', 'utf-8'))

        server = self.connect_smtp(timeout)
        try:
            server.send_message(msg)
            return True
        finally:
            try:
                server.quit()
            except (smtplib.SMTPException, OSError):
                logger.debug("Chiusura SMTP non pulita verso %s", to)

