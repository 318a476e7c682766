"""
Interfaccia dei provider email (solo invio).

Un provider riceve la configurazione già letta da Settings, la valida
alla costruzione e invia un singolo messaggio per chiamata. Gli errori
di trasporto vengono propagati: è EmailSender a trasformarli in esito.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, Optional


class BaseEmailProvider(ABC):
    """Provider di invio con config validata in __init__."""

    def __init__(self, config: Dict[str, Any]):
        self.config = config
        self._validate_config()

    @abstractmethod
    def _validate_config(self) -> None:
        """ValueError se mancano parametri obbligatori."""

    @abstractmethod
    def send_email(self, to: str, subject: str, body_html: str,
                   body_text: Optional[str] = None,
                   timeout: Optional[float] = None) -> bool:
        """
        Invia un messaggio multipart (testo + HTML).

        Args:
            to: Destinatario
            subject: Oggetto
            body_html: Corpo HTML
            body_text: Alternativa testo semplice
            timeout: Timeout socket in secondi, None per il default del provider

        Returns:
            True a invio accettato dal server
        """
