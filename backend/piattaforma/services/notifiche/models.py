# =============================================================================
# PIATTAFORMA B2B - NOTIFICHE MODELS
# =============================================================================
# Dataclasses per destinatari ed esito del fan-out di pubblicazione
# =============================================================================

import threading
from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field

from .constants import CanaleNotifica
from ...exceptions import NotificationDispatchError


@dataclass(frozen=True)
class Destinatario:
    """Utente di un cliente attivo associato al brand."""
    user_id: int
    email: str
    nome: Optional[str]
    cognome: Optional[str]
    client_id: int
    company_name: str

    @property
    def nome_completo(self) -> str:
        return " ".join(p for p in (self.nome, self.cognome) if p)

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> 'Destinatario':
        return cls(
            user_id=row['user_id'],
            email=row['email'],
            nome=row.get('nome'),
            cognome=row.get('cognome'),
            client_id=row['client_id'],
            company_name=row['company_name'],
        )


@dataclass(frozen=True)
class CatalogoDettaglio:
    """Catalogo con nome brand, input del formatter."""
    id: int
    codice: str
    nome: Optional[str]
    tipo: str
    stagione: str
    anno: int
    brand_id: str
    brand_name: str

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> 'CatalogoDettaglio':
        return cls(
            id=row['id'],
            codice=row['codice'],
            nome=row.get('nome'),
            tipo=row['tipo'],
            stagione=row['stagione'],
            anno=int(row['anno']),
            brand_id=row['brand_id'],
            brand_name=row['brand_name'],
        )


@dataclass
class RecipientOutcome:
    """
    Esito dei due side effect per un destinatario.

    Scritto dal worker e chiuso dal notifier alla scadenza: dopo chiudi()
    gli esiti tardivi del worker vengono ignorati.
    """
    user_id: int
    email: str
    notifica_id: Optional[int] = None
    email_inviata: bool = False
    email_saltata: bool = False
    errori: List[NotificationDispatchError] = field(default_factory=list)
    chiuso: bool = False
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False,
                                  repr=False, compare=False)

    def _concluso(self, canale: str) -> bool:
        if any(e.canale == canale for e in self.errori):
            return True
        if canale == CanaleNotifica.NOTIFICA:
            return self.notifica_id is not None
        return self.email_inviata or self.email_saltata

    def registra_notifica(self, notifica_id: int) -> bool:
        with self._lock:
            if self.chiuso:
                return False
            self.notifica_id = notifica_id
            return True

    def registra_email(self, inviata: bool = False, saltata: bool = False) -> bool:
        with self._lock:
            if self.chiuso:
                return False
            self.email_inviata = inviata
            self.email_saltata = saltata
            return True

    def registra_errore(self, canale: str, errore: str) -> bool:
        with self._lock:
            if self.chiuso:
                return False
            self.errori.append(NotificationDispatchError(self.user_id, canale, errore))
            return True

    def chiudi(self, motivo: str) -> List[str]:
        """
        Congela l'esito. I canali ancora senza esito diventano errori con motivo.

        Returns:
            Canali segnati come falliti alla chiusura
        """
        with self._lock:
            self.chiuso = True
            mancanti = [c for c in (CanaleNotifica.NOTIFICA, CanaleNotifica.EMAIL)
                        if not self._concluso(c)]
            for canale in mancanti:
                self.errori.append(NotificationDispatchError(self.user_id, canale, motivo))
            return mancanti


@dataclass
class PublicationResult:
    """
    Risultato aggregato di notify_catalog_publication.

    success riflette solo il caricamento catalogo e la risoluzione
    destinatari; gli errori dei singoli destinatari finiscono in errori
    e rendono il risultato parziale.
    """
    catalogo_id: int
    brand_id: str
    success: bool = True
    destinatari: int = 0
    esiti: List[RecipientOutcome] = field(default_factory=list)

    @property
    def notifiche_create(self) -> int:
        return sum(1 for e in self.esiti if e.notifica_id is not None)

    @property
    def email_inviate(self) -> int:
        return sum(1 for e in self.esiti if e.email_inviata)

    @property
    def email_saltate(self) -> int:
        return sum(1 for e in self.esiti if e.email_saltata)

    @property
    def errori(self) -> List[NotificationDispatchError]:
        return [err for e in self.esiti for err in e.errori]

    @property
    def parziale(self) -> bool:
        return bool(self.errori)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'success': self.success,
            'parziale': self.parziale,
            'catalogo_id': self.catalogo_id,
            'brand_id': self.brand_id,
            'destinatari': self.destinatari,
            'notifiche_create': self.notifiche_create,
            'email_inviate': self.email_inviate,
            'email_saltate': self.email_saltate,
            'errori': [err.to_dict() for err in self.errori],
        }
