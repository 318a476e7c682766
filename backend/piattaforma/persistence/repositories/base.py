# =============================================================================
# PIATTAFORMA B2B - BASE REPOSITORY
# =============================================================================
# Classe base per il Repository Pattern
# =============================================================================

from typing import Generic, TypeVar, Optional, List, Dict, Any
from abc import ABC


T = TypeVar('T')


class BaseRepository(ABC, Generic[T]):
    """
    Repository base con operazioni comuni, legato a una connessione.

    La connessione è quella della richiesta (o del worker) corrente:
    il repository non apre né chiude transazioni.

    Attributes:
        table_name: Nome della tabella principale
        primary_key: Nome della chiave primaria (default: 'id')
    """

    table_name: str = ''
    primary_key: str = 'id'

    def __init__(self, db):
        self.db = db

    def exists(self, id_value: Any) -> bool:
        """Verifica se record esiste."""
        row = self._execute_one(
            f"SELECT 1 AS found FROM {self.table_name} WHERE {self.primary_key} = %s",
            (id_value,)
        )
        return row is not None

    def count(self, where: str = None, params: tuple = None) -> int:
        """
        Conta record con condizione opzionale.

        Args:
            where: Clausola WHERE (senza 'WHERE')
            params: Parametri per la query

        Returns:
            Conteggio record
        """
        query = f"SELECT COUNT(*) AS cnt FROM {self.table_name}"
        if where:
            query += f" WHERE {where}"
        return int(self._execute_scalar(query, params) or 0)

    def _execute_query(self, query: str, params: tuple = None) -> List[Dict[str, Any]]:
        """Esegue query e ritorna lista di dict."""
        return self.db.execute(query, params).fetchall()

    def _execute_one(self, query: str, params: tuple = None) -> Optional[Dict[str, Any]]:
        """Esegue query e ritorna singolo dict."""
        return self.db.execute(query, params).fetchone()

    def _execute_scalar(self, query: str, params: tuple = None) -> Any:
        """Esegue query e ritorna il primo valore della prima riga."""
        row = self.db.execute(query, params).fetchone()
        if not row:
            return None
        return next(iter(row.values()))
