# =============================================================================
# PIATTAFORMA B2B - DATABASE GATEWAY (PostgreSQL)
# =============================================================================
# Pool di connessioni posseduto dall'applicazione, transazioni esplicite
# (BEGIN/COMMIT/ROLLBACK) e traduzione errori driver -> eccezioni dominio
# =============================================================================

import logging
import pathlib
import threading
from contextlib import contextmanager
from typing import Optional, Dict, Any, List, Iterator

import psycopg2
from psycopg2 import pool
from psycopg2.extras import RealDictCursor

from .config import Settings
from .exceptions import (
    DatabaseConnectionError,
    QueryError,
    IntegrityViolationError,
)

logger = logging.getLogger(__name__)

SCHEMA_PATH = pathlib.Path(__file__).parent.parent / 'migrations' / 'init_schema.sql'

REQUIRED_TABLES = ('brands', 'users', 'clients', 'client_brands', 'cataloghi', 'notifications')


# =============================================================================
# CURSOR / CONNESSIONE
# =============================================================================

class PostgreSQLCursor:
    """Wrapper cursor: righe sempre restituite come dict."""

    def __init__(self, cursor):
        self._cursor = cursor
        self.rowcount = cursor.rowcount

    def fetchone(self) -> Optional[Dict[str, Any]]:
        try:
            row = self._cursor.fetchone()
        finally:
            self._cursor.close()
        return dict(row) if row is not None else None

    def fetchall(self) -> List[Dict[str, Any]]:
        try:
            rows = self._cursor.fetchall()
        finally:
            self._cursor.close()
        return [dict(row) for row in rows]

    def close(self):
        self._cursor.close()


class PostgreSQLConnection:
    """
    Connessione presa dal pool, in modalità autocommit.

    Le transazioni sono esplicite: begin()/commit()/rollback() oppure
    il context manager transaction(). Gli errori del driver vengono
    tradotti in DatabaseConnectionError / QueryError.
    """

    connection_errors = (psycopg2.OperationalError, psycopg2.InterfaceError)
    integrity_errors = (psycopg2.IntegrityError,)
    query_errors = (psycopg2.Error,)

    def __init__(self, conn):
        self._conn = conn
        self.in_transaction = False

    def _new_cursor(self):
        return self._conn.cursor(cursor_factory=RealDictCursor)

    def _prepare(self, sql: str) -> str:
        return sql

    def _translate(self, exc: Exception, sql: str) -> Exception:
        statement = " ".join(sql.split())[:120]
        if isinstance(exc, self.connection_errors):
            return DatabaseConnectionError(detail=f"Connessione persa: {exc}")
        if isinstance(exc, self.integrity_errors):
            return IntegrityViolationError(detail=str(exc).strip(), extra={"query": statement})
        return QueryError(detail=str(exc).strip(), extra={"query": statement})

    def execute(self, sql: str, params=None) -> PostgreSQLCursor:
        """Esegue una query parametrizzata (placeholder %s)."""
        try:
            cursor = self._new_cursor()
        except self.query_errors as e:
            raise self._translate(e, sql) from e

        try:
            if params:
                cursor.execute(self._prepare(sql), tuple(params))
            else:
                cursor.execute(self._prepare(sql))
        except self.query_errors as e:
            cursor.close()
            raise self._translate(e, sql) from e

        return PostgreSQLCursor(cursor)

    def begin(self):
        """Apre una transazione esplicita."""
        self.execute("BEGIN").close()
        self.in_transaction = True

    def commit(self):
        """Commit della transazione corrente."""
        if self.in_transaction:
            self.execute("COMMIT").close()
            self.in_transaction = False

    def rollback(self):
        """Rollback della transazione corrente."""
        if self.in_transaction:
            self.in_transaction = False
            self.execute("ROLLBACK").close()

    @contextmanager
    def transaction(self) -> Iterator['PostgreSQLConnection']:
        """BEGIN, COMMIT se il blocco termina, ROLLBACK su qualsiasi errore."""
        self.begin()
        try:
            yield self
        except BaseException:
            try:
                self.rollback()
            except DatabaseConnectionError:
                logger.warning("Rollback impossibile: connessione persa")
            raise
        else:
            self.commit()


# =============================================================================
# GATEWAY
# =============================================================================

class DatabaseGateway:
    """
    Possiede il connection pool per tutta la vita del processo.

    Uso:
        gateway = DatabaseGateway(config)
        gateway.open()
        with gateway.connection() as db:
            with db.transaction():
                db.execute(...)
        gateway.close()
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self._pool: Optional[pool.ThreadedConnectionPool] = None
        self._slots: Optional[threading.BoundedSemaphore] = None

    @property
    def is_open(self) -> bool:
        return self._pool is not None

    def open(self):
        """Inizializza il connection pool PostgreSQL."""
        if self.is_open:
            return

        try:
            self._pool = pool.ThreadedConnectionPool(
                minconn=self.settings.PG_POOL_MIN,
                maxconn=self.settings.PG_POOL_MAX,
                host=self.settings.PG_HOST,
                port=self.settings.PG_PORT,
                database=self.settings.PG_DATABASE,
                user=self.settings.PG_USER,
                password=self.settings.PG_PASSWORD
            )
        except psycopg2.OperationalError as e:
            raise DatabaseConnectionError(detail=f"Impossibile aprire il pool: {e}") from e

        # getconn oltre maxconn solleva PoolError: i thread attendono uno slot
        self._slots = threading.BoundedSemaphore(self.settings.PG_POOL_MAX)

        logger.info(
            "PostgreSQL pool: %s:%s/%s",
            self.settings.PG_HOST, self.settings.PG_PORT, self.settings.PG_DATABASE
        )

    def close(self):
        """Chiude il connection pool."""
        if self._pool is not None:
            self._pool.closeall()
            self._pool = None
            self._slots = None

    @contextmanager
    def connection(self) -> Iterator[PostgreSQLConnection]:
        """Preleva una connessione dal pool e la restituisce sempre."""
        if not self.is_open:
            raise DatabaseConnectionError(detail="Connection pool non inizializzato")

        slots = self._slots
        if not slots.acquire(timeout=self.settings.PG_POOL_TIMEOUT):
            raise DatabaseConnectionError(
                detail=f"Nessuna connessione libera entro {self.settings.PG_POOL_TIMEOUT:g}s"
            )

        try:
            raw_conn = self._pool.getconn()
        except (psycopg2.OperationalError, pool.PoolError) as e:
            slots.release()
            raise DatabaseConnectionError(detail=f"Nessuna connessione disponibile: {e}") from e

        raw_conn.autocommit = True
        conn = PostgreSQLConnection(raw_conn)
        broken = False
        try:
            yield conn
        except DatabaseConnectionError:
            broken = True
            raise
        finally:
            if conn.in_transaction and not broken:
                try:
                    conn.rollback()
                except DatabaseConnectionError:
                    broken = True
            try:
                self._pool.putconn(raw_conn, close=broken)
            finally:
                slots.release()

    # =========================================================================
    # INIZIALIZZAZIONE SCHEMA
    # =========================================================================

    def missing_tables(self, db: PostgreSQLConnection) -> List[str]:
        rows = db.execute("""
            SELECT table_name FROM information_schema.tables
            WHERE table_schema = 'public'
        """).fetchall()
        present = {row['table_name'] for row in rows}
        return [t for t in REQUIRED_TABLES if t not in present]

    def init_schema(self, script_path: pathlib.Path = SCHEMA_PATH) -> bool:
        """Crea lo schema se mancano tabelle. Ritorna True se eseguito."""
        with self.connection() as db:
            missing = self.missing_tables(db)
            if not missing:
                logger.info("Schema database completo (%d tabelle)", len(REQUIRED_TABLES))
                return False

            logger.info("Tabelle mancanti %s - creazione da %s", missing, script_path.name)
            schema_sql = script_path.read_text(encoding='utf-8')
            with db.transaction():
                db.execute(schema_sql)
            return True

    def ping(self) -> bool:
        """Verifica connettività (health check)."""
        with self.connection() as db:
            row = db.execute("SELECT 1 AS ok").fetchone()
        return bool(row and row['ok'] == 1)
