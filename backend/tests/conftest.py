# =============================================================================
# PIATTAFORMA B2B - TEST CONFIGURATION
# =============================================================================
# Global fixtures e configurazioni per pytest.
# Il database è SQLite in memoria dietro la stessa interfaccia di
# PostgreSQLConnection: cambia solo lo stile dei placeholder e il lock di riga.
# =============================================================================

import sqlite3
import threading
from contextlib import contextmanager
from typing import Generator, Dict, Any, Iterable, List

import pytest
from fastapi.testclient import TestClient

from piattaforma.config import Settings
from piattaforma.database_pg import (
    DatabaseGateway,
    PostgreSQLConnection,
    PostgreSQLCursor,
    SCHEMA_PATH,
)
from piattaforma.main import create_app
from piattaforma.persistence.repositories import CataloghiRepository
from piattaforma.services.notifiche import PublicationNotifier

from factories import BrandFactory, CatalogoFactory, UtenteFactory, ClienteFactory
from fakes import FakeEmailSender


# =============================================================================
# SQLITE ADAPTER
# =============================================================================

class _BufferedCursor:
    """Righe lette subito: la connessione sqlite è condivisa fra thread."""

    def __init__(self, cursor):
        self._rows = cursor.fetchall() if cursor.description else []
        self.rowcount = cursor.rowcount
        cursor.close()

    def fetchone(self):
        return self._rows[0] if self._rows else None

    def fetchall(self):
        return list(self._rows)

    def close(self):
        pass


class SQLiteConnection(PostgreSQLConnection):
    """
    PostgreSQLConnection su sqlite3.

    Il lock (condiviso dal gateway) è tenuto per ogni statement e per
    l'intera durata di una transazione esplicita.
    """

    connection_errors = ()
    integrity_errors = (sqlite3.IntegrityError,)
    query_errors = (sqlite3.Error,)

    def __init__(self, conn, lock):
        super().__init__(conn)
        self._lock = lock

    def _new_cursor(self):
        return self._conn.cursor()

    def _prepare(self, sql: str) -> str:
        return sql.replace('%s', '?').replace(' FOR UPDATE', '')

    def execute(self, sql: str, params=None) -> PostgreSQLCursor:
        with self._lock:
            cursor = self._new_cursor()
            try:
                if params:
                    cursor.execute(self._prepare(sql), tuple(params))
                else:
                    cursor.execute(self._prepare(sql))
                return PostgreSQLCursor(_BufferedCursor(cursor))
            except self.query_errors as e:
                cursor.close()
                raise self._translate(e, sql) from e

    def begin(self):
        self._lock.acquire()
        try:
            super().begin()
        except BaseException:
            self._lock.release()
            raise

    def commit(self):
        was_open = self.in_transaction
        super().commit()
        if was_open:
            self._lock.release()

    def rollback(self):
        was_open = self.in_transaction
        try:
            super().rollback()
        finally:
            if was_open:
                self._lock.release()


class SQLiteGateway(DatabaseGateway):
    """Gateway su un unico database SQLite in memoria."""

    def __init__(self, settings: Settings):
        super().__init__(settings)
        self.lock = threading.RLock()
        self.raw = sqlite3.connect(":memory:", isolation_level=None, check_same_thread=False)
        self.raw.row_factory = sqlite3.Row
        self.raw.execute("PRAGMA foreign_keys = ON")
        schema = SCHEMA_PATH.read_text(encoding='utf-8')
        self.raw.executescript(
            schema.replace('SERIAL PRIMARY KEY', 'INTEGER PRIMARY KEY AUTOINCREMENT')
        )

    def open(self):
        pass

    def close(self):
        pass

    def dispose(self):
        self.raw.close()

    @contextmanager
    def connection(self):
        conn = SQLiteConnection(self.raw, self.lock)
        try:
            yield conn
        finally:
            if conn.in_transaction:
                conn.rollback()

    def missing_tables(self, db) -> List[str]:
        rows = db.execute(
            "SELECT name AS table_name FROM sqlite_master WHERE type = 'table'"
        ).fetchall()
        present = {row['table_name'] for row in rows}
        return [t for t in ('brands', 'users', 'clients', 'client_brands',
                            'cataloghi', 'notifications') if t not in present]


# =============================================================================
# SEED HELPERS
# =============================================================================

class Seeder:
    """Inserisce dati di test generati dalle factories."""

    def __init__(self, db):
        self.db = db

    def brand(self, **kwargs) -> Dict[str, Any]:
        data = BrandFactory(**kwargs)
        return self.db.execute(
            "INSERT INTO brands (id, name, description, logo) VALUES (%s, %s, %s, %s) RETURNING *",
            (data['id'], data['name'], data['description'], data['logo'])
        ).fetchone()

    def utente(self, **kwargs) -> Dict[str, Any]:
        data = UtenteFactory(**kwargs)
        return self.db.execute("""
            INSERT INTO users (email, password, nome, cognome, ruolo, attivo)
            VALUES (%s, %s, %s, %s, %s, %s) RETURNING *
        """, (data['email'], data['password'], data['nome'], data['cognome'],
              data['ruolo'], data['attivo'])).fetchone()

    def cliente(self, brand_ids: Iterable[str] = (), utente: Dict[str, Any] = None,
                utente_attivo: bool = True, **kwargs) -> Dict[str, Any]:
        """Cliente (con utente proprio se non fornito) associato ai brand."""
        utente = utente or self.utente(attivo=utente_attivo)
        data = ClienteFactory(user_id=utente['id'], **kwargs)
        cliente = self.db.execute("""
            INSERT INTO clients (user_id, company_name, vat_number, pec, phone, stato)
            VALUES (%s, %s, %s, %s, %s, %s) RETURNING *
        """, (data['user_id'], data['company_name'], data['vat_number'],
              data['pec'], data['phone'], data['stato'])).fetchone()
        for brand_id in brand_ids:
            self.db.execute(
                "INSERT INTO client_brands (client_id, brand_id) VALUES (%s, %s)",
                (cliente['id'], brand_id)
            )
        cliente['utente'] = utente
        return cliente

    def catalogo(self, **kwargs) -> Dict[str, Any]:
        return CataloghiRepository(self.db).insert(CatalogoFactory(**kwargs))

    def notifica(self, user_id: int, message: str = "Test", brand: Dict[str, Any] = None,
                 read: bool = False) -> Dict[str, Any]:
        return self.db.execute("""
            INSERT INTO notifications
                (user_id, type, icon, color, brand_id, brand_name, message, read)
            VALUES (%s, 'SYSTEM', 'Info', 'gray', %s, %s, %s, %s)
            RETURNING *
        """, (user_id, brand['id'] if brand else None, None, message, read)).fetchone()


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def settings() -> Settings:
    s = Settings()
    s.NOTIFY_MAX_WORKERS = 4
    s.EMAIL_SEND_TIMEOUT = 5.0
    s.SMTP_HOST = ""
    return s


@pytest.fixture
def gateway(settings) -> Generator[SQLiteGateway, None, None]:
    gw = SQLiteGateway(settings)
    yield gw
    gw.dispose()


@pytest.fixture
def db(gateway):
    """Connessione per test diretti su servizi e repository."""
    with gateway.connection() as conn:
        yield conn


@pytest.fixture
def seed(db) -> Seeder:
    return Seeder(db)


@pytest.fixture
def email_sender() -> FakeEmailSender:
    return FakeEmailSender()


@pytest.fixture
def notifier(gateway, email_sender) -> PublicationNotifier:
    return PublicationNotifier(gateway, email_sender, max_workers=4, send_timeout=5.0)


@pytest.fixture
def client(gateway, email_sender, settings) -> Generator[TestClient, None, None]:
    """TestClient con lifespan, sullo stesso database dei fixture."""
    app = create_app(gateway=gateway, email_sender=email_sender, settings=settings)
    with TestClient(app) as c:
        yield c


# =============================================================================
# MARKER CONFIGURATION
# =============================================================================

def pytest_configure(config):
    """
    Configura marker personalizzati.
    """
    config.addinivalue_line(
        "markers", "integration: test di integrazione (database SQLite in memoria)"
    )
    config.addinivalue_line(
        "markers", "unit: test unitari isolati"
    )
