"""Transaction and settings persistence: in-memory demo store and SQLite store."""

import logging
import sqlite3
import threading
import uuid
from abc import ABC, abstractmethod
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Iterator, Optional, Sequence

from ..data.models import Currency, FxRateKind, Transaction, TransactionInput, TransactionKind
from ..data.settings import Settings, SettingsPatch, merge_settings
from ..errors import PersistenceError
from ..metrics.conversion import build_transaction
from ..utils.time import format_iso_date, parse_iso_date

IdFactory = Callable[[], str]


def new_transaction_id() -> str:
    return str(uuid.uuid4())


class TransactionStore(ABC):
    """
    Storage contract used by the engine.

    Stores assign identifiers and derive ``usd_equivalent`` through
    ``build_transaction``; whatever they return is persisted unmodified.
    Updates replace the whole record.
    """

    def __init__(self, default_settings: Optional[Settings] = None,
                 id_factory: Optional[IdFactory] = None):
        self.default_settings = default_settings or Settings()
        self.id_factory = id_factory or new_transaction_id
        self._lock = threading.Lock()

    @abstractmethod
    def list_transactions(self) -> list[Transaction]:
        """All transactions in insertion order."""

    @abstractmethod
    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        """A transaction by id, None if unknown."""

    @abstractmethod
    def create_transaction(self, data: TransactionInput) -> Transaction:
        """Assign an id, derive the USD equivalent and store."""

    @abstractmethod
    def update_transaction(self, transaction_id: str,
                           data: TransactionInput) -> Optional[Transaction]:
        """Replace a transaction wholesale, None if the id is unknown."""

    @abstractmethod
    def delete_transaction(self, transaction_id: str) -> bool:
        """Remove a transaction, False if the id is unknown."""

    @abstractmethod
    def get_settings(self) -> Settings:
        """Current settings."""

    @abstractmethod
    def update_settings(self, patch: SettingsPatch) -> Settings:
        """Merge a partial update and return the result."""

    @property
    @abstractmethod
    def storage_type(self) -> str:
        """Short name of the backend."""

    def is_demo_mode(self) -> bool:
        """True when data does not survive a restart."""
        return False


class MemoryTransactionStore(TransactionStore):
    """Process-local store used when nothing writable is available (demo mode)."""

    def __init__(self, default_settings: Optional[Settings] = None,
                 id_factory: Optional[IdFactory] = None):
        super().__init__(default_settings, id_factory)
        self._transactions: dict[str, Transaction] = {}
        self._settings = self.default_settings

    def list_transactions(self) -> list[Transaction]:
        with self._lock:
            return list(self._transactions.values())

    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        with self._lock:
            return self._transactions.get(transaction_id)

    def create_transaction(self, data: TransactionInput) -> Transaction:
        transaction = build_transaction(self.id_factory(), data)
        with self._lock:
            self._transactions[transaction.id] = transaction
        return transaction

    def update_transaction(self, transaction_id: str,
                           data: TransactionInput) -> Optional[Transaction]:
        with self._lock:
            if transaction_id not in self._transactions:
                return None
            updated = build_transaction(transaction_id, data)
            self._transactions[transaction_id] = updated
            return updated

    def delete_transaction(self, transaction_id: str) -> bool:
        with self._lock:
            return self._transactions.pop(transaction_id, None) is not None

    def get_settings(self) -> Settings:
        return self._settings

    def update_settings(self, patch: SettingsPatch) -> Settings:
        with self._lock:
            self._settings = merge_settings(self._settings, patch)
            return self._settings

    @property
    def storage_type(self) -> str:
        return "memory"

    def is_demo_mode(self) -> bool:
        return True


class SqliteTransactionStore(TransactionStore):
    """SQLite-backed store; one file holds transactions and the settings row."""

    def __init__(self, db_path: str = "data.db",
                 default_settings: Optional[Settings] = None,
                 id_factory: Optional[IdFactory] = None):
        super().__init__(default_settings, id_factory)
        self.db_path = Path(db_path)
        self.logger = logging.getLogger("inversion.store")

        self._init_database()

    def _init_database(self) -> None:
        """Initialize database schema and the settings row."""
        with self._get_connection("init") as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS transactions (
                    seq INTEGER PRIMARY KEY AUTOINCREMENT,
                    id TEXT NOT NULL UNIQUE,
                    date TEXT NOT NULL,
                    type TEXT NOT NULL,
                    currency TEXT NOT NULL,
                    amount REAL NOT NULL,
                    note TEXT,
                    fx_type TEXT,
                    fx_rate REAL,
                    usd_equivalent REAL,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)

            conn.execute("""
                CREATE TABLE IF NOT EXISTS settings (
                    id INTEGER PRIMARY KEY CHECK (id = 1),
                    selected_benchmark TEXT NOT NULL,
                    benchmark_rate REAL NOT NULL
                )
            """)

            conn.execute("""
                INSERT OR IGNORE INTO settings (id, selected_benchmark, benchmark_rate)
                VALUES (1, ?, ?)
            """, (self.default_settings.selected_benchmark,
                  self.default_settings.benchmark_rate))

            conn.commit()

    @contextmanager
    def _get_connection(self, operation: str) -> Iterator[sqlite3.Connection]:
        """Get database connection, translating driver errors to PersistenceError."""
        conn = None
        try:
            conn = sqlite3.connect(self.db_path, timeout=30.0)
            conn.row_factory = sqlite3.Row
            yield conn
        except sqlite3.Error as e:
            if conn:
                conn.rollback()
            self.logger.error("Database error during %s: %s", operation, e)
            raise PersistenceError(
                f"Database error during {operation}: {e}",
                operation=operation,
                target=str(self.db_path),
            ) from e
        finally:
            if conn:
                conn.close()

    @staticmethod
    def _row_to_transaction(row: sqlite3.Row) -> Transaction:
        return Transaction(
            id=row["id"],
            date=parse_iso_date(row["date"]),
            kind=TransactionKind(row["type"]),
            currency=Currency(row["currency"]),
            amount=row["amount"],
            note=row["note"],
            fx_rate_kind=FxRateKind(row["fx_type"]) if row["fx_type"] else None,
            fx_rate=row["fx_rate"],
            usd_equivalent=row["usd_equivalent"],
        )

    @staticmethod
    def _transaction_values(transaction: Transaction) -> tuple:
        return (
            format_iso_date(transaction.date),
            transaction.kind.value,
            transaction.currency.value,
            transaction.amount,
            transaction.note,
            transaction.fx_rate_kind.value if transaction.fx_rate_kind else None,
            transaction.fx_rate,
            transaction.usd_equivalent,
        )

    def list_transactions(self) -> list[Transaction]:
        with self._get_connection("list") as conn:
            rows = conn.execute("SELECT * FROM transactions ORDER BY seq").fetchall()
            return [self._row_to_transaction(row) for row in rows]

    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        with self._get_connection("get") as conn:
            row = conn.execute(
                "SELECT * FROM transactions WHERE id = ?", (transaction_id,)
            ).fetchone()
            return self._row_to_transaction(row) if row else None

    def create_transaction(self, data: TransactionInput) -> Transaction:
        transaction = build_transaction(self.id_factory(), data)
        now = datetime.now(timezone.utc).isoformat()

        with self._lock, self._get_connection("create") as conn:
            conn.execute("""
                INSERT INTO transactions (
                    date, type, currency, amount, note, fx_type, fx_rate,
                    usd_equivalent, id, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """, self._transaction_values(transaction) + (transaction.id, now, now))
            conn.commit()

        self.logger.info("Transaction stored: %s", transaction.id)
        return transaction

    def update_transaction(self, transaction_id: str,
                           data: TransactionInput) -> Optional[Transaction]:
        updated = build_transaction(transaction_id, data)
        now = datetime.now(timezone.utc).isoformat()

        with self._lock, self._get_connection("update") as conn:
            cursor = conn.execute("""
                UPDATE transactions SET
                    date = ?, type = ?, currency = ?, amount = ?, note = ?,
                    fx_type = ?, fx_rate = ?, usd_equivalent = ?, updated_at = ?
                WHERE id = ?
            """, self._transaction_values(updated) + (now, transaction_id))
            conn.commit()

            if cursor.rowcount == 0:
                return None

        return updated

    def delete_transaction(self, transaction_id: str) -> bool:
        with self._lock, self._get_connection("delete") as conn:
            cursor = conn.execute("DELETE FROM transactions WHERE id = ?", (transaction_id,))
            conn.commit()
            return cursor.rowcount > 0

    def get_settings(self) -> Settings:
        with self._get_connection("get_settings") as conn:
            row = conn.execute(
                "SELECT selected_benchmark, benchmark_rate FROM settings WHERE id = 1"
            ).fetchone()
            if row is None:
                return self.default_settings
            return Settings(
                selected_benchmark=row["selected_benchmark"],
                benchmark_rate=row["benchmark_rate"],
            )

    def update_settings(self, patch: SettingsPatch) -> Settings:
        with self._lock:
            merged = merge_settings(self.get_settings(), patch)
            with self._get_connection("update_settings") as conn:
                conn.execute("""
                    INSERT OR REPLACE INTO settings (id, selected_benchmark, benchmark_rate)
                    VALUES (1, ?, ?)
                """, (merged.selected_benchmark, merged.benchmark_rate))
                conn.commit()
            return merged

    @property
    def storage_type(self) -> str:
        return "sqlite"


def _is_writable(path: Path) -> bool:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        probe = path.parent / ".write-test"
        probe.write_text("test", encoding="utf-8")
        probe.unlink()
        return True
    except OSError:
        return False


def create_store(candidate_paths: Sequence[str],
                 default_settings: Optional[Settings] = None,
                 allow_memory_fallback: bool = True) -> TransactionStore:
    """
    Open a SQLite store at the first writable candidate path.

    Falls back to the in-memory store when no candidate works.

    Raises:
        PersistenceError: If no path is usable and memory fallback is disabled
    """
    logger = logging.getLogger("inversion.store")

    for candidate in candidate_paths:
        path = Path(candidate)
        if not _is_writable(path):
            logger.info("Cannot write to %s, trying next", path)
            continue
        try:
            store = SqliteTransactionStore(str(path), default_settings)
        except PersistenceError as e:
            logger.warning("Cannot open database at %s: %s", path, e)
            continue
        logger.info("Using SQLite storage at %s", path)
        return store

    if not allow_memory_fallback:
        raise PersistenceError(
            "No writable storage location",
            operation="open",
            target=", ".join(candidate_paths),
        )

    logger.warning("Using in-memory storage (demo mode)")
    return MemoryTransactionStore(default_settings)
