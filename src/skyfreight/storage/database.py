import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol

from skyfreight.config import Settings, settings


class Storage(Protocol):
    """Key/value medium the record store writes its snapshot to."""

    def save(self, key: str, payload: str) -> None: ...

    def load(self, key: str) -> str | None: ...


def get_db_path(data_dir: str | None = None) -> Path:
    return Path(data_dir or settings.data_dir) / "skyfreight.db"


class SqliteStorage:
    """Stores each payload as a JSON row keyed by storage key."""

    def __init__(self, db_path: Path | str | None = None) -> None:
        self.db_path = Path(db_path) if db_path else get_db_path()
        self.init_db()

    def init_db(self) -> None:
        """Initialize database with required tables."""
        with self.get_connection() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    data JSON NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)
            conn.commit()

    @contextmanager
    def get_connection(self):
        """Get a database connection."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
        finally:
            conn.close()

    def save(self, key: str, payload: str) -> None:
        now = datetime.now(timezone.utc).isoformat()
        with self.get_connection() as conn:
            conn.execute(
                "INSERT INTO kv_store (key, data, updated_at) VALUES (?, ?, ?) "
                "ON CONFLICT(key) DO UPDATE SET data = excluded.data, updated_at = excluded.updated_at",
                (key, payload, now),
            )
            conn.commit()

    def load(self, key: str) -> str | None:
        with self.get_connection() as conn:
            row = conn.execute("SELECT data FROM kv_store WHERE key = ?", (key,)).fetchone()
            if row:
                return row["data"]
            return None


class MemoryStorage:
    """Dict-backed storage, handy in tests."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})
        self.writes = 0

    def save(self, key: str, payload: str) -> None:
        self.data[key] = payload
        self.writes += 1

    def load(self, key: str) -> str | None:
        return self.data.get(key)


class NullStorage:
    """Discards every write; nothing is ever loaded."""

    def save(self, key: str, payload: str) -> None:
        pass

    def load(self, key: str) -> str | None:
        return None


def build_storage(config: Settings | None = None) -> Storage:
    config = config or settings
    match config.storage_backend:
        case "sqlite":
            return SqliteStorage(get_db_path(config.data_dir))
        case "memory":
            return MemoryStorage()
        case _:
            return NullStorage()
