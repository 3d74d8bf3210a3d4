"""
ProgressStore - Persist the live quiz session as a single saved snapshot.

Progress lives in a key-value store under one named entry, mirroring
browser local storage:
- SQLiteStorage: ~/.questionbank/progress.db (default)
- MemoryStorage: in-process dict for tests and ephemeral runs

Storage failures never reach callers. A failed write leaves the
in-memory session authoritative; an unreadable entry reads as
"no saved progress".
"""

import logging
import sqlite3
from pathlib import Path
from typing import Optional, Protocol

from pydantic import ValidationError

from questionbank.config import DEFAULT_PROGRESS_DB, STORAGE_KEY
from questionbank.schemas import Catalog, Selection, Session, Snapshot

from .errors import CorruptSnapshot, StorageUnavailable


logger = logging.getLogger(__name__)


class KeyValueStorage(Protocol):
    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


# -----------------------------------------------------------------------------
# Storage backends
# -----------------------------------------------------------------------------

class MemoryStorage:
    """Dict-backed storage; contents vanish with the process."""

    def __init__(self):
        self.items: dict[str, str] = {}

    def get_item(self, key: str) -> Optional[str]:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)


class SQLiteStorage:
    """
    Key-value storage in a single SQLite table.

    Each call opens its own connection. sqlite3 and filesystem errors are
    raised as StorageUnavailable.
    """

    def __init__(self, db_path: Optional[Path] = None):
        """
        Initialize storage.

        Args:
            db_path: Path to progress.db (default: ~/.questionbank/progress.db)
        """
        self.db_path = Path(db_path or DEFAULT_PROGRESS_DB)
        self._ensure_database()

    def _ensure_database(self):
        """Create database and table if they don't exist."""
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(str(self.db_path))
            try:
                conn.execute("""
                    CREATE TABLE IF NOT EXISTS storage (
                        key TEXT PRIMARY KEY,
                        value TEXT NOT NULL,
                        updated_at TEXT DEFAULT CURRENT_TIMESTAMP
                    )
                """)
                conn.commit()
            finally:
                conn.close()
        except (sqlite3.Error, OSError) as e:
            raise StorageUnavailable(f"Cannot open progress database {self.db_path}: {e}") from e

    def _get_connection(self) -> sqlite3.Connection:
        """Get a new database connection."""
        return sqlite3.connect(str(self.db_path))

    def get_item(self, key: str) -> Optional[str]:
        try:
            conn = self._get_connection()
            try:
                row = conn.execute(
                    "SELECT value FROM storage WHERE key = ?", (key,)
                ).fetchone()
                return row[0] if row else None
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StorageUnavailable(f"Read failed for '{key}': {e}") from e

    def set_item(self, key: str, value: str) -> None:
        try:
            conn = self._get_connection()
            try:
                conn.execute(
                    """INSERT INTO storage (key, value, updated_at)
                       VALUES (?, ?, CURRENT_TIMESTAMP)
                       ON CONFLICT(key) DO UPDATE SET
                         value = excluded.value,
                         updated_at = excluded.updated_at""",
                    (key, value)
                )
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StorageUnavailable(f"Write failed for '{key}': {e}") from e

    def remove_item(self, key: str) -> None:
        try:
            conn = self._get_connection()
            try:
                conn.execute("DELETE FROM storage WHERE key = ?", (key,))
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StorageUnavailable(f"Delete failed for '{key}': {e}") from e


# -----------------------------------------------------------------------------
# Progress store
# -----------------------------------------------------------------------------

class ProgressStore:
    """
    Save, load and reconcile the persisted quiz snapshot.

    Saved progress is lesson-scoped: a snapshot is only ever restored
    for the exact selection it was saved under.
    """

    def __init__(self, storage: KeyValueStorage, key: str = STORAGE_KEY):
        self.storage = storage
        self.key = key

    def save(self, session: Session) -> Snapshot:
        """Persist the session. Write failures are logged, not raised."""
        snapshot = Snapshot.from_session(session)
        try:
            self.storage.set_item(self.key, snapshot.model_dump_json())
        except StorageUnavailable as e:
            logger.warning(f"Progress not saved: {e}")
        return snapshot

    def load(self, catalog: Optional[Catalog] = None) -> Optional[Snapshot]:
        """
        Read the saved snapshot.

        Returns None if nothing is saved, storage is unavailable, the entry
        is malformed, or (when a catalog is given) its lesson no longer
        exists.
        """
        try:
            raw = self.storage.get_item(self.key)
        except StorageUnavailable as e:
            logger.warning(f"Saved progress unavailable: {e}")
            return None
        if raw is None:
            return None

        try:
            snapshot = self._parse(raw)
        except CorruptSnapshot as e:
            logger.warning(f"Ignoring saved progress: {e}")
            return None

        if catalog is not None and not catalog.resolves(snapshot.selection):
            logger.info(f"Ignoring saved progress for unknown lesson {snapshot.selection}")
            return None
        return snapshot

    @staticmethod
    def _parse(raw: str) -> Snapshot:
        try:
            return Snapshot.model_validate_json(raw)
        except ValidationError as e:
            raise CorruptSnapshot(f"{e.error_count()} validation error(s)") from e

    def reconcile(self, snapshot: Optional[Snapshot], current: Selection) -> Optional[Session]:
        """
        Rehydrate the snapshot if it belongs to the current selection.

        Any field mismatch returns None so the caller starts fresh.
        """
        if snapshot is None:
            return None
        if snapshot.selection.as_tuple() != current.as_tuple():
            logger.debug(f"Saved progress for {snapshot.selection} does not match {current}")
            return None
        return snapshot.to_session()

    def clear(self) -> None:
        try:
            self.storage.remove_item(self.key)
        except StorageUnavailable as e:
            logger.warning(f"Saved progress not cleared: {e}")
