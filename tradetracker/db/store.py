"""SQLite data store for Trading Tracker."""

import json
import logging
import sqlite3
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from tradetracker.models import ENTRY_KINDS, Confluence, TradingDay, parse_entry
from tradetracker.models.confluence import (
    BASE_CONFLUENCES,
    MAX_NAME_LENGTH,
    MIN_NAME_LENGTH,
    normalize_confluence_name,
)

logger = logging.getLogger(__name__)

# Owner of the shared confluence catalog.
BASE_CONFLUENCE_USER = "__BASE_CONFLUENCES__"


class EntryNotFoundError(LookupError):
    """Raised when a record to update or delete does not exist."""


class DuplicateEntryError(ValueError):
    """Raised when a record would duplicate an existing one.

    Attributes:
        existing_id: ID of the record already stored, when known.
    """

    def __init__(self, message: str, existing_id: Optional[str] = None):
        super().__init__(message)
        self.existing_id = existing_id


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _iso(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="microseconds")


def _validate_confluence_name(name: str) -> str:
    trimmed = (name or "").strip()
    if len(trimmed) < MIN_NAME_LENGTH or len(trimmed) > MAX_NAME_LENGTH:
        raise ValueError(
            f"Confluence name must be between {MIN_NAME_LENGTH} and {MAX_NAME_LENGTH} characters"
        )
    return trimmed


class JournalStore:
    """SQLite-based store for journal entries, trading days and confluences.

    Entries are kept as opaque JSON blobs keyed by user, kind and
    creation time.
    """

    REQUIRED_TABLES = [
        "entries",
        "trading_days",
        "confluences",
    ]

    def __init__(self, db_path: Path):
        """Initialize the data store.

        Args:
            db_path: Path to the SQLite database file.
        """
        self.db_path = db_path
        self._ensure_db_dir()
        self._init_schema()

    def _ensure_db_dir(self) -> None:
        """Ensure the database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self) -> None:
        """Initialize database schema on first run."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()

            # Journal entries of every kind
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS entries (
                    id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL,
                    kind TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    payload TEXT NOT NULL
                )
            """)
            cursor.execute("""
                CREATE INDEX IF NOT EXISTS idx_entries_user_kind_created
                ON entries (user_id, kind, created_at)
            """)

            # Trading days table
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS trading_days (
                    id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL,
                    trading_date TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    title TEXT,
                    notes TEXT,
                    UNIQUE(user_id, trading_date)
                )
            """)

            # Confluences table, base catalog rows belong to BASE_CONFLUENCE_USER
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS confluences (
                    id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL,
                    name TEXT NOT NULL,
                    normalized_name TEXT NOT NULL,
                    created_at TEXT NOT NULL
                )
            """)

            conn.commit()
        finally:
            conn.close()

    def get_tables(self) -> list[str]:
        """Get list of all tables in the database."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%'"
            )
            return [row["name"] for row in cursor.fetchall()]
        finally:
            conn.close()

    # ==================== Entries ====================

    def save_entry(self, user_id: str, entry, created_at: Optional[datetime] = None):
        """Store a new entry.

        Args:
            user_id: Owner of the entry.
            entry: Scored checklist, analysis or trade log.
            created_at: Creation time. Defaults to now (UTC).

        Returns:
            The entry with its ID and creation time set.
        """
        stored = entry.model_copy(
            update={"id": str(uuid.uuid4()), "created_at": created_at or _utc_now()}
        )
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO entries (id, user_id, kind, created_at, payload)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    stored.id,
                    user_id,
                    stored.kind,
                    _iso(stored.created_at),
                    json.dumps(stored.to_record()),
                ),
            )
            conn.commit()
        finally:
            conn.close()
        logger.debug("Saved %s entry %s for %s", stored.kind, stored.id, user_id)
        return stored

    def replace_entry(self, user_id: str, entry_id: str, entry):
        """Overwrite an existing entry of the same kind, keeping its creation time.

        Raises:
            EntryNotFoundError: If no entry of that kind and ID exists.
        """
        existing = self.get_entry(user_id, entry_id)
        if existing is None or existing.kind != entry.kind:
            raise EntryNotFoundError(f"{entry.kind} entry {entry_id} not found")

        stored = entry.model_copy(update={"id": entry_id, "created_at": existing.created_at})
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "UPDATE entries SET payload = ? WHERE id = ? AND user_id = ?",
                (json.dumps(stored.to_record()), entry_id, user_id),
            )
            conn.commit()
        finally:
            conn.close()
        logger.debug("Replaced %s entry %s for %s", stored.kind, entry_id, user_id)
        return stored

    def delete_entry(self, user_id: str, kind: str, entry_id: str) -> None:
        """Delete an entry.

        Raises:
            EntryNotFoundError: If no entry of that kind and ID exists.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "DELETE FROM entries WHERE id = ? AND user_id = ? AND kind = ?",
                (entry_id, user_id, kind),
            )
            conn.commit()
            deleted = cursor.rowcount
        finally:
            conn.close()
        if not deleted:
            raise EntryNotFoundError(f"{kind} entry {entry_id} not found")
        logger.debug("Deleted %s entry %s for %s", kind, entry_id, user_id)

    def get_entry(self, user_id: str, entry_id: str):
        """Get an entry by ID.

        Returns:
            The entry if found, None otherwise.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT payload FROM entries WHERE id = ? AND user_id = ?",
                (entry_id, user_id),
            )
            row = cursor.fetchone()
            if row:
                return parse_entry(json.loads(row["payload"]))
            return None
        finally:
            conn.close()

    def get_entries(self, user_id: str, kind: str, since: Optional[datetime] = None) -> list:
        """Get all entries of one kind created on or after ``since``.

        Args:
            user_id: Owner of the entries.
            kind: One of ``checklist``, ``analysis``, ``trade``.
            since: Optional inclusive lower bound on creation time.

        Returns:
            Entries, newest first.
        """
        if kind not in ENTRY_KINDS:
            raise ValueError(f"Unknown entry kind: {kind}")

        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            if since:
                cursor.execute(
                    """
                    SELECT payload FROM entries
                    WHERE user_id = ? AND kind = ? AND created_at >= ?
                    ORDER BY created_at DESC
                    """,
                    (user_id, kind, _iso(since)),
                )
            else:
                cursor.execute(
                    """
                    SELECT payload FROM entries
                    WHERE user_id = ? AND kind = ?
                    ORDER BY created_at DESC
                    """,
                    (user_id, kind),
                )
            return [parse_entry(json.loads(row["payload"])) for row in cursor.fetchall()]
        finally:
            conn.close()

    # ==================== Trading Days ====================

    def save_trading_day(
        self, user_id: str, day: TradingDay, created_at: Optional[datetime] = None
    ) -> TradingDay:
        """Store a new trading day.

        Raises:
            DuplicateEntryError: If the user already has a day for that date.
        """
        stored = day.model_copy(
            update={"id": str(uuid.uuid4()), "created_at": created_at or _utc_now()}
        )
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            try:
                cursor.execute(
                    """
                    INSERT INTO trading_days (id, user_id, trading_date, created_at, title, notes)
                    VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    (
                        stored.id,
                        user_id,
                        stored.trading_date,
                        _iso(stored.created_at),
                        stored.title,
                        stored.notes,
                    ),
                )
            except sqlite3.IntegrityError as e:
                raise DuplicateEntryError(
                    f"A trading day already exists for {day.trading_date}"
                ) from e
            conn.commit()
        finally:
            conn.close()
        return stored

    def update_trading_day(self, user_id: str, day_id: str, day: TradingDay) -> TradingDay:
        """Update the date, title and notes of a trading day.

        Raises:
            EntryNotFoundError: If the day does not exist.
            DuplicateEntryError: If another day already uses the new date.
        """
        existing = self.get_trading_day(user_id, day_id)
        if existing is None:
            raise EntryNotFoundError(f"Trading day {day_id} not found")

        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            try:
                cursor.execute(
                    """
                    UPDATE trading_days SET trading_date = ?, title = ?, notes = ?
                    WHERE id = ? AND user_id = ?
                    """,
                    (day.trading_date, day.title, day.notes, day_id, user_id),
                )
            except sqlite3.IntegrityError as e:
                raise DuplicateEntryError(
                    f"A trading day already exists for {day.trading_date}"
                ) from e
            conn.commit()
        finally:
            conn.close()
        return day.model_copy(update={"id": day_id, "created_at": existing.created_at})

    def get_trading_day(self, user_id: str, day_id: str) -> Optional[TradingDay]:
        """Get a trading day by ID."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT id, trading_date, created_at, title, notes
                FROM trading_days
                WHERE id = ? AND user_id = ?
                """,
                (day_id, user_id),
            )
            row = cursor.fetchone()
            if row:
                return self._row_to_day(row)
            return None
        finally:
            conn.close()

    def get_trading_days(self, user_id: str, since: Optional[datetime] = None) -> list[TradingDay]:
        """Get trading days created on or after ``since``, newest first."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT id, trading_date, created_at, title, notes
                FROM trading_days
                WHERE user_id = ? AND created_at >= ?
                ORDER BY created_at DESC
                """,
                (user_id, _iso(since) if since else ""),
            )
            return [self._row_to_day(row) for row in cursor.fetchall()]
        finally:
            conn.close()

    def delete_trading_day(self, user_id: str, day_id: str) -> None:
        """Delete a trading day.

        Raises:
            EntryNotFoundError: If the day does not exist.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "DELETE FROM trading_days WHERE id = ? AND user_id = ?",
                (day_id, user_id),
            )
            conn.commit()
            deleted = cursor.rowcount
        finally:
            conn.close()
        if not deleted:
            raise EntryNotFoundError(f"Trading day {day_id} not found")

    @staticmethod
    def _row_to_day(row: sqlite3.Row) -> TradingDay:
        return TradingDay(
            id=row["id"],
            trading_date=row["trading_date"],
            created_at=datetime.fromisoformat(row["created_at"]),
            title=row["title"],
            notes=row["notes"],
        )

    # ==================== Confluences ====================

    def _seed_base_confluences(self, conn: sqlite3.Connection) -> None:
        """Insert the default catalog when no base confluences exist."""
        cursor = conn.cursor()
        cursor.execute(
            "SELECT COUNT(*) AS count FROM confluences WHERE user_id = ?",
            (BASE_CONFLUENCE_USER,),
        )
        if cursor.fetchone()["count"]:
            return

        now = _iso(_utc_now())
        for index, name in enumerate(BASE_CONFLUENCES, start=1):
            cursor.execute(
                """
                INSERT OR IGNORE INTO confluences (id, user_id, name, normalized_name, created_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                (f"base-{index}", BASE_CONFLUENCE_USER, name, normalize_confluence_name(name), now),
            )
        conn.commit()
        logger.info("Seeded %d base confluences", len(BASE_CONFLUENCES))

    def _confluence_rows(self, conn: sqlite3.Connection, user_id: str) -> list[sqlite3.Row]:
        cursor = conn.cursor()
        cursor.execute(
            """
            SELECT id, user_id, name, normalized_name, created_at
            FROM confluences
            WHERE user_id = ?
            ORDER BY created_at, rowid
            """,
            (user_id,),
        )
        return cursor.fetchall()

    def get_confluences(self, user_id: str) -> list[Confluence]:
        """Get the base catalog followed by the user's custom tags.

        Tags that normalise to the same name are listed once, the first
        occurrence winning.
        """
        conn = self._get_connection()
        try:
            self._seed_base_confluences(conn)
            rows = self._confluence_rows(conn, BASE_CONFLUENCE_USER) + self._confluence_rows(conn, user_id)
        finally:
            conn.close()

        seen: set[str] = set()
        confluences = []
        for row in rows:
            name = row["name"].strip()
            key = normalize_confluence_name(name)
            if not name or key in seen:
                continue
            seen.add(key)
            confluences.append(
                Confluence(
                    id=row["id"],
                    name=name,
                    is_base=row["user_id"] == BASE_CONFLUENCE_USER,
                    created_at=datetime.fromisoformat(row["created_at"]),
                )
            )
        return confluences

    def _taken_names(self, conn: sqlite3.Connection, owners: list[str], exclude_id: Optional[str]) -> set[str]:
        names: set[str] = set()
        for owner in owners:
            for row in self._confluence_rows(conn, owner):
                if row["id"] != exclude_id:
                    names.add(row["normalized_name"])
        return names

    def add_confluence(
        self,
        user_id: str,
        name: str,
        base: bool = False,
        created_at: Optional[datetime] = None,
    ) -> Confluence:
        """Add a custom tag, or a base catalog tag when ``base`` is set.

        Raises:
            ValueError: If the name is shorter than 2 or longer than 180 characters.
            DuplicateEntryError: If the normalised name is already taken.
        """
        name = _validate_confluence_name(name)
        owner = BASE_CONFLUENCE_USER if base else user_id
        # Custom tags must not clash with the catalog; catalog tags only with each other.
        owners = [BASE_CONFLUENCE_USER] if base else [BASE_CONFLUENCE_USER, user_id]

        conn = self._get_connection()
        try:
            self._seed_base_confluences(conn)
            key = normalize_confluence_name(name)
            if key in self._taken_names(conn, owners, exclude_id=None):
                label = "Base confluence" if base else "Confluence"
                raise DuplicateEntryError(f"{label} already exists: {name}")

            confluence = Confluence(
                id=str(uuid.uuid4()), name=name, is_base=base, created_at=created_at or _utc_now()
            )
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO confluences (id, user_id, name, normalized_name, created_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                (confluence.id, owner, name, key, _iso(confluence.created_at)),
            )
            conn.commit()
        finally:
            conn.close()
        return confluence

    def rename_confluence(self, user_id: str, confluence_id: str, name: str, base: bool = False) -> None:
        """Rename a custom or base tag.

        Raises:
            ValueError: If the new name has an invalid length.
            DuplicateEntryError: If the new normalised name is already taken.
            EntryNotFoundError: If the tag does not exist.
        """
        name = _validate_confluence_name(name)
        owner = BASE_CONFLUENCE_USER if base else user_id
        owners = [BASE_CONFLUENCE_USER] if base else [BASE_CONFLUENCE_USER, user_id]

        conn = self._get_connection()
        try:
            key = normalize_confluence_name(name)
            if key in self._taken_names(conn, owners, exclude_id=confluence_id):
                raise DuplicateEntryError(f"Confluence already exists: {name}")

            cursor = conn.cursor()
            cursor.execute(
                """
                UPDATE confluences SET name = ?, normalized_name = ?
                WHERE id = ? AND user_id = ?
                """,
                (name, key, confluence_id, owner),
            )
            conn.commit()
            updated = cursor.rowcount
        finally:
            conn.close()
        if not updated:
            raise EntryNotFoundError(f"Confluence {confluence_id} not found")

    def delete_confluence(self, user_id: str, confluence_id: str, base: bool = False) -> None:
        """Delete a custom or base tag.

        Raises:
            EntryNotFoundError: If the tag does not exist.
        """
        owner = BASE_CONFLUENCE_USER if base else user_id
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "DELETE FROM confluences WHERE id = ? AND user_id = ?",
                (confluence_id, owner),
            )
            conn.commit()
            deleted = cursor.rowcount
        finally:
            conn.close()
        if not deleted:
            raise EntryNotFoundError(f"Confluence {confluence_id} not found")

    # ==================== Stats ====================

    def get_stats(self) -> dict:
        """Get database statistics.

        Returns:
            Dictionary with table record counts.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            stats = {}
            for table in self.REQUIRED_TABLES:
                cursor.execute(f"SELECT COUNT(*) as count FROM {table}")
                stats[table] = cursor.fetchone()["count"]
            return stats
        finally:
            conn.close()
