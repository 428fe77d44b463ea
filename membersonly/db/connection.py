"""
Members Only Database Connection Manager

SQLite database with WAL mode for concurrent reads.
"""

import sqlite3
import logging
import time
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


class Database:
    """
    SQLite database manager for Members Only.

    One connection is shared by every request handler; statements run in
    autocommit mode so each insert, update or delete is its own transaction.
    """

    def __init__(self, path: str):
        """
        Initialize database connection.

        Args:
            path: Path to SQLite database file, or ":memory:"
        """
        self.path = Path(path)
        self._conn: Optional[sqlite3.Connection] = None

    def initialize(self):
        """Initialize database connection and schema."""
        in_memory = str(self.path) == ":memory:"

        if not in_memory:
            self.path.parent.mkdir(parents=True, exist_ok=True)

        self._conn = sqlite3.connect(
            str(self.path),
            check_same_thread=False,
            isolation_level=None  # Autocommit mode
        )

        # WAL is not available for in-memory databases
        if not in_memory:
            self._conn.execute("PRAGMA journal_mode=WAL")

        # Use Row factory for dict-like access
        self._conn.row_factory = sqlite3.Row

        self._run_migrations()

        logger.info(f"Database initialized: {self.path}")

    def _run_migrations(self):
        """Run database migrations."""
        self._conn.execute("""
            CREATE TABLE IF NOT EXISTS _migrations (
                id INTEGER PRIMARY KEY,
                name TEXT UNIQUE NOT NULL,
                applied_at INTEGER NOT NULL
            )
        """)

        applied = {
            row[0] for row in
            self._conn.execute("SELECT name FROM _migrations").fetchall()
        }

        migrations = [
            ("001_initial", self._migration_001_initial),
        ]

        for name, func in migrations:
            if name not in applied:
                logger.info(f"Running migration: {name}")
                func()
                self._conn.execute(
                    "INSERT INTO _migrations (name, applied_at) VALUES (?, ?)",
                    (name, int(time.time() * 1_000_000))
                )

    def _migration_001_initial(self):
        """Initial database schema."""
        # No foreign key on messages.author_id: messages may outlive their author.
        self._conn.executescript("""
            CREATE TABLE IF NOT EXISTS users (
                id                INTEGER PRIMARY KEY AUTOINCREMENT,
                username          TEXT UNIQUE NOT NULL,
                first_name        TEXT NOT NULL,
                last_name         TEXT NOT NULL,
                password_hash     TEXT NOT NULL,
                membership_status INTEGER NOT NULL DEFAULT 0,
                created_at_us     INTEGER NOT NULL
            );

            CREATE TABLE IF NOT EXISTS messages (
                id              INTEGER PRIMARY KEY AUTOINCREMENT,
                author_id       INTEGER,
                title           TEXT NOT NULL,
                text            TEXT NOT NULL,
                created_at_us   INTEGER NOT NULL
            );
            CREATE INDEX IF NOT EXISTS idx_messages_author ON messages(author_id);
        """)

    def execute(self, sql: str, params: tuple = ()) -> sqlite3.Cursor:
        """Execute SQL query."""
        return self._conn.execute(sql, params)

    def fetchone(self, sql: str, params: tuple = ()) -> Optional[sqlite3.Row]:
        """Execute query and fetch one result."""
        return self._conn.execute(sql, params).fetchone()

    def fetchall(self, sql: str, params: tuple = ()) -> list[sqlite3.Row]:
        """Execute query and fetch all results."""
        return self._conn.execute(sql, params).fetchall()

    def close(self):
        """Close database connection."""
        if self._conn:
            self._conn.close()
            self._conn = None
            logger.info("Database connection closed")

    # === Utility Methods ===

    def count_users(self) -> int:
        """Count total registered users."""
        row = self.fetchone("SELECT COUNT(*) FROM users")
        return row[0] if row else 0

    def count_members(self) -> int:
        """Count users who unlocked membership."""
        row = self.fetchone("SELECT COUNT(*) FROM users WHERE membership_status = 1")
        return row[0] if row else 0

    def count_messages(self) -> int:
        """Count total messages."""
        row = self.fetchone("SELECT COUNT(*) FROM messages")
        return row[0] if row else 0
