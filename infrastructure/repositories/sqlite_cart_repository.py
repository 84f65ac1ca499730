import sqlite3
import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

log = logging.getLogger(__name__)

class SQLiteCartRepository:
    """Persists one cart snapshot per owner (signed-in user id or 'guest')."""

    def __init__(self, db_path: str, owner_key: str = "guest"):
        self.db_path = db_path
        self.owner_key = owner_key

    def _conn(self):
        return sqlite3.connect(self.db_path)

    def _get_current_version(self, conn) -> int:
        row = conn.execute("SELECT version FROM schema_info").fetchone()
        return row[0] if row else 0

    def _migrate_v1(self, conn):
        """Baseline schema (v1)."""
        conn.execute("""
            CREATE TABLE IF NOT EXISTS carts (
                owner_key TEXT PRIMARY KEY,
                snapshot_json TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
        """)

    def init_db(self):
        MIGRATIONS = [self._migrate_v1]

        with self._conn() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS schema_info (
                    version INTEGER NOT NULL
                )
            """)
            current_version = self._get_current_version(conn)
            has_version_row = conn.execute("SELECT COUNT(*) FROM schema_info").fetchone()[0] > 0
            if not has_version_row:
                conn.execute("INSERT INTO schema_info (version) VALUES (?)", (current_version,))

            for i in range(current_version, len(MIGRATIONS)):
                target_version = i + 1
                try:
                    MIGRATIONS[i](conn)
                    conn.execute("UPDATE schema_info SET version = ?", (target_version,))
                except Exception as e:
                    # Leaving the with-block on an exception rolls the whole init back.
                    raise RuntimeError(f"Cart database migration to v{target_version} failed: {e}") from e

            conn.commit()

    def save(self, snapshot: Dict[str, Any]) -> None:
        now_iso = datetime.now(timezone.utc).isoformat()
        with self._conn() as conn:
            conn.execute("""
                INSERT INTO carts (owner_key, snapshot_json, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT(owner_key) DO UPDATE SET
                snapshot_json = excluded.snapshot_json, updated_at = excluded.updated_at
            """, (self.owner_key, json.dumps(snapshot), now_iso))
            conn.commit()

    def load(self) -> Optional[Dict[str, Any]]:
        with self._conn() as conn:
            row = conn.execute("SELECT snapshot_json FROM carts WHERE owner_key = ?", (self.owner_key,)).fetchone()
        if not row:
            return None
        try:
            return json.loads(row[0])
        except ValueError:
            log.warning(f"Corrupt cart snapshot for owner {self.owner_key}, ignoring")
            return None

    def delete(self) -> None:
        with self._conn() as conn:
            conn.execute("DELETE FROM carts WHERE owner_key = ?", (self.owner_key,))
            conn.commit()
