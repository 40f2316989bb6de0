"""
목적: 인덱스 상태 저장소를 제공한다.
설명: 현재 인덱스 이름 같은 단일 값 상태를 SQLite 키-값 테이블에 보관한다.
디자인 패턴: 저장소 패턴
참조: src/search_sync/integrations/db/sqlite/connection.py, src/search_sync/core/indexing/naming.py
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from search_sync.integrations.db.sqlite import SqliteConnectionManager


class IndexStateStore:
    """SQLite 키-값 상태 저장소."""

    TABLE = "index_state"

    def __init__(self, connection: SqliteConnectionManager) -> None:
        self._connection = connection
        self._ensure_schema()

    def get(self, key: str) -> Optional[str]:
        """키의 값을 반환한다. 없으면 None."""

        with self._connection.transaction() as conn:
            row = conn.execute(
                f"SELECT value FROM {self.TABLE} WHERE key = ?",
                (key,),
            ).fetchone()
        return None if row is None else row["value"]

    def set(self, key: str, value: str) -> None:
        """키의 값을 저장한다."""

        updated_at = datetime.now(timezone.utc).isoformat()
        with self._connection.transaction() as conn:
            conn.execute(
                f"INSERT INTO {self.TABLE} (key, value, updated_at) VALUES (?, ?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at",
                (key, value, updated_at),
            )

    def _ensure_schema(self) -> None:
        with self._connection.transaction() as conn:
            conn.execute(
                f"CREATE TABLE IF NOT EXISTS {self.TABLE} ("
                "key TEXT PRIMARY KEY, "
                "value TEXT NOT NULL, "
                "updated_at TEXT NOT NULL)"
            )
