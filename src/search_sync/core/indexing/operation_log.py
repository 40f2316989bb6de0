"""
목적: 운영 로그 저장소를 제공한다.
설명: 재조정 실행의 성공/실패 결과를 SQLite에 추가 전용으로 기록하고 최근 기록을 조회한다.
디자인 패턴: 저장소 패턴
참조: src/search_sync/integrations/db/sqlite/connection.py, src/search_sync/core/indexing/engine.py
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from search_sync.core.indexing.models import LogEntry, LogOutcome
from search_sync.integrations.db.sqlite import SqliteConnectionManager
from search_sync.shared.logging import Logger, create_default_logger


class OperationLog:
    """SQLite 기반 운영 로그."""

    TABLE = "operation_logs"

    def __init__(
        self,
        connection: SqliteConnectionManager,
        logger: Optional[Logger] = None,
    ) -> None:
        self._connection = connection
        self._logger = logger or create_default_logger("OperationLog")
        self._ensure_schema()

    def record_pass(self, message: str) -> LogEntry:
        """성공 기록을 추가한다."""

        self._logger.info(message)
        return self._append(LogOutcome.SUCCESS, message)

    def record_fail(self, message: str) -> LogEntry:
        """실패 기록을 추가한다."""

        self._logger.error(message)
        return self._append(LogOutcome.FAILURE, message)

    def recent_entries(self, limit: int = 50) -> List[LogEntry]:
        """최근 기록을 최신순으로 반환한다."""

        with self._connection.transaction() as conn:
            rows = conn.execute(
                f"SELECT * FROM {self.TABLE} ORDER BY rowid DESC LIMIT ?",
                (max(0, limit),),
            ).fetchall()
        return [
            LogEntry(
                log_id=row["log_id"],
                timestamp=datetime.fromisoformat(row["timestamp"]),
                outcome=LogOutcome(row["outcome"]),
                message=row["message"],
            )
            for row in rows
        ]

    def _append(self, outcome: LogOutcome, message: str) -> LogEntry:
        entry = LogEntry(outcome=outcome, message=message)
        with self._connection.transaction() as conn:
            conn.execute(
                f"INSERT INTO {self.TABLE} (log_id, timestamp, outcome, message) VALUES (?, ?, ?, ?)",
                (entry.log_id, entry.timestamp.isoformat(), entry.outcome.value, entry.message),
            )
        return entry

    def _ensure_schema(self) -> None:
        with self._connection.transaction() as conn:
            conn.execute(
                f"CREATE TABLE IF NOT EXISTS {self.TABLE} ("
                "log_id TEXT PRIMARY KEY, "
                "timestamp TEXT NOT NULL, "
                "outcome TEXT NOT NULL, "
                "message TEXT NOT NULL)"
            )
