"""
목적: 영속 색인 작업 큐를 제공한다.
설명: 색인 의도(전체/컬렉션/레코드 upsert/레코드 삭제)를 SQLite에 등록하고 대기 작업 조회와 완료 처리를 지원한다.
디자인 패턴: 저장소 패턴
참조: src/search_sync/integrations/db/sqlite/connection.py, src/search_sync/core/indexing/models.py
"""

from __future__ import annotations

import json
import sqlite3
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from search_sync.core.indexing.models import IndexingTask, ItemId, TaskKind
from search_sync.integrations.db.sqlite import SqliteConnectionManager
from search_sync.shared.logging import LogContext, Logger, create_default_logger


class IndexingTaskQueue:
    """SQLite 기반 색인 작업 큐.

    작업은 삭제되지 않으며 `completed` 표시로만 상태가 바뀐다.
    """

    TABLE = "indexing_tasks"

    def __init__(
        self,
        connection: SqliteConnectionManager,
        logger: Optional[Logger] = None,
    ) -> None:
        self._connection = connection
        self._logger = logger or create_default_logger("IndexingTaskQueue")
        self._ensure_schema()

    def enqueue(
        self,
        kind: TaskKind,
        collection_name: Optional[str] = None,
        item_id: Optional[ItemId] = None,
    ) -> IndexingTask:
        """작업을 등록하고 식별자가 부여된 작업을 반환한다.

        Raises:
            pydantic.ValidationError: 작업 종류와 필드 조합이 맞지 않을 때.
        """

        task = IndexingTask(kind=kind, collection_name=collection_name, item_id=item_id)
        with self._connection.transaction() as conn:
            conn.execute(
                f"INSERT INTO {self.TABLE} "
                "(task_id, kind, collection_name, item_id, created_at, completed, completed_at) "
                "VALUES (?, ?, ?, ?, ?, 0, NULL)",
                (
                    task.task_id,
                    task.kind.value,
                    task.collection_name,
                    None if task.item_id is None else json.dumps(task.item_id),
                    task.created_at.isoformat(),
                ),
            )
        self._logger.debug(
            f"색인 작업 등록: {task.kind.value}",
            LogContext(task_id=task.task_id, collection_name=task.collection_name),
        )
        return task

    def enqueue_full_site_task(self) -> IndexingTask:
        """전체 재색인 작업을 등록한다."""

        return self.enqueue(TaskKind.FULL_SITE_REINDEX)

    def enqueue_collection_reindex(self, collection_name: str) -> IndexingTask:
        """컬렉션 재색인 작업을 등록한다."""

        return self.enqueue(TaskKind.COLLECTION_REINDEX, collection_name=collection_name)

    def enqueue_item_upsert(self, collection_name: str, item_id: ItemId) -> IndexingTask:
        """레코드 upsert 작업을 등록한다."""

        return self.enqueue(TaskKind.ITEM_UPSERT, collection_name=collection_name, item_id=item_id)

    def enqueue_item_remove(self, collection_name: str, item_id: ItemId) -> IndexingTask:
        """레코드 삭제 작업을 등록한다."""

        return self.enqueue(TaskKind.ITEM_REMOVE, collection_name=collection_name, item_id=item_id)

    def pending_tasks(self) -> List[IndexingTask]:
        """완료되지 않은 작업을 등록 순서대로 반환한다."""

        with self._connection.transaction() as conn:
            rows = conn.execute(
                f"SELECT * FROM {self.TABLE} WHERE completed = 0 ORDER BY rowid ASC"
            ).fetchall()
        return [self._to_task(row) for row in rows]

    def get_task(self, task_id: str) -> Optional[IndexingTask]:
        """식별자로 작업을 조회한다. 없으면 None."""

        with self._connection.transaction() as conn:
            row = conn.execute(
                f"SELECT * FROM {self.TABLE} WHERE task_id = ?",
                (task_id,),
            ).fetchone()
        return None if row is None else self._to_task(row)

    def mark_complete(self, task_id: str) -> bool:
        """작업을 완료 처리한다. 이미 완료된 작업이면 아무 변화가 없다.

        Returns:
            bool: 이번 호출로 완료 상태가 되었으면 True.
        """

        completed_at = datetime.now(timezone.utc).isoformat()
        with self._connection.transaction() as conn:
            cursor = conn.execute(
                f"UPDATE {self.TABLE} SET completed = 1, completed_at = ? "
                "WHERE task_id = ? AND completed = 0",
                (completed_at, task_id),
            )
        return cursor.rowcount > 0

    def mark_all_complete(self, tasks: Iterable[IndexingTask]) -> int:
        """여러 작업을 완료 처리하고 새로 완료된 수를 반환한다."""

        return sum(1 for task in tasks if self.mark_complete(task.task_id))

    @staticmethod
    def has_full_site_task(tasks: Iterable[IndexingTask]) -> bool:
        """전체 재색인 작업이 포함되어 있는지 반환한다."""

        return any(task.kind == TaskKind.FULL_SITE_REINDEX for task in tasks)

    def _ensure_schema(self) -> None:
        with self._connection.transaction() as conn:
            conn.execute(
                f"CREATE TABLE IF NOT EXISTS {self.TABLE} ("
                "task_id TEXT PRIMARY KEY, "
                "kind TEXT NOT NULL, "
                "collection_name TEXT, "
                "item_id TEXT, "
                "created_at TEXT NOT NULL, "
                "completed INTEGER NOT NULL DEFAULT 0, "
                "completed_at TEXT)"
            )
            conn.execute(
                f"CREATE INDEX IF NOT EXISTS idx_{self.TABLE}_completed "
                f"ON {self.TABLE} (completed)"
            )

    def _to_task(self, row: sqlite3.Row) -> IndexingTask:
        raw_item_id = row["item_id"]
        return IndexingTask(
            task_id=row["task_id"],
            kind=TaskKind(row["kind"]),
            collection_name=row["collection_name"],
            item_id=None if raw_item_id is None else json.loads(raw_item_id),
            created_at=datetime.fromisoformat(row["created_at"]),
            completed=bool(row["completed"]),
            completed_at=(
                datetime.fromisoformat(row["completed_at"]) if row["completed_at"] else None
            ),
        )
