"""
목적: SQLite 연결 관리 모듈을 제공한다.
설명: 작업 큐, 운영 로그, 인덱스 상태 저장소가 공유하는 단일 연결과 잠금, 트랜잭션 헬퍼를 담당한다.
디자인 패턴: 매니저 패턴
참조: src/search_sync/core/indexing/task_queue.py, src/search_sync/core/indexing/operation_log.py
"""

from __future__ import annotations

import os
import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from search_sync.shared.logging import Logger, create_default_logger


class SqliteConnectionManager:
    """SQLite 연결 관리자.

    여러 스레드가 하나의 연결을 공유하므로 모든 실행은 `transaction` 또는 `lock` 안에서 수행한다.

    Args:
        database_path: DB 파일 경로. ":memory:"도 허용한다.
        logger: 주입 가능한 로거.
    """

    def __init__(self, database_path: str, logger: Optional[Logger] = None) -> None:
        self._database_path = database_path
        self._logger = logger or create_default_logger("SqliteConnectionManager")
        self._connection: Optional[sqlite3.Connection] = None
        self._lock = threading.RLock()
        self._busy_timeout_ms = self._read_busy_timeout_ms()

    @property
    def database_path(self) -> str:
        """DB 파일 경로를 반환한다."""

        return self._database_path

    @property
    def lock(self) -> threading.RLock:
        """연결 공유용 잠금을 반환한다."""

        return self._lock

    def connect(self) -> None:
        """SQLite 연결을 초기화한다."""

        with self._lock:
            if self._connection is not None:
                return
            if self._database_path != ":memory:":
                Path(self._database_path).parent.mkdir(parents=True, exist_ok=True)
            self._connection = sqlite3.connect(
                self._database_path,
                timeout=self._busy_timeout_ms / 1000.0,
                check_same_thread=False,
            )
            self._connection.row_factory = sqlite3.Row
            self._apply_pragmas()
            self._logger.info(f"SQLite 연결이 초기화되었습니다: {self._database_path}")

    def close(self) -> None:
        """SQLite 연결을 종료한다."""

        with self._lock:
            if self._connection is None:
                return
            self._connection.close()
            self._connection = None
            self._logger.info("SQLite 연결이 종료되었습니다.")

    def ensure_connection(self) -> sqlite3.Connection:
        """초기화된 SQLite 연결 객체를 반환한다. 미초기화 상태면 연결한다."""

        if self._connection is None:
            self.connect()
        if self._connection is None:
            raise RuntimeError("SQLite 연결이 초기화되지 않았습니다.")
        return self._connection

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """잠금을 잡고 커밋/롤백을 보장하는 트랜잭션 컨텍스트를 제공한다."""

        with self._lock:
            connection = self.ensure_connection()
            try:
                yield connection
            except Exception:
                connection.rollback()
                raise
            else:
                connection.commit()

    def _apply_pragmas(self) -> None:
        connection = self.ensure_connection()
        connection.execute(f"PRAGMA busy_timeout={self._busy_timeout_ms}")
        try:
            connection.execute("PRAGMA journal_mode=WAL")
            connection.execute("PRAGMA synchronous=NORMAL")
        except sqlite3.DatabaseError as error:
            self._logger.warning(f"SQLite PRAGMA 적용 경고: {error}")

    def _read_busy_timeout_ms(self) -> int:
        raw = os.getenv("SQLITE_BUSY_TIMEOUT_MS", "5000")
        try:
            value = int(raw)
        except ValueError:
            return 5000
        return max(0, value)
