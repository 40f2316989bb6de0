"""
목적: 로거 인터페이스와 기본 구현체를 제공한다.
설명: 최대 보관 개수가 있는 인메모리 저장소 기반 로거와 JSON 라인 stdout 출력을 지원한다.
디자인 패턴: 전략 패턴, 저장소 패턴
참조: src/search_sync/shared/logging/models.py
"""

from __future__ import annotations

import json
import os
import threading
from abc import ABC, abstractmethod
from collections import deque
from datetime import timezone
from typing import Deque, List, Optional

from search_sync.shared.logging.models import LogContext, LogLevel, LogRecord, level_weight


class LogRepository(ABC):
    """로그 저장소 인터페이스."""

    @abstractmethod
    def add(self, record: LogRecord) -> None:
        """로그 레코드를 저장한다."""

    @abstractmethod
    def list(self) -> List[LogRecord]:
        """저장된 로그를 반환한다."""


class InMemoryLogRepository(LogRepository):
    """최근 로그만 유지하는 인메모리 로그 저장소 구현체.

    Args:
        max_records: 보관할 최대 레코드 수. 0이면 무제한.
    """

    def __init__(self, max_records: int = 1000) -> None:
        self._records: Deque[LogRecord] = deque(maxlen=max_records or None)
        self._lock = threading.Lock()

    def add(self, record: LogRecord) -> None:
        with self._lock:
            self._records.append(record)

    def list(self) -> List[LogRecord]:
        with self._lock:
            return list(self._records)


class Logger(ABC):
    """로거 인터페이스."""

    @abstractmethod
    def log(
        self,
        level: LogLevel,
        message: str,
        context: Optional[LogContext] = None,
        metadata: Optional[dict] = None,
    ) -> None:
        """로그를 기록한다."""

    @abstractmethod
    def with_context(self, context: LogContext) -> "Logger":
        """컨텍스트가 합쳐진 새 로거를 반환한다."""

    def debug(self, message: str, context: Optional[LogContext] = None) -> None:
        """DEBUG 레벨 로그를 기록한다."""

        self.log(LogLevel.DEBUG, message, context)

    def info(self, message: str, context: Optional[LogContext] = None) -> None:
        """INFO 레벨 로그를 기록한다."""

        self.log(LogLevel.INFO, message, context)

    def warning(self, message: str, context: Optional[LogContext] = None) -> None:
        """WARNING 레벨 로그를 기록한다."""

        self.log(LogLevel.WARNING, message, context)

    def error(self, message: str, context: Optional[LogContext] = None) -> None:
        """ERROR 레벨 로그를 기록한다."""

        self.log(LogLevel.ERROR, message, context)

    def critical(self, message: str, context: Optional[LogContext] = None) -> None:
        """CRITICAL 레벨 로그를 기록한다."""

        self.log(LogLevel.CRITICAL, message, context)


class InMemoryLogger(Logger):
    """인메모리 로거 구현체.

    Args:
        name: 로거 이름.
        repository: 로그 저장소. 생략 시 인메모리 저장소를 사용한다.
        base_context: 모든 레코드에 합쳐질 기본 컨텍스트.
        emit_stdout: JSON 라인 stdout 출력 여부. 생략 시 LOG_STDOUT 환경 변수를 따른다.
        min_level: 기록할 최소 레벨. 생략 시 LOG_LEVEL 환경 변수를 따른다.
    """

    def __init__(
        self,
        name: str,
        repository: Optional[LogRepository] = None,
        base_context: Optional[LogContext] = None,
        emit_stdout: Optional[bool] = None,
        min_level: Optional[LogLevel] = None,
    ) -> None:
        self._name = name
        self._repository = repository or InMemoryLogRepository()
        self._base_context = base_context
        self._emit_stdout = _read_emit_stdout_env() if emit_stdout is None else emit_stdout
        self._min_level = min_level or _read_min_level_env()

    @property
    def name(self) -> str:
        """로거 이름을 반환한다."""

        return self._name

    @property
    def repository(self) -> LogRepository:
        """저장소를 반환한다."""

        return self._repository

    def log(
        self,
        level: LogLevel,
        message: str,
        context: Optional[LogContext] = None,
        metadata: Optional[dict] = None,
    ) -> None:
        if level_weight(level) < level_weight(self._min_level):
            return
        record = LogRecord(
            level=level,
            message=message,
            logger_name=self._name,
            context=self._merge_context(context),
            metadata=metadata or {},
        )
        self._repository.add(record)
        if self._emit_stdout:
            self._write_stdout(record)

    def with_context(self, context: LogContext) -> "Logger":
        return InMemoryLogger(
            name=self._name,
            repository=self._repository,
            base_context=self._merge_context(context),
            emit_stdout=self._emit_stdout,
            min_level=self._min_level,
        )

    def _merge_context(self, context: Optional[LogContext]) -> Optional[LogContext]:
        if self._base_context is None:
            return context
        if context is None:
            return self._base_context
        base = self._base_context
        return LogContext(
            run_id=context.run_id or base.run_id,
            task_id=context.task_id or base.task_id,
            collection_name=context.collection_name or base.collection_name,
            index_name=context.index_name or base.index_name,
            tags={**base.tags, **context.tags},
        )

    def _write_stdout(self, record: LogRecord) -> None:
        payload: dict[str, object] = {
            "timestamp": record.timestamp.astimezone(timezone.utc).isoformat(),
            "level": record.level.value,
            "logger": record.logger_name,
            "message": record.message,
        }
        if record.context is not None:
            context = record.context.model_dump(exclude_none=True)
            if not context.get("tags"):
                context.pop("tags", None)
            if context:
                payload["context"] = context
        if record.metadata:
            payload["metadata"] = record.metadata
        print(json.dumps(payload, ensure_ascii=False, default=str), flush=True)


def _read_emit_stdout_env() -> bool:
    raw = os.getenv("LOG_STDOUT")
    if raw is None:
        return False
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _read_min_level_env() -> LogLevel:
    raw = (os.getenv("LOG_LEVEL") or "").strip().upper()
    try:
        return LogLevel(raw)
    except ValueError:
        return LogLevel.DEBUG


def create_default_logger(name: str) -> InMemoryLogger:
    """기본 인메모리 로거를 생성한다."""

    return InMemoryLogger(name=name)
