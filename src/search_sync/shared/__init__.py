"""
목적: shared 패키지의 공개 API를 제공한다.
설명: 예외, 로깅, 설정, 런타임 유틸리티에 대한 접근 포인트를 제공한다.
디자인 패턴: 퍼사드
참조: src/search_sync/shared/exceptions, src/search_sync/shared/logging, src/search_sync/shared/config
"""

from search_sync.shared.exceptions import BaseAppException, ExceptionDetail
from search_sync.shared.logging import (
    InMemoryLogger,
    LogContext,
    Logger,
    LogLevel,
    LogRecord,
    create_default_logger,
)

__all__ = [
    "BaseAppException",
    "ExceptionDetail",
    "Logger",
    "InMemoryLogger",
    "LogContext",
    "LogLevel",
    "LogRecord",
    "create_default_logger",
]
