"""
목적: 예외 모듈 공개 API를 제공한다.
설명: 외부에서 사용할 예외 모델과 베이스 클래스, 도메인 예외를 노출한다.
디자인 패턴: 퍼사드
참조: src/search_sync/shared/exceptions/models.py, src/search_sync/shared/exceptions/base.py, src/search_sync/shared/exceptions/errors.py
"""

from search_sync.shared.exceptions.base import BaseAppException
from search_sync.shared.exceptions.errors import (
    AliasUpdateError,
    ConfigurationError,
    DocumentNotFoundError,
    IndexCreationError,
    IndexWriteError,
    QueryError,
    SearchConnectionError,
)
from search_sync.shared.exceptions.models import ErrorCode, ExceptionDetail

__all__ = [
    "BaseAppException",
    "ExceptionDetail",
    "ErrorCode",
    "SearchConnectionError",
    "IndexCreationError",
    "AliasUpdateError",
    "IndexWriteError",
    "QueryError",
    "DocumentNotFoundError",
    "ConfigurationError",
]
