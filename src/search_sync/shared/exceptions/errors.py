"""
목적: 인덱스 동기화 도메인 예외를 정의한다.
설명: 검색 엔진 연결/인덱스 생성/쓰기/조회/설정 오류를 에러 코드와 함께 분류한다.
디자인 패턴: 도메인 예외 계층
참조: src/search_sync/integrations/search/gateway.py, src/search_sync/core/indexing/engine.py
"""

from __future__ import annotations

from search_sync.shared.exceptions.base import BaseAppException
from search_sync.shared.exceptions.models import ErrorCode


class SearchConnectionError(BaseAppException):
    """검색 엔진에 연결할 수 없거나 요청 시간이 초과되었을 때 발생한다."""

    default_code = ErrorCode.SEARCH_CONNECTION
    default_hint = "Elasticsearch 호스트/인증 정보와 네트워크 상태를 확인하세요."


class IndexCreationError(BaseAppException):
    """인덱스 생성 또는 인덱스 수명주기 작업이 실패했을 때 발생한다."""

    default_code = ErrorCode.INDEX_CREATION


class AliasUpdateError(IndexCreationError):
    """별칭(alias) 이동이 실패했을 때 발생한다."""

    default_code = ErrorCode.ALIAS_UPDATE


class IndexWriteError(BaseAppException):
    """문서 색인/삭제가 실패했을 때 발생한다."""

    default_code = ErrorCode.INDEX_WRITE


class QueryError(BaseAppException):
    """검색 요청이 실패했을 때 발생한다."""

    default_code = ErrorCode.QUERY


class DocumentNotFoundError(BaseAppException):
    """삭제 대상 문서가 인덱스에 존재하지 않을 때 발생한다."""

    default_code = ErrorCode.DOCUMENT_NOT_FOUND


class ConfigurationError(BaseAppException):
    """설정 또는 컬렉션 색인 규칙을 해석할 수 없을 때 발생한다."""

    default_code = ErrorCode.CONFIGURATION
    default_hint = "설정 파일과 SEARCH_SYNC__ 환경 변수를 확인하세요."
