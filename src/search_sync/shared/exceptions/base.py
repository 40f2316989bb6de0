"""
목적: 공통 예외 베이스 클래스를 제공한다.
설명: 메시지와 Pydantic 상세 모델, 원본 예외를 함께 보관하며 상세 모델이 없으면 클래스 기본값으로 채운다.
디자인 패턴: 도메인 예외 객체
참조: src/search_sync/shared/exceptions/models.py
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from search_sync.shared.exceptions.models import ErrorCode, ExceptionDetail


class BaseAppException(Exception):
    """애플리케이션 공통 예외 클래스이다.

    Args:
        message: 사용자 또는 시스템에 전달할 메시지.
        detail: 예외 상세 정보 모델. 생략하면 클래스의 기본 코드/힌트로 생성한다.
        original: 원본 예외 객체.
        metadata: detail을 생략했을 때 상세 모델에 담을 메타데이터.
    """

    default_code: str = ErrorCode.UNKNOWN
    default_hint: Optional[str] = None

    def __init__(
        self,
        message: str,
        detail: Optional[ExceptionDetail] = None,
        original: Optional[Exception] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self._message = message
        self._detail = detail or ExceptionDetail(
            code=self.default_code,
            cause=str(original) if original is not None else None,
            hint=self.default_hint,
            metadata=dict(metadata or {}),
        )
        self._original = original

    @property
    def message(self) -> str:
        """주입된 메시지를 반환한다."""

        return self._message

    @property
    def detail(self) -> ExceptionDetail:
        """예외 상세 모델을 반환한다."""

        return self._detail

    @property
    def code(self) -> str:
        """에러 코드를 반환한다."""

        return self._detail.code

    @property
    def original(self) -> Optional[Exception]:
        """원본 예외를 반환한다."""

        return self._original

    def to_dict(self) -> dict:
        """예외 정보를 사전으로 변환한다."""

        return {
            "message": self._message,
            "detail": self._detail.model_dump(),
            "original": repr(self._original) if self._original else None,
        }

    def __str__(self) -> str:
        if self._detail.cause:
            return f"{self._message} ({self._detail.cause})"
        return self._message
