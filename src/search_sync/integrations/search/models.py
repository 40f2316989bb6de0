"""
목적: 검색 게이트웨이 결과 모델을 정의한다.
설명: 실패해도 예외를 던지지 않는 정리 작업의 결과를 Pydantic으로 표현한다.
디자인 패턴: 데이터 전송 객체(DTO)
참조: src/search_sync/integrations/search/gateway.py
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class CleanupResult(BaseModel):
    """최선 노력(best-effort) 정리 작업 결과이다.

    Args:
        ok: 작업 성공 여부.
        target: 대상 인덱스 이름.
        reason: 실패 사유.
    """

    ok: bool
    target: str
    reason: Optional[str] = None
