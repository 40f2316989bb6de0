"""
목적: 스레드풀 모델을 정의한다.
설명: 스레드풀 설정과 제출된 태스크 기록을 Pydantic으로 제공한다.
디자인 패턴: 데이터 전송 객체(DTO)
참조: src/search_sync/shared/runtime/thread_pool/thread_pool.py
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, Field


class ThreadPoolConfig(BaseModel):
    """스레드풀 설정 모델이다.

    Args:
        max_workers: 동시에 실행할 최대 스레드 수.
        thread_name_prefix: 스레드 이름 접두사.
    """

    max_workers: int = Field(default=4, ge=1)
    thread_name_prefix: str = Field(default="search-sync")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TaskRecord(BaseModel):
    """제출된 태스크 기록이다.

    Args:
        task_id: 태스크 식별자.
        label: 로그에 남길 태스크 설명(예: 문서 식별자).
        submitted_at: 제출 시각.
    """

    task_id: str = Field(default_factory=lambda: str(uuid4()))
    label: Optional[str] = None
    submitted_at: datetime = Field(default_factory=_utc_now)
