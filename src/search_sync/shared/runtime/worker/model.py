"""
목적: 워커 설정 및 상태 모델을 정의한다.
설명: 주기 실행 파라미터와 상태 값을 Pydantic으로 제공한다.
디자인 패턴: 데이터 전송 객체(DTO)
참조: src/search_sync/shared/runtime/worker/worker.py
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class WorkerState(str, Enum):
    """워커 상태 열거형."""

    IDLE = "IDLE"
    RUNNING = "RUNNING"
    STOPPED = "STOPPED"
    ERROR = "ERROR"


class WorkerConfig(BaseModel):
    """워커 설정 모델이다.

    Args:
        name: 워커 이름.
        interval: 핸들러 실행 주기(초).
        run_on_start: 시작 직후 한 번 실행할지 여부.
        stop_on_error: 핸들러 예외 시 워커를 중단할지 여부.
        join_timeout: 중지 시 스레드 종료 대기 시간(초).
    """

    name: str = Field(default="drain-worker")
    interval: float = Field(default=60.0, gt=0)
    run_on_start: bool = Field(default=True)
    stop_on_error: bool = Field(default=False)
    join_timeout: float = Field(default=5.0, ge=0)
