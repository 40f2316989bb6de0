"""
목적: 주기 드레인 워커 동작을 검증한다.
설명: 시작 직후 실행, 즉시 실행 요청, 예외 처리, 중지 흐름을 확인한다.
디자인 패턴: 템플릿 메서드
참조: src/search_sync/shared/runtime/worker/worker.py
"""

from __future__ import annotations

import threading

import pytest

from search_sync.shared.runtime.worker import DrainWorker, WorkerConfig, WorkerState


def test_worker_runs_on_start_and_on_trigger() -> None:
    """시작 직후와 trigger 호출 시 핸들러가 실행되는지 검증한다."""

    calls = []
    ran = threading.Event()
    worker = DrainWorker(WorkerConfig(interval=60.0))

    @worker
    def handler() -> bool:
        calls.append(1)
        ran.set()
        return True

    with worker:
        assert ran.wait(timeout=2.0)
        ran.clear()
        worker.trigger()
        assert ran.wait(timeout=2.0)
        assert worker.state == WorkerState.RUNNING

    assert worker.state == WorkerState.STOPPED
    assert len(calls) >= 2


def test_run_once_reports_handler_error() -> None:
    """핸들러 예외가 False와 ERROR 상태로 보고되는지 검증한다."""

    def failing() -> bool:
        raise RuntimeError("drain failed")

    worker = DrainWorker(WorkerConfig(run_on_start=False), handler=failing)

    assert worker.run_once() is False
    assert worker.state == WorkerState.ERROR
    assert worker.run_count == 1


def test_start_without_handler_raises() -> None:
    """핸들러 없이 시작하면 예외가 발생하는지 검증한다."""

    with pytest.raises(ValueError):
        DrainWorker().start()
