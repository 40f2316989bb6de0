"""
목적: 스레드풀 실행기 기본 동작을 검증한다.
설명: 태스크 제출, 데코레이터 등록, 전체 실행 결과 수집을 확인한다.
디자인 패턴: 파사드, 커맨드 패턴
참조: src/search_sync/shared/runtime/thread_pool/thread_pool.py, src/search_sync/shared/runtime/thread_pool/model.py
"""

from __future__ import annotations

import time

import pytest

from search_sync.shared.runtime.thread_pool import ThreadPool, ThreadPoolConfig


def test_thread_pool_submit_and_shutdown() -> None:
    """스레드풀 제출 및 종료 동작을 검증한다."""

    pool = ThreadPool(ThreadPoolConfig(max_workers=2, thread_name_prefix="unit"))
    future = pool.submit(lambda x, y: x + y, 1, 2)

    assert future.result(timeout=1.0) == 3

    pool.shutdown()
    assert pool.pending_count == 0


def test_thread_pool_task_decorator() -> None:
    """데코레이터 기반 태스크 등록을 검증한다."""

    with ThreadPool(ThreadPoolConfig(max_workers=1, thread_name_prefix="unit")) as pool:
        @pool.task
        def multiply(a: int, b: int) -> int:
            return a * b

        future = multiply(3, 4)
        assert future.result(timeout=1.0) == 12


def test_run_all_keeps_order_and_isolates_errors() -> None:
    """한 항목의 예외가 다른 항목 실행을 막지 않고 순서가 유지되는지 검증한다."""

    def square(value: int) -> int:
        if value == 2:
            raise ValueError("boom")
        return value * value

    with ThreadPool(ThreadPoolConfig(max_workers=3)) as pool:
        results = pool.run_all(square, [1, 2, 3])

    assert [item for item, _, _ in results] == [1, 2, 3]
    assert results[0][1] == 1
    assert isinstance(results[1][2], ValueError)
    assert results[2][1] == 9


def test_run_all_abort_on_cancels_remaining_items() -> None:
    """중단 예외가 발생하면 남은 항목을 시작하지 않고 예외를 던지는지 검증한다."""

    attempted = []

    def work(item: int) -> int:
        attempted.append(item)
        if item == 0:
            raise ConnectionError("down")
        time.sleep(0.01)
        return item

    with ThreadPool(ThreadPoolConfig(max_workers=1, thread_name_prefix="unit")) as pool:
        with pytest.raises(ConnectionError):
            pool.run_all(work, range(10), abort_on=(ConnectionError,))

    assert attempted[0] == 0
    assert len(attempted) <= 3
