"""
목적: 제한된 크기의 스레드풀 실행기를 제공한다.
설명: 컬렉션 색인 시 레코드별 upsert를 병렬로 실행하고, 모든 결과를 입력 순서대로 수집한다.
디자인 패턴: 파사드, 커맨드 패턴
참조: src/search_sync/shared/runtime/thread_pool/model.py, src/search_sync/core/indexing/engine.py
"""

from __future__ import annotations

import threading
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from typing import Callable, Iterable, List, Optional, Tuple, Type, TypeVar

from search_sync.shared.logging import Logger, create_default_logger
from search_sync.shared.runtime.thread_pool.model import TaskRecord, ThreadPoolConfig

T = TypeVar("T")
R = TypeVar("R")


class ThreadPool:
    """스레드풀 실행기 구현체.

    with 문 또는 `submit` 최초 호출 시 실행기를 만들고 `shutdown`에서 정리한다.
    """

    def __init__(
        self,
        config: Optional[ThreadPoolConfig] = None,
        logger: Optional[Logger] = None,
    ) -> None:
        self._config = config or ThreadPoolConfig()
        self._logger = logger or create_default_logger("ThreadPool")
        self._executor: Optional[ThreadPoolExecutor] = None
        self._futures: List[Future] = []
        self._lock = threading.RLock()

    def __enter__(self) -> "ThreadPool":
        with self._lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self._config.max_workers,
                    thread_name_prefix=self._config.thread_name_prefix,
                )
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown(wait=True)

    @property
    def pending_count(self) -> int:
        """아직 완료되지 않은 Future 수를 반환한다."""

        with self._lock:
            return len(self._futures)

    def submit(
        self,
        fn: Callable[..., T],
        *args,
        label: Optional[str] = None,
        **kwargs,
    ) -> Future[T]:
        """태스크를 제출한다."""

        with self._lock:
            if self._executor is None:
                self.__enter__()
            if self._executor is None:
                raise RuntimeError("스레드풀이 초기화되지 않았습니다.")
            record = TaskRecord(label=label)
            self._logger.debug(f"태스크 제출: {record.task_id} {record.label or ''}".rstrip())
            future = self._executor.submit(fn, *args, **kwargs)
            self._futures.append(future)
            future.add_done_callback(self._on_future_done)
            return future

    def task(self, fn: Callable[..., T]) -> Callable[..., Future[T]]:
        """데코레이터로 태스크를 등록한다."""

        def wrapper(*args, **kwargs) -> Future[T]:
            return self.submit(fn, *args, **kwargs)

        return wrapper

    def run_all(
        self,
        fn: Callable[[T], R],
        items: Iterable[T],
        abort_on: Tuple[Type[BaseException], ...] = (),
    ) -> List[Tuple[T, Optional[R], Optional[BaseException]]]:
        """모든 항목에 fn을 실행하고 (항목, 결과, 예외) 목록을 입력 순서대로 반환한다.

        개별 항목의 예외는 다른 항목의 실행을 막지 않는다. 단, `abort_on`에 해당하는 예외가
        발생하면 아직 시작되지 않은 항목을 취소하고 그 예외를 즉시 던진다.
        """

        submitted = [(item, self.submit(fn, item)) for item in items]
        if abort_on:
            for future in as_completed([future for _, future in submitted]):
                error = future.exception()
                if isinstance(error, abort_on):
                    cancelled = sum(1 for _, pending in submitted if pending.cancel())
                    self._logger.warning(f"중단 예외로 남은 태스크 {cancelled}건을 취소합니다: {error}")
                    raise error
        results: List[Tuple[T, Optional[R], Optional[BaseException]]] = []
        for item, future in submitted:
            error = future.exception()
            if error is not None:
                results.append((item, None, error))
            else:
                results.append((item, future.result(), None))
        return results

    def shutdown(self, wait: bool = True) -> None:
        """스레드풀을 종료한다."""

        with self._lock:
            if self._executor:
                self._executor.shutdown(wait=wait)
                self._executor = None
                self._futures.clear()
                self._logger.debug("스레드풀이 종료되었습니다.")

    def _on_future_done(self, future: Future) -> None:
        with self._lock:
            try:
                self._futures.remove(future)
            except ValueError:
                return
