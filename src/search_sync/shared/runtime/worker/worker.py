"""
목적: 주기적으로 드레인을 실행하는 워커를 제공한다.
설명: 백그라운드 스레드에서 등록된 핸들러를 일정 주기로 호출하며 `trigger`로 즉시 실행을 요청할 수 있다.
디자인 패턴: 템플릿 메서드, 커맨드 패턴
참조: src/search_sync/shared/runtime/worker/model.py, src/search_sync/app.py
"""

from __future__ import annotations

import threading
from typing import Callable, Optional

from search_sync.shared.logging import Logger, create_default_logger
from search_sync.shared.runtime.worker.model import WorkerConfig, WorkerState

Handler = Callable[[], bool]


class DrainWorker:
    """주기 실행 워커 구현체.

    핸들러는 생성자 인자 또는 데코레이터로 등록한다.

    Example:
        worker = DrainWorker(WorkerConfig(interval=30))

        @worker
        def drain() -> bool:
            return engine.index_pending_data()
    """

    def __init__(
        self,
        config: Optional[WorkerConfig] = None,
        handler: Optional[Handler] = None,
        logger: Optional[Logger] = None,
    ) -> None:
        self._config = config or WorkerConfig()
        self._logger = logger or create_default_logger(self._config.name)
        self._handler = handler
        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()
        self._wake_event = threading.Event()
        self._state = WorkerState.IDLE
        self._run_count = 0

    @property
    def state(self) -> WorkerState:
        """현재 워커 상태를 반환한다."""

        return self._state

    @property
    def run_count(self) -> int:
        """핸들러가 실행된 횟수를 반환한다."""

        return self._run_count

    def __call__(self, handler: Handler) -> Handler:
        """데코레이터로 핸들러를 등록한다."""

        self._handler = handler
        return handler

    def start(self) -> None:
        """워커 스레드를 시작한다."""

        if self._thread and self._thread.is_alive():
            return
        if self._handler is None:
            raise ValueError("워커 핸들러가 등록되지 않았습니다.")
        self._stop_event.clear()
        if self._config.run_on_start:
            self._wake_event.set()
        self._thread = threading.Thread(target=self._run, name=self._config.name, daemon=True)
        self._thread.start()
        self._state = WorkerState.RUNNING
        self._logger.info("워커가 시작되었습니다.")

    def trigger(self) -> None:
        """다음 주기를 기다리지 않고 즉시 실행을 요청한다."""

        self._wake_event.set()

    def run_once(self) -> bool:
        """현재 스레드에서 핸들러를 한 번 실행한다.

        Returns:
            bool: 핸들러 결과. 예외가 발생하면 False.
        """

        if self._handler is None:
            raise ValueError("워커 핸들러가 없습니다.")
        self._run_count += 1
        try:
            return bool(self._handler())
        except Exception as error:  # noqa: BLE001 - 워커 스레드 유지를 위해 포괄 처리
            self._logger.error(f"워커 처리 실패: {error}")
            self._state = WorkerState.ERROR
            if self._config.stop_on_error:
                self._stop_event.set()
            return False

    def stop(self) -> None:
        """워커를 중지한다."""

        self._stop_event.set()
        self._wake_event.set()
        if self._thread:
            self._thread.join(timeout=self._config.join_timeout)
        self._state = WorkerState.STOPPED
        self._logger.info("워커가 중지되었습니다.")

    def __enter__(self) -> "DrainWorker":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    def _run(self) -> None:
        while not self._stop_event.is_set():
            self._wake_event.wait(timeout=self._config.interval)
            self._wake_event.clear()
            if self._stop_event.is_set():
                break
            self.run_once()
