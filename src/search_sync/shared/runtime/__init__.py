"""
목적: 런타임 실행 유틸리티 공개 API를 제공한다.
설명: 스레드풀과 주기 실행 워커를 노출한다.
디자인 패턴: 퍼사드
참조: src/search_sync/shared/runtime/thread_pool/thread_pool.py, src/search_sync/shared/runtime/worker/worker.py
"""

from search_sync.shared.runtime.thread_pool import TaskRecord, ThreadPool, ThreadPoolConfig
from search_sync.shared.runtime.worker import DrainWorker, WorkerConfig, WorkerState

__all__ = [
    "ThreadPool",
    "ThreadPoolConfig",
    "TaskRecord",
    "DrainWorker",
    "WorkerConfig",
    "WorkerState",
]
