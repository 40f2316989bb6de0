"""
목적: 워커 모듈 공개 API를 제공한다.
설명: 주기 드레인 워커와 설정/상태 모델을 노출한다.
디자인 패턴: 퍼사드
참조: src/search_sync/shared/runtime/worker/worker.py
"""

from search_sync.shared.runtime.worker.model import WorkerConfig, WorkerState
from search_sync.shared.runtime.worker.worker import DrainWorker

__all__ = ["DrainWorker", "WorkerConfig", "WorkerState"]
