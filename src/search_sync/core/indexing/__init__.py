"""
목적: 인덱스 동기화 모듈 공개 API를 제공한다.
설명: 재조정 엔진, 작업 큐, 운영 로그, 이름 규칙, 설정 조회기, 도메인 모델을 노출한다.
디자인 패턴: 퍼사드
참조: src/search_sync/core/indexing/engine.py, src/search_sync/core/indexing/task_queue.py
"""

from search_sync.core.indexing.config_resolver import (
    ConfigurationResolver,
    StaticConfigurationResolver,
)
from search_sync.core.indexing.engine import (
    PENDING_FAILURE_PREFIX,
    PENDING_SUCCESS_TEMPLATE,
    REBUILD_FAILURE_MESSAGE,
    REBUILD_SUCCESS_MESSAGE,
    ReconciliationEngine,
)
from search_sync.core.indexing.extraction import (
    build_document,
    build_fetch_query,
    extract_fields,
    is_eligible,
)
from search_sync.core.indexing.models import (
    CollectionIndexConfig,
    EngineConfig,
    FieldRule,
    IndexDescriptor,
    IndexedDocument,
    IndexingTask,
    LogEntry,
    LogOutcome,
    TaskKind,
)
from search_sync.core.indexing.naming import IndexNamingAuthority, document_id
from search_sync.core.indexing.operation_log import OperationLog
from search_sync.core.indexing.state_store import IndexStateStore
from search_sync.core.indexing.task_queue import IndexingTaskQueue

__all__ = [
    "ReconciliationEngine",
    "IndexingTaskQueue",
    "OperationLog",
    "IndexNamingAuthority",
    "IndexStateStore",
    "ConfigurationResolver",
    "StaticConfigurationResolver",
    "IndexingTask",
    "TaskKind",
    "CollectionIndexConfig",
    "FieldRule",
    "IndexedDocument",
    "IndexDescriptor",
    "LogEntry",
    "LogOutcome",
    "EngineConfig",
    "build_fetch_query",
    "build_document",
    "extract_fields",
    "is_eligible",
    "document_id",
    "REBUILD_SUCCESS_MESSAGE",
    "REBUILD_FAILURE_MESSAGE",
    "PENDING_SUCCESS_TEMPLATE",
    "PENDING_FAILURE_PREFIX",
]
