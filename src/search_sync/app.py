"""
목적: 동기화 엔진 구성 요소를 조립하는 애플리케이션 컨테이너를 제공한다.
설명: 설정으로 SQLite 저장소, 검색 게이트웨이, 재조정 엔진, 드레인 워커를 생성하고 트리거 계층에 필요한 작업을 노출한다.
디자인 패턴: 컴포지션 루트, 퍼사드
참조: src/search_sync/core/indexing/engine.py, src/search_sync/cli.py
"""

from __future__ import annotations

import importlib
from typing import Any, Dict, List, Optional

from elasticsearch import Elasticsearch

from search_sync.core.indexing import (
    EngineConfig,
    IndexingTask,
    IndexingTaskQueue,
    IndexNamingAuthority,
    IndexStateStore,
    LogEntry,
    OperationLog,
    ReconciliationEngine,
    StaticConfigurationResolver,
)
from search_sync.core.indexing.models import ItemId
from search_sync.integrations.content import ContentStorePort, InMemoryContentStore
from search_sync.integrations.db.sqlite import SqliteConnectionManager
from search_sync.integrations.search import SearchEngineGateway
from search_sync.shared.config import SyncSettings
from search_sync.shared.exceptions import ConfigurationError, SearchConnectionError
from search_sync.shared.logging import Logger, create_default_logger
from search_sync.shared.runtime.worker import DrainWorker, WorkerConfig


def load_content_store(factory_path: Optional[str]) -> ContentStorePort:
    """`module:attr` 경로로 콘텐츠 저장소를 생성한다.

    attr가 호출 가능하면 인자 없이 호출한 결과를, 아니면 attr 자체를 저장소로 사용한다.
    경로가 없으면 빈 인메모리 저장소를 반환한다.
    """

    if not factory_path:
        return InMemoryContentStore()
    module_name, _, attr_name = factory_path.partition(":")
    if not module_name or not attr_name:
        raise ConfigurationError(
            f"콘텐츠 저장소 경로는 'module:attr' 형식이어야 합니다: {factory_path}",
            metadata={"factory": factory_path},
        )
    try:
        module = importlib.import_module(module_name)
        target = getattr(module, attr_name)
    except (ImportError, AttributeError) as exc:
        raise ConfigurationError(
            f"콘텐츠 저장소를 불러올 수 없습니다: {factory_path}",
            original=exc,
            metadata={"factory": factory_path},
        ) from exc
    store = target() if callable(target) else target
    if not isinstance(store, ContentStorePort):
        raise ConfigurationError(
            f"콘텐츠 저장소가 find_many/find_one을 제공하지 않습니다: {factory_path}",
            metadata={"factory": factory_path},
        )
    return store


class SearchSyncApp:
    """동기화 엔진 애플리케이션 컨테이너.

    Args:
        settings: 검증된 설정.
        content_store: 콘텐츠 저장소. 생략 시 설정의 팩토리 경로로 생성한다.
        gateway: 검색 게이트웨이. 생략 시 설정으로 생성한다.
        logger: 주입 가능한 로거.
        elasticsearch_cls: 게이트웨이 생성에 사용할 클라이언트 클래스.
    """

    def __init__(
        self,
        settings: SyncSettings,
        content_store: Optional[ContentStorePort] = None,
        gateway: Optional[SearchEngineGateway] = None,
        logger: Optional[Logger] = None,
        elasticsearch_cls=Elasticsearch,
    ) -> None:
        self._settings = settings
        self._logger = logger or create_default_logger("SearchSyncApp")
        self._database = SqliteConnectionManager(settings.storage.database_path)
        self._gateway = gateway or SearchEngineGateway.from_settings(
            settings.elasticsearch,
            elasticsearch_cls=elasticsearch_cls,
        )
        self._resolver = StaticConfigurationResolver(
            settings.collections,
            alias_name=settings.index.alias_name,
        )
        self._queue = IndexingTaskQueue(self._database)
        self._operation_log = OperationLog(self._database)
        self._naming = IndexNamingAuthority(
            IndexStateStore(self._database),
            name_prefix=settings.index.name_prefix,
        )
        self._engine = ReconciliationEngine(
            gateway=self._gateway,
            task_queue=self._queue,
            naming=self._naming,
            operation_log=self._operation_log,
            resolver=self._resolver,
            content_store=content_store or load_content_store(settings.content_store.factory),
            config=EngineConfig(
                max_workers=settings.reconciliation.max_workers,
                continue_on_error=settings.reconciliation.continue_on_error,
                rebuild_strategy=settings.index.rebuild_strategy,
            ),
        )
        self._worker: Optional[DrainWorker] = None

    @property
    def engine(self) -> ReconciliationEngine:
        """재조정 엔진을 반환한다."""

        return self._engine

    @property
    def task_queue(self) -> IndexingTaskQueue:
        """색인 작업 큐를 반환한다."""

        return self._queue

    @property
    def naming(self) -> IndexNamingAuthority:
        """인덱스 이름 권한 객체를 반환한다."""

        return self._naming

    @property
    def gateway(self) -> SearchEngineGateway:
        """검색 게이트웨이를 반환한다."""

        return self._gateway

    def start(self, ensure_index: bool = True) -> None:
        """저장소와 검색 클라이언트를 연결하고 현재 인덱스/별칭을 준비한다.

        검색 엔진에 연결할 수 없으면 경고만 남기고 다음 드레인에서 다시 시도한다.
        """

        self._database.connect()
        self._gateway.connect()
        if not ensure_index:
            return
        try:
            self._engine.ensure_index_ready()
        except SearchConnectionError as error:
            self._logger.warning(f"시작 시 인덱스 준비를 건너뜁니다: {error}")

    def stop(self) -> None:
        """워커와 연결을 정리한다."""

        if self._worker is not None:
            self._worker.stop()
            self._worker = None
        self._gateway.close()
        self._database.close()

    def __enter__(self) -> "SearchSyncApp":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    def start_worker(self, interval: Optional[float] = None) -> DrainWorker:
        """주기 드레인 워커를 시작한다."""

        if self._worker is None:
            config = WorkerConfig(
                name="drain-worker",
                interval=interval or self._settings.reconciliation.drain_interval,
            )
            self._worker = DrainWorker(config, handler=self._engine.index_pending_data)
        self._worker.start()
        return self._worker

    def rebuild_index(self) -> bool:
        """전체 재색인을 실행한다."""

        return self._engine.rebuild_index()

    def index_collection(self, collection_name: str, index_name: Optional[str] = None) -> bool:
        """컬렉션 하나를 색인한다."""

        return self._engine.index_collection(collection_name, index_name)

    def index_pending_data(self) -> bool:
        """대기 작업을 드레인한다."""

        return self._engine.index_pending_data()

    def enqueue_full_site_task(self) -> IndexingTask:
        """전체 재색인 작업을 등록한다."""

        return self._queue.enqueue_full_site_task()

    def enqueue_item_upsert(self, collection_name: str, item_id: ItemId) -> IndexingTask:
        """레코드 upsert 작업을 등록한다."""

        return self._queue.enqueue_item_upsert(collection_name, item_id)

    def enqueue_item_remove(self, collection_name: str, item_id: ItemId) -> IndexingTask:
        """레코드 삭제 작업을 등록한다."""

        return self._queue.enqueue_item_remove(collection_name, item_id)

    def enqueue_collection_reindex(self, collection_name: str) -> IndexingTask:
        """컬렉션 재색인 작업을 등록한다."""

        return self._queue.enqueue_collection_reindex(collection_name)

    def pending_tasks(self) -> List[IndexingTask]:
        """대기 작업 목록을 반환한다."""

        return self._queue.pending_tasks()

    def search(self, query: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """별칭으로 검색한다."""

        return self._gateway.search(self._resolver.get_index_alias_name(), query)

    def recent_logs(self, limit: int = 50) -> List[LogEntry]:
        """최근 운영 로그를 반환한다."""

        return self._operation_log.recent_entries(limit)
