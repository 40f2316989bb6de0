"""
목적: 검색 인덱스 재조정 엔진을 제공한다.
설명: 대기 작업 큐를 드레인해 레코드 upsert/삭제/컬렉션 재색인을 적용하고, 전체 재구축과 별칭 이동을 조율한다.
디자인 패턴: 서비스 계층, 상태 머신(Pending -> Completed)
참조: src/search_sync/core/indexing/task_queue.py, src/search_sync/integrations/search/gateway.py,
    src/search_sync/core/indexing/extraction.py
"""

from __future__ import annotations

import threading
from typing import List, Optional, Tuple
from uuid import uuid4

from search_sync.core.indexing.config_resolver import ConfigurationResolver
from search_sync.core.indexing.extraction import build_document, build_fetch_query, is_eligible
from search_sync.core.indexing.models import (
    CollectionIndexConfig,
    EngineConfig,
    IndexedDocument,
    IndexingTask,
    TaskKind,
)
from search_sync.core.indexing.naming import IndexNamingAuthority, document_id
from search_sync.core.indexing.operation_log import OperationLog
from search_sync.core.indexing.task_queue import IndexingTaskQueue
from search_sync.integrations.content import ContentStorePort, Record
from search_sync.integrations.search import SearchEngineGateway
from search_sync.shared.config.settings import RebuildStrategy
from search_sync.shared.exceptions import IndexCreationError, IndexWriteError, SearchConnectionError
from search_sync.shared.logging import LogContext, Logger, create_default_logger
from search_sync.shared.runtime.thread_pool import ThreadPool, ThreadPoolConfig

REBUILD_SUCCESS_MESSAGE = "Request to immediately re-index site-wide content completed successfully."
REBUILD_FAILURE_MESSAGE = "An error was encountered while trying site-wide re-indexing of content."
PENDING_SUCCESS_TEMPLATE = "Indexing of {count} records complete."
PENDING_FAILURE_PREFIX = "Indexing of records failed -"


class ReconciliationEngine:
    """재조정 엔진 구현체.

    드레인과 재구축은 하나의 재진입 잠금으로 직렬화된다. 드레인 중 전체 재색인 작업을 만나면
    같은 스레드에서 재구축으로 다시 진입한다.

    Args:
        gateway: 검색 엔진 게이트웨이.
        task_queue: 색인 작업 큐.
        naming: 인덱스 이름 권한 객체.
        operation_log: 운영 로그.
        resolver: 컬렉션 색인 규칙 조회기.
        content_store: 콘텐츠 저장소.
        config: 실행 정책.
        logger: 주입 가능한 로거.
    """

    def __init__(
        self,
        gateway: SearchEngineGateway,
        task_queue: IndexingTaskQueue,
        naming: IndexNamingAuthority,
        operation_log: OperationLog,
        resolver: ConfigurationResolver,
        content_store: ContentStorePort,
        config: Optional[EngineConfig] = None,
        logger: Optional[Logger] = None,
    ) -> None:
        self._gateway = gateway
        self._queue = task_queue
        self._naming = naming
        self._operation_log = operation_log
        self._resolver = resolver
        self._content_store = content_store
        self._config = config or EngineConfig()
        self._logger = logger or create_default_logger("ReconciliationEngine")
        self._lock = threading.RLock()

    @property
    def config(self) -> EngineConfig:
        """실행 정책을 반환한다."""

        return self._config

    def ensure_index_ready(self) -> str:
        """현재 인덱스를 만들고 별칭이 그 인덱스만 가리키도록 한다.

        Returns:
            str: 현재 인덱스 이름.
        """

        with self._lock:
            current = self._naming.current_index_name()
            self._gateway.create_index(current)
            alias = self._resolver.get_index_alias_name()
            if self._gateway.alias_targets(alias) != [current]:
                self._gateway.attach_alias(alias, current)
            return current

    def rebuild_index(self) -> bool:
        """설정된 모든 컬렉션으로 인덱스를 다시 채운다.

        실패해도 예외를 던지지 않고 운영 로그에 실패를 남긴 뒤 False를 반환한다.
        """

        with self._lock:
            logger = self._logger.with_context(LogContext(run_id=_run_id()))
            try:
                if self._config.rebuild_strategy == RebuildStrategy.BLUE_GREEN:
                    self._rebuild_blue_green(logger)
                else:
                    self._rebuild_in_place(logger)
            except Exception as error:  # noqa: BLE001 - 재구축 실패는 운영 로그로 보고한다
                logger.error(f"전체 재색인 실패: {error}")
                self._operation_log.record_fail(f"{REBUILD_FAILURE_MESSAGE} {error}")
                return False
            self._operation_log.record_pass(REBUILD_SUCCESS_MESSAGE)
            return True

    def index_collection(self, collection_name: str, index_name: Optional[str] = None) -> bool:
        """컬렉션의 색인 대상 레코드를 모두 인덱스에 upsert한다.

        연결 실패는 즉시 중단하고, 그 외 문서별 쓰기 실패는 모든 레코드를 시도한 뒤
        하나의 IndexWriteError로 모아 던진다.

        Args:
            collection_name: 컬렉션 이름.
            index_name: 대상 인덱스. 생략 시 현재 인덱스.

        Returns:
            bool: 완료 시 True(대상 레코드가 없어도 True).
        """

        with self._lock:
            config = self._resolver.get_collection_config(collection_name)
            target = index_name or self._naming.current_index_name()
            context = LogContext(collection_name=collection_name, index_name=target)
            query = build_fetch_query(config)
            records = self._content_store.find_many(collection_name, query) or []
            documents = self._build_documents(records, config, context)
            self._logger.info(f"컬렉션 색인 시작: {len(documents)}건", context)
            failures = self._upsert_all(target, documents)
            if failures:
                first_document, first_error = failures[0]
                raise IndexWriteError(
                    f"{collection_name} 컬렉션의 문서 {len(failures)}건 색인에 실패했습니다.",
                    original=first_error,
                    metadata={
                        "collection_name": collection_name,
                        "index": target,
                        "failed_document_ids": [document.document_id for document, _ in failures],
                    },
                )
            self._logger.info(f"컬렉션 색인 완료: {len(documents)}건", context)
            return True

    def index_pending_data(self) -> bool:
        """대기 중인 작업을 드레인한다.

        전체 재색인 작업이 하나라도 있으면 재구축 후 조회 시점의 모든 작업을 완료 처리한다.
        그 외에는 별칭이 현재 인덱스를 가리키는지 먼저 확인한 뒤 작업을 등록 순서대로 적용하며,
        실패한 작업은 대기 상태로 남는다.

        Returns:
            bool: 모든 작업이 성공했으면 True.
        """

        with self._lock:
            logger = self._logger.with_context(LogContext(run_id=_run_id()))
            try:
                tasks = self._queue.pending_tasks()
                if tasks and not self._queue.has_full_site_task(tasks):
                    self._ensure_alias_resolves(logger)
            except Exception as error:  # noqa: BLE001 - 드레인 준비 실패는 운영 로그로 보고한다
                logger.error(f"드레인 준비 실패: {error}")
                self._operation_log.record_fail(f"{PENDING_FAILURE_PREFIX} {error}")
                return False

            if self._queue.has_full_site_task(tasks):
                logger.info(f"전체 재색인 작업이 있어 대기 작업 {len(tasks)}건을 재구축으로 대체합니다.")
                if not self.rebuild_index():
                    return False
                self._queue.mark_all_complete(tasks)
                return True

            failures: List[Tuple[IndexingTask, Exception]] = []
            for task in tasks:
                task_logger = logger.with_context(
                    LogContext(task_id=task.task_id, collection_name=task.collection_name)
                )
                try:
                    self._apply_task(task, task_logger)
                    self._queue.mark_complete(task.task_id)
                except Exception as error:  # noqa: BLE001 - 작업 단위 실패는 대기 상태로 남긴다
                    task_logger.error(f"색인 작업 실패: {task.kind.value} ({error})")
                    failures.append((task, error))
                    if not self._config.continue_on_error:
                        break

            if failures:
                _, first_error = failures[0]
                self._operation_log.record_fail(
                    f"{PENDING_FAILURE_PREFIX} {len(failures)} of {len(tasks)} tasks failed: {first_error}"
                )
                return False
            self._operation_log.record_pass(PENDING_SUCCESS_TEMPLATE.format(count=len(tasks)))
            return True

    def _rebuild_in_place(self, logger: Logger) -> None:
        current = self.ensure_index_ready()
        logger.info(f"현재 인덱스에 전체 재색인을 시작합니다: {current}")
        marker = self._queue.enqueue_full_site_task()
        for collection_name in self._resolver.list_configured_collections():
            self.index_collection(collection_name, current)
        self._queue.mark_complete(marker.task_id)
        self._naming.store_current_index_name(current)

    def _rebuild_blue_green(self, logger: Logger) -> None:
        previous = self._naming.current_index_name()
        candidate = self._naming.temporary_index_name()
        if self._gateway.index_exists(candidate):
            cleanup = self._gateway.delete_index(candidate)
            if not cleanup.ok:
                raise IndexCreationError(
                    "이전 재구축에서 남은 임시 인덱스를 삭제하지 못했습니다.",
                    metadata={"index": candidate, "reason": cleanup.reason},
                )
        self._gateway.create_index(candidate)
        logger.info(f"임시 인덱스에 전체 재색인을 시작합니다: {candidate}")
        marker = self._queue.enqueue_full_site_task()
        for collection_name in self._resolver.list_configured_collections():
            self.index_collection(collection_name, candidate)
        self._gateway.attach_alias(self._resolver.get_index_alias_name(), candidate)
        self._naming.store_current_index_name(candidate)
        self._queue.mark_complete(marker.task_id)
        if previous != candidate and self._gateway.index_exists(previous):
            cleanup = self._gateway.delete_index(previous)
            if not cleanup.ok:
                logger.warning(f"이전 인덱스 정리에 실패했습니다: {previous} ({cleanup.reason})")

    def _ensure_alias_resolves(self, logger: Logger) -> None:
        alias = self._resolver.get_index_alias_name()
        if self._gateway.alias_targets(alias):
            return
        logger.warning(f"별칭이 어떤 인덱스도 가리키지 않아 현재 인덱스를 다시 준비합니다: {alias}")
        self.ensure_index_ready()

    def _apply_task(self, task: IndexingTask, logger: Logger) -> None:
        collection_name = task.collection_name or ""
        if not self._resolver.is_collection_configured_for_indexing(collection_name):
            logger.info(f"색인 대상이 아닌 컬렉션이므로 건너뜁니다: {collection_name}")
            return
        if task.kind == TaskKind.ITEM_UPSERT:
            self._upsert_item(task, logger)
        elif task.kind == TaskKind.ITEM_REMOVE:
            self._remove_item(task, logger)
        elif task.kind == TaskKind.COLLECTION_REINDEX:
            self.index_collection(collection_name)
        else:
            raise ValueError(f"드레인에서 처리할 수 없는 작업 종류입니다: {task.kind.value}")

    def _upsert_item(self, task: IndexingTask, logger: Logger) -> None:
        collection_name = task.collection_name or ""
        config = self._resolver.get_collection_config(collection_name)
        alias = self._resolver.get_index_alias_name()
        record = self._content_store.find_one(
            collection_name,
            task.item_id,
            populate=config.populate_spec(),
        )
        if record is None or not is_eligible(record, config):
            logger.info(f"색인 대상이 아닌 레코드이므로 인덱스에서 제거합니다: {task.item_id}")
            self._gateway.delete_document(alias, document_id(collection_name, task.item_id))
            return
        document = build_document(record, config)
        self._gateway.upsert_document(alias, document.document_id, document.fields)

    def _remove_item(self, task: IndexingTask, logger: Logger) -> None:
        collection_name = task.collection_name or ""
        alias = self._resolver.get_index_alias_name()
        removed = self._gateway.delete_document(alias, document_id(collection_name, task.item_id))
        if removed:
            logger.debug(f"인덱스에서 문서를 제거했습니다: {task.item_id}")

    def _build_documents(
        self,
        records: List[Record],
        config: CollectionIndexConfig,
        context: LogContext,
    ) -> List[IndexedDocument]:
        documents: List[IndexedDocument] = []
        for record in records:
            if not is_eligible(record, config):
                continue
            try:
                documents.append(build_document(record, config))
            except ValueError as error:
                self._logger.warning(f"색인할 수 없는 레코드를 건너뜁니다: {error}", context)
        return documents

    def _upsert_all(
        self,
        index_name: str,
        documents: List[IndexedDocument],
    ) -> List[Tuple[IndexedDocument, Exception]]:
        def upsert(document: IndexedDocument) -> None:
            self._gateway.upsert_document(index_name, document.document_id, document.fields)

        failures: List[Tuple[IndexedDocument, Exception]] = []
        if self._config.max_workers <= 1 or len(documents) <= 1:
            for document in documents:
                try:
                    upsert(document)
                except IndexWriteError as error:
                    failures.append((document, error))
            return failures

        pool_config = ThreadPoolConfig(
            max_workers=self._config.max_workers,
            thread_name_prefix="index-collection",
        )
        with ThreadPool(pool_config, logger=self._logger) as pool:
            results = pool.run_all(upsert, documents, abort_on=(SearchConnectionError,))
        for document, _, error in results:
            if error is None:
                continue
            if isinstance(error, SearchConnectionError) or not isinstance(error, IndexWriteError):
                raise error
            failures.append((document, error))
        return failures


def _run_id() -> str:
    return uuid4().hex[:12]
