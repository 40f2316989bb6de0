"""
목적: 테스트 공통 픽스처와 로깅 훅을 제공한다.
설명: 인메모리 Elasticsearch 대역, 임시 SQLite 저장소, 콘텐츠 저장소, 엔진 조립 픽스처를 제공한다.
디자인 패턴: 테스트 픽스처 + 테스트 훅, 테스트 대역(Fake)
참조: src/search_sync/integrations/search/gateway.py, src/search_sync/core/indexing/engine.py
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Callable, Dict, Iterator, List, Optional, Set

import pytest
from elastic_transport import ApiResponseMeta, HttpHeaders, NodeConfig
from elasticsearch import ApiError, BadRequestError, NotFoundError

from search_sync.core.indexing import (
    EngineConfig,
    IndexingTaskQueue,
    IndexNamingAuthority,
    IndexStateStore,
    OperationLog,
    ReconciliationEngine,
    StaticConfigurationResolver,
)
from search_sync.integrations.content import InMemoryContentStore
from search_sync.integrations.db.sqlite import SqliteConnectionManager
from search_sync.integrations.search import SearchEngineGateway
from search_sync.shared.config import ElasticsearchSettings
from search_sync.shared.logging import InMemoryLogger, InMemoryLogRepository

_LOGGER = logging.getLogger("tests")

ALIAS_NAME = "search-sync"
INDEX_PREFIX = "search-sync-index"


def make_api_error(status: int, message: str, error_cls=ApiError) -> ApiError:
    """테스트용 Elasticsearch API 예외를 만든다."""

    meta = ApiResponseMeta(
        status=status,
        http_version="1.1",
        headers=HttpHeaders(),
        duration=0.0,
        node=NodeConfig("http", "localhost", 9200),
    )
    return error_cls(message, meta=meta, body={"error": {"type": message}, "status": status})


def _not_found(target: str) -> NotFoundError:
    return make_api_error(404, f"not_found: {target}", NotFoundError)


def _index_not_found(target: str) -> NotFoundError:
    return make_api_error(404, "index_not_found_exception", NotFoundError)


FailureRule = Callable[[Dict[str, Any]], Optional[Exception]]


class FakeIndicesClient:
    """indices 네임스페이스 대역."""

    def __init__(self, owner: "FakeElasticsearch") -> None:
        self._owner = owner

    def exists(self, index: str) -> bool:
        self._owner.maybe_fail("indices.exists", index=index)
        return index in self._owner.documents

    def create(self, index: str, settings: Optional[dict] = None, mappings: Optional[dict] = None) -> dict:
        self._owner.maybe_fail("indices.create", index=index)
        if index in self._owner.documents:
            raise make_api_error(400, "resource_already_exists_exception", BadRequestError)
        self._owner.documents[index] = {}
        self._owner.created_bodies[index] = {"settings": settings, "mappings": mappings}
        return {"acknowledged": True, "index": index}

    def delete(self, index: str) -> dict:
        self._owner.maybe_fail("indices.delete", index=index)
        if index not in self._owner.documents:
            raise _index_not_found(index)
        del self._owner.documents[index]
        for targets in self._owner.aliases.values():
            targets.discard(index)
        return {"acknowledged": True}

    def refresh(self, index: str) -> dict:
        self._owner.maybe_fail("indices.refresh", index=index)
        self._owner.resolve(index)
        self._owner.refresh_count += 1
        return {"_shards": {"failed": 0}}

    def exists_alias(self, name: str) -> bool:
        self._owner.maybe_fail("indices.exists_alias", name=name)
        return bool(self._owner.aliases.get(name))

    def get_alias(self, name: str) -> dict:
        self._owner.maybe_fail("indices.get_alias", name=name)
        targets = self._owner.aliases.get(name)
        if not targets:
            raise _not_found(name)
        return {index: {"aliases": {name: {}}} for index in targets}

    def update_aliases(self, actions: List[dict]) -> dict:
        self._owner.maybe_fail("indices.update_aliases", actions=actions)
        staged = {alias: set(targets) for alias, targets in self._owner.aliases.items()}
        for action in actions:
            if "remove" in action:
                body = action["remove"]
                targets = staged.setdefault(body["alias"], set())
                if body["index"] == "*":
                    targets.clear()
                else:
                    targets.discard(body["index"])
            if "add" in action:
                body = action["add"]
                if body["index"] not in self._owner.documents:
                    raise _index_not_found(body["index"])
                staged.setdefault(body["alias"], set()).add(body["index"])
        self._owner.aliases = staged
        self._owner.alias_requests.append(copy.deepcopy(actions))
        return {"acknowledged": True}


class FakeElasticsearch:
    """인메모리 Elasticsearch 클라이언트 대역.

    `failures["index"] = error`처럼 연산 이름에 예외(또는 인자를 받아 예외를 반환하는 함수)를
    등록하면 해당 호출에서 예외를 던진다.
    """

    def __init__(self, hosts: Any = None, **options: Any) -> None:
        self.hosts = hosts
        self.options = options
        self.documents: Dict[str, Dict[str, dict]] = {}
        self.aliases: Dict[str, Set[str]] = {}
        self.created_bodies: Dict[str, dict] = {}
        self.alias_requests: List[List[dict]] = []
        self.upserts: List[tuple] = []
        self.failures: Dict[str, Any] = {}
        self.refresh_count = 0
        self.closed = False
        self.indices = FakeIndicesClient(self)

    def maybe_fail(self, operation: str, **kwargs: Any) -> None:
        rule = self.failures.get(operation)
        if rule is None:
            return
        error = rule if isinstance(rule, Exception) else rule(kwargs)
        if error is not None:
            raise error

    def resolve(self, name: str) -> str:
        if name in self.documents:
            return name
        targets = self.aliases.get(name)
        if not targets:
            raise _index_not_found(name)
        if len(targets) > 1:
            raise make_api_error(400, "illegal_argument_exception", BadRequestError)
        return next(iter(targets))

    def ping(self) -> bool:
        self.maybe_fail("ping")
        return True

    def close(self) -> None:
        self.closed = True

    def index(self, index: str, id: str, document: dict) -> dict:
        self.maybe_fail("index", index=index, id=id, document=document)
        target = self.resolve(index)
        self.documents[target][id] = copy.deepcopy(document)
        self.upserts.append((index, id, copy.deepcopy(document)))
        return {"_id": id, "result": "created"}

    def delete(self, index: str, id: str) -> dict:
        self.maybe_fail("delete", index=index, id=id)
        target = self.resolve(index)
        if id not in self.documents[target]:
            raise _not_found(id)
        del self.documents[target][id]
        return {"_id": id, "result": "deleted"}

    def search(self, index: str, **query: Any) -> dict:
        self.maybe_fail("search", index=index, **query)
        target = self.resolve(index)
        hits = [
            {"_index": target, "_id": doc_id, "_source": copy.deepcopy(source)}
            for doc_id, source in self.documents[target].items()
        ]
        return {"hits": {"total": {"value": len(hits), "relation": "eq"}, "hits": hits}}

    def docs_via_alias(self, alias: str) -> Dict[str, dict]:
        """별칭이 가리키는 인덱스의 문서를 반환한다."""

        return self.documents[self.resolve(alias)]


@pytest.fixture
def fake_es() -> FakeElasticsearch:
    """인메모리 Elasticsearch 대역을 반환한다."""

    return FakeElasticsearch()


@pytest.fixture
def api_error() -> Callable[..., ApiError]:
    """API 예외 생성 함수를 반환한다."""

    return make_api_error


@pytest.fixture
def log_repository() -> InMemoryLogRepository:
    """테스트 로그 저장소를 반환한다."""

    return InMemoryLogRepository()


@pytest.fixture
def logger(log_repository: InMemoryLogRepository) -> InMemoryLogger:
    """stdout 출력 없이 저장소에만 기록하는 로거를 반환한다."""

    return InMemoryLogger(name="test", repository=log_repository, emit_stdout=False)


@pytest.fixture
def gateway(fake_es: FakeElasticsearch, logger: InMemoryLogger) -> Iterator[SearchEngineGateway]:
    """대역 클라이언트에 연결된 게이트웨이를 반환한다."""

    instance = SearchEngineGateway.from_settings(
        ElasticsearchSettings(hosts=["http://localhost:9200"]),
        logger=logger,
        elasticsearch_cls=lambda hosts, **options: fake_es,
    )
    instance.connect()
    yield instance
    instance.close()


@pytest.fixture
def sqlite_manager(tmp_path) -> Iterator[SqliteConnectionManager]:
    """임시 파일 기반 SQLite 연결을 반환한다."""

    manager = SqliteConnectionManager(str(tmp_path / "search_sync.db"))
    manager.connect()
    yield manager
    manager.close()


@pytest.fixture
def task_queue(sqlite_manager: SqliteConnectionManager) -> IndexingTaskQueue:
    """색인 작업 큐를 반환한다."""

    return IndexingTaskQueue(sqlite_manager)


@pytest.fixture
def operation_log(sqlite_manager: SqliteConnectionManager) -> OperationLog:
    """운영 로그를 반환한다."""

    return OperationLog(sqlite_manager)


@pytest.fixture
def naming(sqlite_manager: SqliteConnectionManager) -> IndexNamingAuthority:
    """인덱스 이름 권한 객체를 반환한다."""

    return IndexNamingAuthority(IndexStateStore(sqlite_manager), name_prefix=INDEX_PREFIX)


@pytest.fixture
def content_store() -> InMemoryContentStore:
    """기사/상품 컬렉션이 채워진 콘텐츠 저장소를 반환한다."""

    return InMemoryContentStore(
        {
            "article": [
                {"id": 1, "title": "First", "createdAt": "2024-01-01", "publishedAt": "2024-01-02", "user": None},
                {"id": 2, "title": "Draft", "createdAt": "2024-01-03", "publishedAt": None, "user": None},
                {"id": 3, "title": "Owned", "createdAt": "2024-01-04", "publishedAt": "2024-01-05", "user": {"id": 9}},
            ],
            "product": [
                {"id": 10, "title": "Mug", "description": "Ceramic mug", "createdAt": "2024-02-01"},
                {"id": 11, "title": "Cap", "description": "Blue cap", "createdAt": "2024-02-02"},
            ],
        }
    )


DEFAULT_COLLECTIONS: Dict[str, Dict[str, Any]] = {
    "article": {"fields": ["title"], "draft_publish": True, "exclude_user_linked": True},
    "product": {"fields": ["title", "description"]},
}


@pytest.fixture
def make_engine(
    gateway: SearchEngineGateway,
    task_queue: IndexingTaskQueue,
    naming: IndexNamingAuthority,
    operation_log: OperationLog,
    content_store: InMemoryContentStore,
    logger: InMemoryLogger,
) -> Callable[..., ReconciliationEngine]:
    """규칙/정책을 바꿔 가며 엔진을 조립하는 팩토리를 반환한다."""

    def factory(
        collections: Optional[Dict[str, Dict[str, Any]]] = None,
        config: Optional[EngineConfig] = None,
        store: Any = None,
    ) -> ReconciliationEngine:
        resolver = StaticConfigurationResolver(
            DEFAULT_COLLECTIONS if collections is None else collections,
            alias_name=ALIAS_NAME,
        )
        return ReconciliationEngine(
            gateway=gateway,
            task_queue=task_queue,
            naming=naming,
            operation_log=operation_log,
            resolver=resolver,
            content_store=store or content_store,
            config=config,
            logger=logger,
        )

    return factory


def pytest_sessionstart(session) -> None:  # noqa: D401 - pytest 훅 시그니처 유지
    """테스트 세션 시작을 로깅한다."""

    _LOGGER.info("테스트 세션 시작")


def pytest_sessionfinish(session, exitstatus: int) -> None:  # noqa: D401 - pytest 훅 시그니처 유지
    """테스트 세션 종료를 로깅한다."""

    _LOGGER.info("테스트 세션 종료 (exitstatus=%s)", exitstatus)


def pytest_runtest_logreport(report) -> None:  # noqa: D401 - pytest 훅 시그니처 유지
    """테스트 결과를 로깅한다."""

    if report.when != "call":
        return
    if report.passed:
        _LOGGER.info("테스트 완료: %s", report.nodeid)
        return
    if report.skipped:
        _LOGGER.warning("테스트 스킵: %s", report.nodeid)
        return
    _LOGGER.error("테스트 실패: %s", report.nodeid)
