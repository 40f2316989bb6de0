"""
목적: 애플리케이션 컨테이너 조립과 노출 작업을 검증한다.
설명: 설정 기반 조립, 시작 시 인덱스 준비, 작업 등록부터 검색까지의 흐름, 콘텐츠 저장소 로딩을 확인한다.
디자인 패턴: 컴포지션 루트
참조: src/search_sync/app.py
"""

from __future__ import annotations

import pytest
from elasticsearch import ConnectionError as ESConnectionError

from search_sync.app import SearchSyncApp, load_content_store
from search_sync.integrations.content import InMemoryContentStore
from search_sync.shared.config import ConfigLoader
from search_sync.shared.exceptions import ConfigurationError


def _settings(tmp_path):
    return ConfigLoader().add_dict(
        {
            "index": {"alias_name": "shop", "name_prefix": "shop-index"},
            "storage": {"database_path": str(tmp_path / "app.db")},
            "collections": {"product": {"fields": ["title"]}},
        }
    ).build_settings()


def _store():
    return InMemoryContentStore({"product": [{"id": 1, "title": "Mug", "createdAt": "2024-01-01"}]})


def test_app_flow_from_enqueue_to_search(tmp_path, fake_es) -> None:
    """작업 등록, 드레인, 검색, 운영 로그 조회 흐름을 검증한다."""

    app = SearchSyncApp(
        _settings(tmp_path),
        content_store=_store(),
        elasticsearch_cls=lambda hosts, **options: fake_es,
    )
    with app:
        assert app.gateway.alias_targets("shop") == ["shop-index_000001"]
        app.enqueue_item_upsert("product", 1)
        assert len(app.pending_tasks()) == 1

        assert app.index_pending_data() is True

        hits = app.search({"query": {"match_all": {}}})["hits"]["hits"]
        assert [hit["_id"] for hit in hits] == ["product-1"]
        assert app.recent_logs(limit=1)[0].message == "Indexing of 1 records complete."
        assert app.pending_tasks() == []

    assert fake_es.closed is True


def test_app_rebuild_and_collection_operations(tmp_path, fake_es) -> None:
    """재구축과 컬렉션 색인, 나머지 등록 작업을 검증한다."""

    app = SearchSyncApp(
        _settings(tmp_path),
        content_store=_store(),
        elasticsearch_cls=lambda hosts, **options: fake_es,
    )
    app.start()
    try:
        assert app.rebuild_index() is True
        assert app.index_collection("product") is True
        assert app.enqueue_full_site_task().kind.value == "full-site-reindex"
        assert app.enqueue_collection_reindex("product").collection_name == "product"
        assert app.enqueue_item_remove("product", 1).item_id == 1
        assert app.naming.current_index_name() == "shop-index_000001"
    finally:
        app.stop()


def test_start_tolerates_unreachable_search_engine_and_drain_recovers(tmp_path, fake_es) -> None:
    """검색 엔진에 연결할 수 없어도 시작이 실패하지 않고, 복구 후 드레인이 별칭을 준비하는지 검증한다."""

    fake_es.failures["indices.exists"] = ESConnectionError("refused")
    app = SearchSyncApp(
        _settings(tmp_path),
        content_store=_store(),
        elasticsearch_cls=lambda hosts, **options: fake_es,
    )

    app.start()
    app.enqueue_item_upsert("product", 1)
    assert app.index_pending_data() is False
    assert len(app.pending_tasks()) == 1

    del fake_es.failures["indices.exists"]
    assert app.index_pending_data() is True
    assert app.pending_tasks() == []
    assert app.gateway.alias_targets("shop") == ["shop-index_000001"]
    app.stop()


def test_load_content_store_from_path() -> None:
    """module:attr 경로로 콘텐츠 저장소를 불러오는지 검증한다."""

    store = load_content_store("search_sync.integrations.content:InMemoryContentStore")

    assert isinstance(store, InMemoryContentStore)
    assert isinstance(load_content_store(None), InMemoryContentStore)


@pytest.mark.parametrize(
    "path",
    [
        "no-colon",
        "missing_module_for_tests:factory",
        "search_sync.shared.const:Missing",
        "search_sync.shared.const:SharedConst",
    ],
)
def test_load_content_store_rejects_bad_paths(path) -> None:
    """잘못된 경로가 ConfigurationError로 보고되는지 검증한다."""

    with pytest.raises(ConfigurationError):
        load_content_store(path)
