"""
목적: 인메모리 콘텐츠 저장소를 검증한다.
설명: 필터 연산자, 정렬, 단건 조회, 저장/삭제를 확인한다.
디자인 패턴: 어댑터 패턴
참조: src/search_sync/integrations/content/in_memory.py
"""

from __future__ import annotations

import pytest

from search_sync.integrations.content import ContentStorePort, FetchQuery, InMemoryContentStore


def test_filters_compose_and_sort_descending(content_store: InMemoryContentStore) -> None:
    """$notNull/$null 필터가 함께 적용되고 생성 시각 내림차순으로 정렬되는지 검증한다."""

    query = FetchQuery(filters={"publishedAt": {"$notNull": True}, "user": {"$null": True}})

    records = content_store.find_many("article", query)

    assert [record["id"] for record in records] == [1]
    assert [record["id"] for record in content_store.find_many("product", FetchQuery())] == [11, 10]


def test_find_one_matches_int_and_str_ids(content_store: InMemoryContentStore) -> None:
    """정수/문자열 id 모두로 단건 조회가 되는지 검증한다."""

    assert content_store.find_one("product", 10)["title"] == "Mug"
    assert content_store.find_one("product", "11")["title"] == "Cap"
    assert content_store.find_one("product", 99) is None
    assert content_store.find_one("unknown", 1) is None


def test_save_replaces_and_remove_deletes() -> None:
    """같은 id 저장은 교체, 삭제는 제거되는지 검증한다."""

    store = InMemoryContentStore()
    store.save("article", {"id": 1, "title": "v1"})
    store.save("article", {"id": 1, "title": "v2"})

    assert store.find_one("article", 1)["title"] == "v2"
    assert store.remove("article", 1) is True
    assert store.remove("article", 1) is False
    assert isinstance(store, ContentStorePort)


def test_unknown_operator_is_rejected() -> None:
    """지원하지 않는 필터 연산자는 예외가 발생하는지 검증한다."""

    store = InMemoryContentStore({"article": [{"id": 1}]})

    with pytest.raises(ValueError):
        store.find_many("article", FetchQuery(filters={"id": {"$gt": 0}}))
