"""
목적: 인덱스 이름 권한 객체를 검증한다.
설명: 기본 이름, 다음 번호 임시 이름, 현재 이름 영속화, 결정적 문서 식별자를 확인한다.
디자인 패턴: 정책 객체
참조: src/search_sync/core/indexing/naming.py, src/search_sync/core/indexing/state_store.py
"""

from __future__ import annotations

from search_sync.core.indexing import IndexNamingAuthority, IndexStateStore, document_id


def test_default_and_temporary_names(naming: IndexNamingAuthority) -> None:
    """저장된 이름이 없을 때 기본 이름과 임시 이름을 검증한다."""

    descriptor = naming.descriptor()

    assert descriptor.current_name == "search-sync-index_000001"
    assert descriptor.temporary_name == "search-sync-index_000002"


def test_stored_name_survives_new_authority(naming: IndexNamingAuthority, sqlite_manager) -> None:
    """저장한 현재 이름이 새 객체에서도 유지되는지 검증한다."""

    naming.store_current_index_name("search-sync-index_000007")
    reopened = IndexNamingAuthority(IndexStateStore(sqlite_manager), name_prefix="other")

    assert reopened.current_index_name() == "search-sync-index_000007"
    assert reopened.temporary_index_name() == "search-sync-index_000008"


def test_unnumbered_name_gets_first_sequence(naming: IndexNamingAuthority) -> None:
    """번호 없는 이름 뒤에 첫 번호가 붙는지 검증한다."""

    naming.store_current_index_name("legacy")

    assert naming.temporary_index_name() == "legacy_000001"


def test_document_id_is_deterministic(naming: IndexNamingAuthority) -> None:
    """문서 식별자가 (컬렉션, id)로 결정되는지 검증한다."""

    assert document_id("article", 42) == "article-42"
    assert naming.document_id("article", "42") == "article-42"
    assert naming.mapping_schema()["settings"]["index"]["max_ngram_diff"] == 2
