"""
목적: 인덱스 이름과 매핑 규칙을 제공한다.
설명: 현재/임시 인덱스 이름 계산, 현재 이름 영속화, 결정적 문서 식별자 생성을 담당한다.
디자인 패턴: 정책 객체
참조: src/search_sync/core/indexing/state_store.py, src/search_sync/integrations/search/mapping.py
"""

from __future__ import annotations

import re
from typing import Any, Dict

from search_sync.core.indexing.models import IndexDescriptor, ItemId
from search_sync.core.indexing.state_store import IndexStateStore
from search_sync.integrations.search.mapping import mapping_schema as _mapping_schema
from search_sync.shared.const import SharedConst

CURRENT_INDEX_KEY = "current_index_name"
_SEQUENCE = re.compile(r"^(?P<base>.+)_(?P<number>\d+)$")


def document_id(collection_name: str, item_id: ItemId) -> str:
    """(컬렉션, 레코드 id)로부터 결정적 문서 식별자를 만든다."""

    return f"{collection_name}-{item_id}"


def numbered_index_name(prefix: str, number: int) -> str:
    """번호가 붙은 인덱스 이름을 만든다."""

    return f"{prefix}_{number:0{SharedConst.INDEX_SEQUENCE_WIDTH}d}"


class IndexNamingAuthority:
    """인덱스 이름/매핑 권한 객체.

    Args:
        state_store: 현재 인덱스 이름을 보관하는 저장소.
        name_prefix: 번호가 붙는 인덱스 이름의 접두사.
    """

    def __init__(self, state_store: IndexStateStore, name_prefix: str) -> None:
        self._state_store = state_store
        self._name_prefix = name_prefix

    def current_index_name(self) -> str:
        """영속화된 현재 인덱스 이름을 반환한다. 없으면 첫 번째 번호의 이름."""

        stored = self._state_store.get(CURRENT_INDEX_KEY)
        return stored or numbered_index_name(self._name_prefix, 1)

    def temporary_index_name(self) -> str:
        """현재 이름 다음 번호의 임시 인덱스 이름을 반환한다."""

        current = self.current_index_name()
        match = _SEQUENCE.match(current)
        if match is None:
            return numbered_index_name(current, 1)
        return numbered_index_name(match.group("base"), int(match.group("number")) + 1)

    def store_current_index_name(self, name: str) -> None:
        """현재 인덱스 이름을 영속화한다."""

        self._state_store.set(CURRENT_INDEX_KEY, name)

    def descriptor(self) -> IndexDescriptor:
        """현재/임시 인덱스 이름 정보를 반환한다."""

        return IndexDescriptor(
            current_name=self.current_index_name(),
            temporary_name=self.temporary_index_name(),
        )

    def mapping_schema(self) -> Dict[str, Any]:
        """인덱스 생성 본문을 반환한다."""

        return _mapping_schema()

    def document_id(self, collection_name: str, item_id: ItemId) -> str:
        """결정적 문서 식별자를 반환한다."""

        return document_id(collection_name, item_id)
