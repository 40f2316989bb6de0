"""
목적: 인메모리 콘텐츠 저장소를 제공한다.
설명: 로컬 실행과 테스트에서 사용하는 ContentStorePort 구현체로 $null/$notNull/$eq 필터와 정렬을 지원한다.
디자인 패턴: 어댑터 패턴
참조: src/search_sync/integrations/content/ports.py
"""

from __future__ import annotations

import copy
import threading
from typing import Any, Dict, Iterable, List, Optional

from search_sync.integrations.content.ports import FetchQuery, ItemId, Record


class InMemoryContentStore:
    """인메모리 콘텐츠 저장소 구현체.

    Args:
        data: 컬렉션 이름별 초기 레코드 목록.
    """

    def __init__(self, data: Optional[Dict[str, Iterable[Record]]] = None) -> None:
        self._lock = threading.Lock()
        self._collections: Dict[str, List[Record]] = {}
        for name, records in (data or {}).items():
            self._collections[name] = [dict(record) for record in records]

    def save(self, collection_name: str, record: Record) -> Record:
        """레코드를 추가하거나 같은 id의 레코드를 교체한다."""

        if "id" not in record:
            raise ValueError("레코드에는 id가 필요합니다.")
        with self._lock:
            records = self._collections.setdefault(collection_name, [])
            for position, existing in enumerate(records):
                if _same_id(existing.get("id"), record["id"]):
                    records[position] = dict(record)
                    break
            else:
                records.append(dict(record))
        return record

    def remove(self, collection_name: str, item_id: ItemId) -> bool:
        """레코드를 삭제한다. 삭제했으면 True."""

        with self._lock:
            records = self._collections.get(collection_name, [])
            for position, existing in enumerate(records):
                if _same_id(existing.get("id"), item_id):
                    del records[position]
                    return True
        return False

    def find_many(self, collection_name: str, query: FetchQuery) -> List[Record]:
        with self._lock:
            records = [copy.deepcopy(item) for item in self._collections.get(collection_name, [])]
        matched = [item for item in records if _matches(item, query.filters)]
        for field, direction in reversed(list(query.sort.items())):
            matched = _sort(matched, field, descending=str(direction).upper() == "DESC")
        return matched

    def find_one(
        self,
        collection_name: str,
        item_id: ItemId,
        populate: Optional[Dict[str, Any]] = None,
    ) -> Optional[Record]:
        with self._lock:
            for item in self._collections.get(collection_name, []):
                if _same_id(item.get("id"), item_id):
                    return copy.deepcopy(item)
        return None


def _same_id(left: Any, right: Any) -> bool:
    return left is not None and str(left) == str(right)


def _matches(record: Record, filters: Dict[str, Dict[str, Any]]) -> bool:
    for field, conditions in filters.items():
        value = record.get(field)
        for operator, expected in conditions.items():
            if operator == "$null" and (value is None) != bool(expected):
                return False
            if operator == "$notNull" and (value is not None) != bool(expected):
                return False
            if operator == "$eq" and value != expected:
                return False
            if operator not in {"$null", "$notNull", "$eq"}:
                raise ValueError(f"지원하지 않는 필터 연산자입니다: {operator}")
    return True


def _sort(records: List[Record], field: str, descending: bool) -> List[Record]:
    present = [item for item in records if item.get(field) is not None]
    missing = [item for item in records if item.get(field) is None]
    present.sort(key=lambda item: item[field], reverse=descending)
    return present + missing
