"""
목적: 콘텐츠 저장소 포트를 정의한다.
설명: 엔진이 사용하는 find_many/find_one 인터페이스와 조회 조건 모델을 제공한다.
디자인 패턴: 포트-어댑터(헥사고날) 패턴
참조: src/search_sync/integrations/content/in_memory.py, src/search_sync/core/indexing/extraction.py
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol, Union, runtime_checkable

from pydantic import BaseModel, Field

ItemId = Union[int, str]
Record = Dict[str, Any]


class FetchQuery(BaseModel):
    """컬렉션 조회 조건 모델이다.

    Args:
        sort: 정렬 조건. 기본값은 생성 시각 내림차순.
        filters: `{"필드": {"$notNull": True}}` 형태의 필터.
        populate: 함께 채울 관계 필드 사양.
    """

    sort: Dict[str, str] = Field(default_factory=lambda: {"createdAt": "DESC"})
    filters: Dict[str, Dict[str, Any]] = Field(default_factory=dict)
    populate: Optional[Dict[str, Any]] = None


@runtime_checkable
class ContentStorePort(Protocol):
    """콘텐츠 저장소 인터페이스."""

    def find_many(self, collection_name: str, query: FetchQuery) -> List[Record]:
        """조건에 맞는 레코드 목록을 반환한다."""

    def find_one(
        self,
        collection_name: str,
        item_id: ItemId,
        populate: Optional[Dict[str, Any]] = None,
    ) -> Optional[Record]:
        """단일 레코드를 반환한다. 없으면 None."""
