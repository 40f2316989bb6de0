"""
목적: 콘텐츠 저장소 연동 모듈 공개 API를 제공한다.
설명: 저장소 포트, 조회 조건 모델, 인메모리 구현체를 노출한다.
디자인 패턴: 퍼사드
참조: src/search_sync/integrations/content/ports.py, src/search_sync/integrations/content/in_memory.py
"""

from search_sync.integrations.content.in_memory import InMemoryContentStore
from search_sync.integrations.content.ports import ContentStorePort, FetchQuery, ItemId, Record

__all__ = ["ContentStorePort", "FetchQuery", "InMemoryContentStore", "ItemId", "Record"]
