"""
목적: 검색 엔진 연동 모듈 공개 API를 제공한다.
설명: Elasticsearch 게이트웨이, 연결 관리자, 인덱스 생성 본문을 노출한다.
디자인 패턴: 퍼사드
참조: src/search_sync/integrations/search/gateway.py, src/search_sync/integrations/search/mapping.py
"""

from search_sync.integrations.search.connection import ElasticConnectionManager
from search_sync.integrations.search.gateway import SearchEngineGateway
from search_sync.integrations.search.mapping import (
    NGRAM_ANALYZER,
    NGRAM_TOKENIZER,
    index_mappings,
    index_settings,
    mapping_schema,
)
from search_sync.integrations.search.models import CleanupResult

__all__ = [
    "SearchEngineGateway",
    "ElasticConnectionManager",
    "CleanupResult",
    "mapping_schema",
    "index_settings",
    "index_mappings",
    "NGRAM_ANALYZER",
    "NGRAM_TOKENIZER",
]
