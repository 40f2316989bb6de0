"""
목적: 레코드 조회 조건 생성과 색인 필드 추출을 제공한다.
설명: 컬렉션 규칙으로 FetchQuery를 만들고, 레코드의 색인 대상 여부 판정과 필드 추출/이름 변경을 수행한다.
디자인 패턴: 순수 함수 모듈
참조: src/search_sync/core/indexing/models.py, src/search_sync/integrations/content/ports.py
"""

from __future__ import annotations

from typing import Any, Dict, List

from search_sync.core.indexing.models import CollectionIndexConfig, FieldRule, IndexedDocument
from search_sync.core.indexing.naming import document_id
from search_sync.integrations.content import FetchQuery, Record

PUBLISHED_AT_FIELD = "publishedAt"
USER_FIELD = "user"


def build_fetch_query(config: CollectionIndexConfig) -> FetchQuery:
    """컬렉션 전체 색인용 조회 조건을 만든다.

    초안/게시 컬렉션은 `publishedAt`이 있는 레코드로, 사용자 연결 제외 컬렉션은 `user`가 없는
    레코드로 제한하며 두 조건은 함께 적용된다.
    """

    filters: Dict[str, Dict[str, Any]] = {}
    if config.draft_publish:
        filters[PUBLISHED_AT_FIELD] = {"$notNull": True}
    if config.exclude_user_linked:
        filters[USER_FIELD] = {"$null": True}
    return FetchQuery(
        sort={"createdAt": "DESC"},
        filters=filters,
        populate=config.populate_spec(),
    )


def is_eligible(record: Record, config: CollectionIndexConfig) -> bool:
    """레코드가 컬렉션 규칙상 색인 대상인지 반환한다."""

    if config.draft_publish and record.get(PUBLISHED_AT_FIELD) is None:
        return False
    if config.exclude_user_linked and record.get(USER_FIELD) is not None:
        return False
    return True


def extract_fields(record: Record, config: CollectionIndexConfig) -> Dict[str, Any]:
    """색인 대상 필드만 골라 색인 문서 본문을 만든다."""

    extracted: Dict[str, Any] = {}
    for rule in config.fields:
        if not rule.index or rule.name not in record:
            continue
        extracted[rule.target_name] = _apply_subfields(record[rule.name], rule)
    return extracted


def build_document(record: Record, config: CollectionIndexConfig) -> IndexedDocument:
    """레코드를 색인 문서로 변환한다."""

    if record.get("id") is None:
        raise ValueError(f"{config.collection_name} 레코드에 id가 없습니다.")
    return IndexedDocument(
        collection_name=config.collection_name,
        item_id=record["id"],
        document_id=document_id(config.collection_name, record["id"]),
        fields=extract_fields(record, config),
    )


def _apply_subfields(value: Any, rule: FieldRule) -> Any:
    if not rule.subfields:
        return value
    if isinstance(value, dict):
        return _pick(value, rule.subfields)
    if isinstance(value, list):
        return [_pick(item, rule.subfields) if isinstance(item, dict) else item for item in value]
    return value


def _pick(value: Dict[str, Any], keys: List[str]) -> Dict[str, Any]:
    return {key: value[key] for key in keys if key in value}
