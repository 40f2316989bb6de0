"""
목적: 인덱스 동기화 도메인 모델을 정의한다.
설명: 색인 작업, 컬렉션 색인 규칙, 색인 문서, 운영 로그, 인덱스 이름 정보를 Pydantic으로 제공한다.
디자인 패턴: 데이터 전송 객체(DTO)
참조: src/search_sync/core/indexing/task_queue.py, src/search_sync/core/indexing/engine.py
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Union
from uuid import uuid4

from pydantic import BaseModel, Field, field_validator, model_validator

from search_sync.shared.config.settings import RebuildStrategy

ItemId = Union[int, str]


def _utc_now() -> datetime:
    """UTC 기준의 timezone-aware 시간을 반환한다."""

    return datetime.now(timezone.utc)


class TaskKind(str, Enum):
    """색인 작업 종류 열거형."""

    FULL_SITE_REINDEX = "full-site-reindex"
    COLLECTION_REINDEX = "collection-reindex"
    ITEM_UPSERT = "item-upsert"
    ITEM_REMOVE = "item-remove"


class IndexingTask(BaseModel):
    """대기 중인 색인 작업 한 건이다.

    작업 종류에 따라 채워지는 선택 필드가 정해진다.

    - full-site-reindex: collection_name, item_id 모두 없음
    - collection-reindex: collection_name만 있음
    - item-upsert / item-remove: collection_name, item_id 모두 있음

    Args:
        task_id: 작업 식별자. 등록 시 부여된다.
        kind: 작업 종류.
        collection_name: 대상 컬렉션 이름.
        item_id: 대상 레코드 식별자.
        created_at: 등록 시각.
        completed: 완료 여부.
        completed_at: 완료 처리 시각.
    """

    task_id: str = Field(default_factory=lambda: str(uuid4()))
    kind: TaskKind
    collection_name: Optional[str] = None
    item_id: Optional[ItemId] = None
    created_at: datetime = Field(default_factory=_utc_now)
    completed: bool = False
    completed_at: Optional[datetime] = None

    @model_validator(mode="after")
    def _check_fields_for_kind(self) -> "IndexingTask":
        if self.kind == TaskKind.FULL_SITE_REINDEX:
            if self.collection_name is not None or self.item_id is not None:
                raise ValueError("full-site-reindex 작업은 컬렉션/레코드 식별자를 가질 수 없습니다.")
            return self
        if not self.collection_name:
            raise ValueError(f"{self.kind.value} 작업에는 collection_name이 필요합니다.")
        if self.kind == TaskKind.COLLECTION_REINDEX:
            if self.item_id is not None:
                raise ValueError("collection-reindex 작업은 item_id를 가질 수 없습니다.")
            return self
        if self.item_id is None or self.item_id == "":
            raise ValueError(f"{self.kind.value} 작업에는 item_id가 필요합니다.")
        return self


class FieldRule(BaseModel):
    """컬렉션 필드 추출 규칙이다.

    Args:
        name: 원본 레코드의 필드 이름.
        index: 색인 대상 여부.
        search_field_name: 색인 문서에서 사용할 이름. 생략 시 원본 이름.
        subfields: 관계/컴포넌트 값에서 유지할 하위 키 목록. 지정하면 populate 대상이 된다.
    """

    name: str
    index: bool = True
    search_field_name: Optional[str] = None
    subfields: Optional[List[str]] = None

    @property
    def target_name(self) -> str:
        """색인 문서에 기록될 필드 이름을 반환한다."""

        return self.search_field_name or self.name


class CollectionIndexConfig(BaseModel):
    """컬렉션별 색인 규칙이다.

    Args:
        collection_name: 컬렉션 이름.
        enabled: 색인 대상 여부.
        fields: 필드 추출 규칙.
        draft_publish: 초안/게시 모델 사용 여부. True면 게시된 레코드만 색인한다.
        exclude_user_linked: `user` 필드가 채워진 레코드를 제외할지 여부.
        populate: 명시적 관계 채우기 사양. 생략 시 subfields가 있는 규칙에서 유도한다.
    """

    collection_name: str
    enabled: bool = True
    fields: List[FieldRule] = Field(default_factory=list)
    draft_publish: bool = False
    exclude_user_linked: bool = False
    populate: Optional[Dict[str, Any]] = None

    @field_validator("fields", mode="before")
    @classmethod
    def _expand_field_names(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [{"name": item} if isinstance(item, str) else item for item in value]
        return value

    def populate_spec(self) -> Optional[Dict[str, Any]]:
        """조회 시 함께 채울 관계 사양을 반환한다. 필요 없으면 None."""

        if self.populate is not None:
            return dict(self.populate)
        derived = {
            rule.name: {"fields": list(rule.subfields)}
            for rule in self.fields
            if rule.index and rule.subfields
        }
        return derived or None


class IndexedDocument(BaseModel):
    """검색 엔진에 보낼 색인 문서이다."""

    collection_name: str
    item_id: ItemId
    document_id: str
    fields: Dict[str, Any] = Field(default_factory=dict)


class LogOutcome(str, Enum):
    """운영 로그 결과 열거형."""

    SUCCESS = "success"
    FAILURE = "failure"


class LogEntry(BaseModel):
    """운영 로그 한 건이다. 추가만 가능하다."""

    log_id: str = Field(default_factory=lambda: str(uuid4()))
    timestamp: datetime = Field(default_factory=_utc_now)
    outcome: LogOutcome
    message: str


class IndexDescriptor(BaseModel):
    """현재 인덱스와 재구축용 임시 인덱스 이름이다."""

    current_name: str
    temporary_name: str


class EngineConfig(BaseModel):
    """재조정 엔진 실행 정책이다.

    Args:
        max_workers: 컬렉션 색인 시 동시 upsert 수. 1이면 순차 실행.
        continue_on_error: 작업 실패 후 다음 작업을 계속 처리할지 여부.
        rebuild_strategy: 전체 재색인 전략.
    """

    max_workers: int = Field(default=1, ge=1)
    continue_on_error: bool = True
    rebuild_strategy: RebuildStrategy = RebuildStrategy.IN_PLACE
