"""
목적: 동기화 엔진 설정 모델을 정의한다.
설명: Elasticsearch 접속, 인덱스 이름, 저장소 경로, 재조정 정책, 컬렉션 규칙을 Pydantic으로 검증한다.
디자인 패턴: 데이터 전송 객체(DTO)
참조: src/search_sync/shared/config/loader.py, src/search_sync/app.py
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from search_sync.shared.const import SharedConst


class RebuildStrategy(str, Enum):
    """전체 재색인 전략 열거형."""

    IN_PLACE = "in_place"
    BLUE_GREEN = "blue_green"


class ElasticsearchSettings(BaseModel):
    """Elasticsearch 접속 설정이다.

    Args:
        hosts: 접속 호스트 목록. 콤마 구분 문자열도 허용한다.
        username: Basic 인증 사용자.
        password: Basic 인증 비밀번호.
        ca_certs: CA 인증서 경로.
        verify_certs: 인증서 검증 여부. 생략 시 클라이언트 기본값.
        ssl_assert_fingerprint: 인증서 지문 고정 값.
        request_timeout: 요청 타임아웃(초).
    """

    model_config = ConfigDict(coerce_numbers_to_str=True)

    hosts: List[str] = Field(default_factory=lambda: ["http://localhost:9200"])
    username: Optional[str] = None
    password: Optional[str] = None
    ca_certs: Optional[str] = None
    verify_certs: Optional[bool] = None
    ssl_assert_fingerprint: Optional[str] = None
    request_timeout: float = Field(default=10.0, gt=0)

    @field_validator("hosts", mode="before")
    @classmethod
    def _split_hosts(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return value


class IndexSettings(BaseModel):
    """인덱스 이름 설정이다."""

    alias_name: str = SharedConst.DEFAULT_ALIAS_NAME
    name_prefix: str = SharedConst.DEFAULT_INDEX_PREFIX
    rebuild_strategy: RebuildStrategy = RebuildStrategy.IN_PLACE


class StorageSettings(BaseModel):
    """작업 큐/운영 로그 저장소 설정이다."""

    database_path: str = "search_sync.db"


class ReconciliationSettings(BaseModel):
    """재조정 루프 설정이다.

    Args:
        max_workers: 컬렉션 색인 시 동시 upsert 수.
        continue_on_error: 작업 실패 후 다음 작업을 계속 처리할지 여부.
        drain_interval: 백그라운드 워커의 드레인 주기(초).
    """

    max_workers: int = Field(default=1, ge=1)
    continue_on_error: bool = True
    drain_interval: float = Field(default=60.0, gt=0)


class ContentStoreSettings(BaseModel):
    """콘텐츠 저장소 팩토리 설정이다. `module:attr` 형식을 사용한다."""

    factory: Optional[str] = None


class SyncSettings(BaseModel):
    """동기화 엔진 전체 설정이다."""

    elasticsearch: ElasticsearchSettings = Field(default_factory=ElasticsearchSettings)
    index: IndexSettings = Field(default_factory=IndexSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    reconciliation: ReconciliationSettings = Field(default_factory=ReconciliationSettings)
    content_store: ContentStoreSettings = Field(default_factory=ContentStoreSettings)
    collections: Dict[str, Dict[str, Any]] = Field(default_factory=dict)
