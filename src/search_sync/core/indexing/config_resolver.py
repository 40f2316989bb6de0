"""
목적: 컬렉션 색인 규칙 조회 인터페이스를 제공한다.
설명: 엔진이 사용하는 설정 조회 프로토콜과 설정 파일 기반 정적 구현체를 정의한다.
디자인 패턴: 포트-어댑터 패턴
참조: src/search_sync/core/indexing/models.py, src/search_sync/shared/config/settings.py
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Protocol, Union, runtime_checkable

from pydantic import ValidationError

from search_sync.core.indexing.models import CollectionIndexConfig
from search_sync.shared.exceptions import ConfigurationError


@runtime_checkable
class ConfigurationResolver(Protocol):
    """컬렉션 색인 규칙 조회 인터페이스."""

    def is_collection_configured_for_indexing(self, collection_name: str) -> bool:
        """컬렉션이 색인 대상인지 반환한다."""

    def get_collection_config(self, collection_name: str) -> CollectionIndexConfig:
        """컬렉션 색인 규칙을 반환한다."""

    def list_configured_collections(self) -> List[str]:
        """색인 대상 컬렉션 이름 목록을 반환한다."""

    def get_index_alias_name(self) -> str:
        """검색 별칭 이름을 반환한다."""


class StaticConfigurationResolver:
    """고정 설정 기반 구현체.

    생성 시 모든 컬렉션 규칙을 검증하므로 잘못된 규칙은 시작 단계에서 ConfigurationError로 드러난다.

    Args:
        collections: 컬렉션 이름별 규칙(dict 또는 CollectionIndexConfig).
        alias_name: 검색 별칭 이름.
    """

    def __init__(
        self,
        collections: Mapping[str, Union[CollectionIndexConfig, Dict[str, Any]]],
        alias_name: str,
    ) -> None:
        if not alias_name:
            raise ConfigurationError("검색 별칭 이름이 비어 있습니다.")
        self._alias_name = alias_name
        self._configs: Dict[str, CollectionIndexConfig] = {}
        for name, raw in collections.items():
            self._configs[name] = self._parse(name, raw)

    def is_collection_configured_for_indexing(self, collection_name: str) -> bool:
        config = self._configs.get(collection_name)
        return config is not None and config.enabled

    def get_collection_config(self, collection_name: str) -> CollectionIndexConfig:
        config = self._configs.get(collection_name)
        if config is None:
            raise ConfigurationError(
                f"컬렉션 색인 규칙을 찾을 수 없습니다: {collection_name}",
                metadata={"collection_name": collection_name},
            )
        return config

    def list_configured_collections(self) -> List[str]:
        return [name for name, config in self._configs.items() if config.enabled]

    def get_index_alias_name(self) -> str:
        return self._alias_name

    def _parse(
        self,
        name: str,
        raw: Union[CollectionIndexConfig, Dict[str, Any]],
    ) -> CollectionIndexConfig:
        if isinstance(raw, CollectionIndexConfig):
            return raw
        payload = {"collection_name": name, **dict(raw or {})}
        try:
            return CollectionIndexConfig.model_validate(payload)
        except ValidationError as exc:
            raise ConfigurationError(
                f"컬렉션 색인 규칙이 올바르지 않습니다: {name}",
                original=exc,
                metadata={"collection_name": name},
            ) from exc
