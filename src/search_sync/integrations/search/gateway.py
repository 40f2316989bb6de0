"""
목적: Elasticsearch 게이트웨이를 제공한다.
설명: 인덱스 생성/삭제, 별칭 이동, 문서 upsert/삭제, 검색을 감싸고 클라이언트 예외를 도메인 예외로 분류한다.
디자인 패턴: 어댑터 패턴, 게이트웨이 패턴
참조: src/search_sync/integrations/search/connection.py, src/search_sync/integrations/search/mapping.py
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from elasticsearch import ApiError, ConnectionTimeout, Elasticsearch, NotFoundError, TransportError
from elasticsearch import ConnectionError as ESConnectionError

from search_sync.integrations.search.connection import ElasticConnectionManager
from search_sync.integrations.search.mapping import index_mappings, index_settings
from search_sync.integrations.search.models import CleanupResult
from search_sync.shared.config.settings import ElasticsearchSettings
from search_sync.shared.exceptions import (
    AliasUpdateError,
    DocumentNotFoundError,
    IndexCreationError,
    IndexWriteError,
    QueryError,
    SearchConnectionError,
)
from search_sync.shared.logging import LogContext, Logger, create_default_logger

_CONNECTION_ERRORS = (ESConnectionError, ConnectionTimeout)
_ALREADY_EXISTS = "resource_already_exists_exception"
_INDEX_NOT_FOUND = "index_not_found_exception"


class SearchEngineGateway:
    """Elasticsearch 게이트웨이 구현체.

    한 번 생성해 엔진에 참조로 전달한다. `connect` 이전에는 어떤 요청도 보낼 수 없다.

    Args:
        connection: Elasticsearch 연결 관리자.
        logger: 주입 가능한 로거.
    """

    def __init__(
        self,
        connection: ElasticConnectionManager,
        logger: Optional[Logger] = None,
    ) -> None:
        self._connection = connection
        self._logger = logger or create_default_logger("SearchEngineGateway")

    @classmethod
    def from_settings(
        cls,
        settings: ElasticsearchSettings,
        logger: Optional[Logger] = None,
        elasticsearch_cls=Elasticsearch,
    ) -> "SearchEngineGateway":
        """설정으로 게이트웨이를 생성한다."""

        logger = logger or create_default_logger("SearchEngineGateway")
        connection = ElasticConnectionManager(
            hosts=list(settings.hosts),
            logger=logger,
            elasticsearch_cls=elasticsearch_cls,
            username=settings.username,
            password=settings.password,
            ca_certs=settings.ca_certs,
            verify_certs=settings.verify_certs,
            ssl_assert_fingerprint=settings.ssl_assert_fingerprint,
            request_timeout=settings.request_timeout,
        )
        return cls(connection=connection, logger=logger)

    def connect(self) -> None:
        """클라이언트를 생성한다."""

        self._connection.connect()

    def close(self) -> None:
        """클라이언트를 종료한다."""

        self._connection.close()

    def ping(self) -> bool:
        """검색 엔진 연결 여부를 반환한다. 예외를 던지지 않는다."""

        if not self._connection.is_connected:
            return False
        try:
            return bool(self._client.ping())
        except Exception as error:  # noqa: BLE001 - 연결 확인은 실패를 False로 보고한다
            self._logger.error(f"Elasticsearch 연결 확인 실패: {error}")
            return False

    def index_exists(self, name: str) -> bool:
        """인덱스 존재 여부를 반환한다."""

        try:
            return bool(self._client.indices.exists(index=name))
        except _CONNECTION_ERRORS as error:
            raise self._connection_error("인덱스 존재 확인", name, error) from error
        except (ApiError, TransportError) as error:
            raise IndexCreationError(
                "인덱스 존재 확인에 실패했습니다.",
                original=error,
                metadata={"index": name},
            ) from error

    def create_index(self, name: str) -> bool:
        """매핑 스키마로 인덱스를 생성한다. 이미 존재하면 아무것도 하지 않는다.

        Returns:
            bool: 새로 생성했으면 True.
        """

        if self.index_exists(name):
            return False
        self._logger.info(
            f"검색 인덱스가 없어 생성합니다: {name}",
            LogContext(index_name=name),
        )
        try:
            self._client.indices.create(
                index=name,
                settings=index_settings(),
                mappings=index_mappings(),
            )
        except _CONNECTION_ERRORS as error:
            raise self._connection_error("인덱스 생성", name, error) from error
        except ApiError as error:
            if getattr(error, "error", None) == _ALREADY_EXISTS:
                return False
            self._logger.error(f"인덱스 생성 실패: {name} ({error})", LogContext(index_name=name))
            raise IndexCreationError(
                "인덱스 생성에 실패했습니다.",
                original=error,
                metadata={"index": name},
            ) from error
        except TransportError as error:
            self._logger.error(f"인덱스 생성 실패: {name} ({error})", LogContext(index_name=name))
            raise IndexCreationError(
                "인덱스 생성에 실패했습니다.",
                original=error,
                metadata={"index": name},
            ) from error
        return True

    def delete_index(self, name: str) -> CleanupResult:
        """인덱스를 삭제한다. 실패해도 예외를 던지지 않고 결과로 보고한다."""

        context = LogContext(index_name=name)
        try:
            self._client.indices.delete(index=name)
        except NotFoundError:
            self._logger.info(f"삭제할 인덱스가 이미 없습니다: {name}", context)
            return CleanupResult(ok=True, target=name, reason="not_found")
        except _CONNECTION_ERRORS as error:
            self._logger.error(f"인덱스 삭제 중 연결 실패: {name} ({error})", context)
            return CleanupResult(ok=False, target=name, reason=f"connection: {error}")
        except (ApiError, TransportError) as error:
            self._logger.error(f"인덱스 삭제 실패: {name} ({error})", context)
            return CleanupResult(ok=False, target=name, reason=str(error))
        self._logger.info(f"인덱스를 삭제했습니다: {name}", context)
        return CleanupResult(ok=True, target=name)

    def alias_targets(self, alias: str) -> List[str]:
        """별칭이 가리키는 인덱스 목록을 반환한다. 별칭이 없으면 빈 목록."""

        try:
            response = self._client.indices.get_alias(name=alias)
        except NotFoundError:
            return []
        except _CONNECTION_ERRORS as error:
            raise self._connection_error("별칭 조회", alias, error) from error
        except (ApiError, TransportError) as error:
            raise AliasUpdateError(
                "별칭 조회에 실패했습니다.",
                original=error,
                metadata={"alias": alias},
            ) from error
        return sorted(_body(response).keys())

    def attach_alias(self, alias: str, target: str) -> None:
        """별칭을 대상 인덱스로 옮긴다.

        대상 인덱스가 없으면 먼저 생성하고, 기존 별칭 제거와 추가를 하나의 원자적 요청으로 보낸다.
        """

        context = LogContext(index_name=target, tags={"alias": alias})
        try:
            alias_exists = bool(self._client.indices.exists_alias(name=alias))
        except _CONNECTION_ERRORS as error:
            raise self._connection_error("별칭 확인", alias, error) from error
        except (ApiError, TransportError) as error:
            raise AliasUpdateError(
                "별칭 확인에 실패했습니다.",
                original=error,
                metadata={"alias": alias, "target": target},
            ) from error
        self.create_index(target)
        actions: List[Dict[str, Any]] = []
        if alias_exists:
            self._logger.info(f"기존 별칭을 제거하고 다시 연결합니다: {alias}", context)
            actions.append({"remove": {"index": "*", "alias": alias}})
        actions.append({"add": {"index": target, "alias": alias}})
        try:
            self._client.indices.update_aliases(actions=actions)
        except _CONNECTION_ERRORS as error:
            raise self._connection_error("별칭 연결", alias, error) from error
        except (ApiError, TransportError) as error:
            self._logger.error(f"별칭 연결 실패: {alias} -> {target} ({error})", context)
            raise AliasUpdateError(
                "별칭 연결에 실패했습니다.",
                original=error,
                metadata={"alias": alias, "target": target},
            ) from error
        self._logger.info(f"별칭을 연결했습니다: {alias} -> {target}", context)

    def upsert_document(self, index: str, document_id: str, document: Dict[str, Any]) -> None:
        """문서를 색인(덮어쓰기)하고 인덱스를 새로고침한다."""

        try:
            self._client.index(index=index, id=document_id, document=document)
            self._client.indices.refresh(index=index)
        except _CONNECTION_ERRORS as error:
            raise self._connection_error("문서 색인", index, error) from error
        except (ApiError, TransportError) as error:
            self._logger.error(
                f"문서 색인 실패: {document_id} ({error})",
                LogContext(index_name=index),
            )
            raise IndexWriteError(
                "문서 색인에 실패했습니다.",
                original=error,
                metadata={"index": index, "document_id": document_id},
            ) from error

    def delete_document(self, index: str, document_id: str, missing_ok: bool = True) -> bool:
        """문서를 삭제하고 인덱스를 새로고침한다.

        Args:
            index: 인덱스 또는 별칭 이름.
            document_id: 문서 식별자.
            missing_ok: 문서가 없을 때 예외 대신 False를 반환할지 여부.

        Returns:
            bool: 실제로 삭제했으면 True.

        Raises:
            IndexWriteError: 인덱스나 별칭 자체가 없을 때. 없는 문서만 무해하게 처리한다.
        """

        context = LogContext(index_name=index)
        try:
            self._client.delete(index=index, id=document_id)
            self._client.indices.refresh(index=index)
        except NotFoundError as error:
            if getattr(error, "error", None) == _INDEX_NOT_FOUND:
                self._logger.error(f"삭제 대상 인덱스가 없습니다: {index} ({error})", context)
                raise IndexWriteError(
                    "삭제 대상 인덱스 또는 별칭이 없습니다.",
                    original=error,
                    metadata={"index": index, "document_id": document_id},
                ) from error
            if not missing_ok:
                raise DocumentNotFoundError(
                    "삭제할 문서가 인덱스에 없습니다.",
                    original=error,
                    metadata={"index": index, "document_id": document_id},
                ) from error
            self._logger.info(f"삭제할 문서가 이미 인덱스에 없습니다: {document_id}", context)
            return False
        except _CONNECTION_ERRORS as error:
            raise self._connection_error("문서 삭제", index, error) from error
        except (ApiError, TransportError) as error:
            self._logger.error(f"문서 삭제 실패: {document_id} ({error})", context)
            raise IndexWriteError(
                "문서 삭제에 실패했습니다.",
                original=error,
                metadata={"index": index, "document_id": document_id},
            ) from error
        return True

    def search(self, index: str, query: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """검색 요청을 보내고 응답 본문을 반환한다."""

        try:
            response = self._client.search(index=index, **(query or {}))
        except _CONNECTION_ERRORS as error:
            raise self._connection_error("검색", index, error) from error
        except (ApiError, TransportError) as error:
            self._logger.error(f"검색 요청 실패: {error}", LogContext(index_name=index))
            raise QueryError(
                "검색 요청에 실패했습니다.",
                original=error,
                metadata={"index": index},
            ) from error
        return dict(_body(response))

    @property
    def _client(self):
        return self._connection.ensure_client()

    def _connection_error(self, action: str, target: str, error: Exception) -> SearchConnectionError:
        self._logger.error(
            f"{action} 중 Elasticsearch 연결 실패: {error}",
            LogContext(index_name=target),
        )
        return SearchConnectionError(
            f"{action} 중 Elasticsearch에 연결할 수 없습니다.",
            original=error,
            metadata={"target": target},
        )


def _body(response: Any) -> Dict[str, Any]:
    return getattr(response, "body", response)
