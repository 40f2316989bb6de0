"""
목적: Elasticsearch 연결 관리 모듈을 제공한다.
설명: 클라이언트 생성/종료를 담당하며 테스트를 위해 클라이언트 클래스를 주입받는다.
디자인 패턴: 매니저 패턴
참조: src/search_sync/integrations/search/gateway.py
"""

from __future__ import annotations

from typing import Any, Optional

from search_sync.shared.logging import Logger


class ElasticConnectionManager:
    """Elasticsearch 연결 관리자."""

    def __init__(
        self,
        hosts: list[str],
        logger: Logger,
        elasticsearch_cls,
        username: Optional[str] = None,
        password: Optional[str] = None,
        ca_certs: Optional[str] = None,
        verify_certs: Optional[bool] = None,
        ssl_assert_fingerprint: Optional[str] = None,
        request_timeout: Optional[float] = None,
    ) -> None:
        self._hosts = hosts
        self._logger = logger
        self._elasticsearch_cls = elasticsearch_cls
        self._username = username
        self._password = password
        self._ca_certs = ca_certs
        self._verify_certs = verify_certs
        self._ssl_assert_fingerprint = ssl_assert_fingerprint
        self._request_timeout = request_timeout
        self._client: Optional[Any] = None

    @property
    def is_connected(self) -> bool:
        """클라이언트 생성 여부를 반환한다."""

        return self._client is not None

    def connect(self) -> None:
        """Elasticsearch 클라이언트를 생성한다. 실제 연결 여부는 확인하지 않는다."""

        if self._client is not None:
            return
        options: dict = {}
        if self._username:
            options["basic_auth"] = (self._username, self._password or "")
        if self._ca_certs:
            options["ca_certs"] = self._ca_certs
        if self._verify_certs is not None:
            options["verify_certs"] = self._verify_certs
        if self._ssl_assert_fingerprint:
            options["ssl_assert_fingerprint"] = self._ssl_assert_fingerprint
        if self._request_timeout is not None:
            options["request_timeout"] = self._request_timeout
        self._client = self._elasticsearch_cls(self._hosts, **options)
        self._logger.info("Elasticsearch 연결이 초기화되었습니다.")

    def close(self) -> None:
        """Elasticsearch 클라이언트를 종료한다."""

        if self._client is None:
            return
        self._client.close()
        self._client = None
        self._logger.info("Elasticsearch 연결이 종료되었습니다.")

    def ensure_client(self):
        """초기화된 Elasticsearch 클라이언트를 반환한다."""

        if self._client is None:
            raise RuntimeError("Elasticsearch 연결이 초기화되지 않았습니다.")
        return self._client
