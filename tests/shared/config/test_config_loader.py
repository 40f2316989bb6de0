"""
목적: 설정 로더 동작을 검증한다.
설명: JSON/환경 변수 병합 우선순위, 값 파싱, .env 로딩, 검증 오류 변환을 확인한다.
디자인 패턴: 빌더 패턴
참조: src/search_sync/shared/config/loader.py, src/search_sync/shared/config/settings.py
"""

from __future__ import annotations

import json

import pytest

from search_sync.shared.config import ConfigLoader, RebuildStrategy, load_settings
from search_sync.shared.exceptions import ConfigurationError


def test_env_overrides_json_file(tmp_path, monkeypatch) -> None:
    """환경 변수가 JSON 설정보다 우선하는지 검증한다."""

    config_path = tmp_path / "config.json"
    config_path.write_text(
        json.dumps({"index": {"alias_name": "from-file", "name_prefix": "articles"}}),
        encoding="utf-8",
    )
    monkeypatch.setenv("SEARCH_SYNC__INDEX__ALIAS_NAME", "from-env")
    monkeypatch.setenv("SEARCH_SYNC__RECONCILIATION__MAX_WORKERS", "4")
    monkeypatch.setenv("SEARCH_SYNC__RECONCILIATION__CONTINUE_ON_ERROR", "false")

    settings = load_settings(config_path=str(config_path), env_file=str(tmp_path / "missing.env"))

    assert settings.index.alias_name == "from-env"
    assert settings.index.name_prefix == "articles"
    assert settings.reconciliation.max_workers == 4
    assert settings.reconciliation.continue_on_error is False


def test_dotenv_file_is_loaded(tmp_path, monkeypatch) -> None:
    """.env 파일 값이 설정에 반영되는지 검증한다."""

    monkeypatch.delenv("SEARCH_SYNC__ELASTICSEARCH__HOSTS", raising=False)
    monkeypatch.delenv("SEARCH_SYNC__ELASTICSEARCH__PASSWORD", raising=False)
    env_path = tmp_path / ".env"
    env_path.write_text(
        "SEARCH_SYNC__ELASTICSEARCH__HOSTS=http://es-a:9200,http://es-b:9200\n"
        "SEARCH_SYNC__ELASTICSEARCH__PASSWORD=12345\n",
        encoding="utf-8",
    )

    try:
        settings = load_settings(env_file=str(env_path))
    finally:
        monkeypatch.delenv("SEARCH_SYNC__ELASTICSEARCH__HOSTS", raising=False)
        monkeypatch.delenv("SEARCH_SYNC__ELASTICSEARCH__PASSWORD", raising=False)

    assert settings.elasticsearch.hosts == ["http://es-a:9200", "http://es-b:9200"]
    assert settings.elasticsearch.password == "12345"


def test_overrides_and_defaults() -> None:
    """overrides 병합과 기본값을 검증한다."""

    loader = ConfigLoader().add_dict({"index": {"rebuild_strategy": "in_place"}})

    settings = loader.build_settings({"index": {"rebuild_strategy": "blue_green"}})

    assert settings.index.rebuild_strategy == RebuildStrategy.BLUE_GREEN
    assert settings.reconciliation.max_workers == 1
    assert settings.elasticsearch.request_timeout == 10.0


def test_invalid_values_raise_configuration_error() -> None:
    """검증 실패가 ConfigurationError로 변환되는지 검증한다."""

    loader = ConfigLoader().add_dict({"reconciliation": {"max_workers": 0}})

    with pytest.raises(ConfigurationError):
        loader.build_settings()


def test_required_missing_file_raises(tmp_path) -> None:
    """필수 설정 파일이 없으면 예외가 발생하는지 검증한다."""

    with pytest.raises(ConfigurationError):
        ConfigLoader().add_json_file(str(tmp_path / "none.json"), required=True)
