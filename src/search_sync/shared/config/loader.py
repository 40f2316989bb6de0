"""
목적: 동기화 엔진 설정 로더를 제공한다.
설명: dict/JSON 파일/환경 변수를 병합하고 `.env`를 읽어 SyncSettings를 생성한다.
디자인 패턴: 빌더 패턴
참조: src/search_sync/shared/config/settings.py, src/search_sync/shared/const/__init__.py
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from dotenv import load_dotenv
from pydantic import ValidationError

from search_sync.shared.config.settings import SyncSettings
from search_sync.shared.const import SharedConst
from search_sync.shared.exceptions import ConfigurationError
from search_sync.shared.logging import Logger, create_default_logger


class ConfigLoader:
    """설정 로더 구현체이다.

    Args:
        logger: 주입 가능한 로거.
    """

    _DEFAULT_ENCODING = SharedConst.DEFAULT_ENCODING
    _DEFAULT_ENV_DELIMITER = SharedConst.ENV_NESTED_DELIMITER

    def __init__(self, logger: Optional[Logger] = None) -> None:
        self._logger = logger or create_default_logger("ConfigLoader")
        self._sources: list[Dict[str, Any]] = []

    def add_dict(self, data: Optional[Mapping[str, Any]]) -> "ConfigLoader":
        """딕셔너리 설정을 추가한다."""

        if not data:
            return self
        self._sources.append(dict(data))
        return self

    def add_json_file(
        self,
        path: str,
        required: bool = False,
        encoding: Optional[str] = None,
    ) -> "ConfigLoader":
        """JSON 파일 설정을 추가한다."""

        if not path:
            raise ValueError("path는 비어 있을 수 없습니다.")
        if not os.path.exists(path):
            if required:
                raise ConfigurationError(
                    f"설정 파일을 찾을 수 없습니다: {path}",
                    metadata={"path": path},
                )
            self._logger.warning(f"설정 파일이 없어 건너뜁니다: {path}")
            return self
        encoding = encoding or self._DEFAULT_ENCODING
        with open(path, "r", encoding=encoding) as handle:
            try:
                payload = json.load(handle)
            except json.JSONDecodeError as exc:
                raise ConfigurationError(
                    "JSON 설정 파일 파싱에 실패했습니다.",
                    original=exc,
                    metadata={"path": path},
                ) from exc
        if not isinstance(payload, dict):
            raise ConfigurationError(
                "JSON 설정 파일은 최상위가 객체여야 합니다.",
                metadata={"path": path},
            )
        self._sources.append(payload)
        return self

    def add_env(
        self,
        prefix: str = SharedConst.ENV_PREFIX,
        delimiter: Optional[str] = None,
        lowercase_keys: bool = True,
    ) -> "ConfigLoader":
        """환경 변수 설정을 추가한다.

        `SEARCH_SYNC__ELASTICSEARCH__PASSWORD`는 `{"elasticsearch": {"password": ...}}`로 해석된다.
        """

        delimiter = delimiter or self._DEFAULT_ENV_DELIMITER
        env_data: Dict[str, Any] = {}
        for key, value in os.environ.items():
            if prefix and not key.startswith(prefix):
                continue
            trimmed = key[len(prefix) :] if prefix else key
            if not trimmed:
                continue
            parts = [part for part in trimmed.split(delimiter) if part]
            if lowercase_keys:
                parts = [part.lower() for part in parts]
            if not parts:
                continue
            self._assign_nested(env_data, parts, self._parse_value(value))
        if env_data:
            self._sources.append(env_data)
        return self

    def build(self, overrides: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """수집된 설정을 병합해 반환한다."""

        merged: Dict[str, Any] = {}
        for source in self._sources:
            merged = self._merge(merged, source)
        if overrides:
            merged = self._merge(merged, dict(overrides))
        return merged

    def build_settings(self, overrides: Optional[Mapping[str, Any]] = None) -> SyncSettings:
        """병합된 설정을 SyncSettings로 검증해 반환한다."""

        try:
            return SyncSettings.model_validate(self.build(overrides))
        except ValidationError as exc:
            raise ConfigurationError(
                "설정 값 검증에 실패했습니다.",
                original=exc,
                metadata={"errors": exc.error_count()},
            ) from exc

    def _assign_nested(self, root: Dict[str, Any], keys: list[str], value: Any) -> None:
        current = root
        for part in keys[:-1]:
            if part not in current or not isinstance(current.get(part), dict):
                current[part] = {}
            current = current[part]
        current[keys[-1]] = value

    def _merge(self, base: Dict[str, Any], incoming: Dict[str, Any]) -> Dict[str, Any]:
        merged = dict(base)
        for key, value in incoming.items():
            if (
                key in merged
                and isinstance(merged[key], dict)
                and isinstance(value, dict)
            ):
                merged[key] = self._merge(merged[key], value)
            else:
                merged[key] = value
        return merged

    def _parse_value(self, raw: str) -> Any:
        lowered = raw.lower()
        if lowered in {"true", "false"}:
            return lowered == "true"
        if lowered in {"null", "none"}:
            return None
        try:
            if "." in raw:
                return float(raw)
            return int(raw)
        except ValueError:
            pass
        if (raw.startswith("{") and raw.endswith("}")) or (
            raw.startswith("[") and raw.endswith("]")
        ):
            try:
                return json.loads(raw)
            except json.JSONDecodeError:
                return raw
        return raw


def load_settings(
    config_path: Optional[str] = None,
    env_file: Optional[str] = None,
    overrides: Optional[Mapping[str, Any]] = None,
    logger: Optional[Logger] = None,
) -> SyncSettings:
    """`.env`, JSON 설정 파일, 환경 변수 순서로 병합한 설정을 반환한다.

    Args:
        config_path: JSON 설정 파일 경로. 생략 시 SEARCH_SYNC_CONFIG 환경 변수를 사용한다.
        env_file: 로드할 `.env` 경로. 생략 시 현재 디렉터리의 `.env`를 사용한다.
        overrides: 마지막에 덮어쓸 설정.
        logger: 주입 가능한 로거.
    """

    dotenv_path = Path(env_file) if env_file else Path.cwd() / ".env"
    if dotenv_path.exists():
        load_dotenv(dotenv_path=dotenv_path, override=False)
    loader = ConfigLoader(logger=logger)
    resolved_path = config_path or os.getenv("SEARCH_SYNC_CONFIG")
    if resolved_path:
        loader.add_json_file(resolved_path, required=config_path is not None)
    loader.add_env()
    return loader.build_settings(overrides)
