"""
목적: 설정 로더를 제공한다.
설명: dict/JSON 파일/.env 파일/환경 변수를 병합해 설정 사전을 생성한다.
디자인 패턴: 빌더 패턴
참조: src/daokit/shared/config/settings.py, src/daokit/shared/const/__init__.py
"""

from __future__ import annotations

import json
import os
from typing import Any, Dict, Mapping, Optional

from dotenv import dotenv_values

from daokit.shared.const import SharedConst
from daokit.shared.logging import Logger, create_default_logger


class ConfigLoader:
    """설정 로더 구현체이다.

    뒤에 추가된 소스가 앞선 소스를 덮어쓴다.

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
                raise FileNotFoundError(path)
            self._logger.warning(f"설정 파일이 없어 건너뜁니다: {path}")
            return self
        encoding = encoding or self._DEFAULT_ENCODING
        with open(path, "r", encoding=encoding) as handle:
            try:
                payload = json.load(handle)
            except json.JSONDecodeError as exc:
                raise ValueError("JSON 설정 파일 파싱에 실패했습니다.") from exc
        if not isinstance(payload, dict):
            raise ValueError("JSON 설정 파일은 최상위가 객체여야 합니다.")
        self._sources.append(payload)
        return self

    def add_dotenv(
        self,
        path: str,
        prefix: str = "",
        delimiter: Optional[str] = None,
        required: bool = False,
    ) -> "ConfigLoader":
        """`.env` 파일 설정을 추가한다.

        프로세스 환경 변수는 변경하지 않고 파일 값만 읽어 병합한다.
        """

        if not os.path.exists(path):
            if required:
                raise FileNotFoundError(path)
            self._logger.warning(f".env 파일이 없어 건너뜁니다: {path}")
            return self
        values = {
            key: value
            for key, value in dotenv_values(path).items()
            if value is not None
        }
        data = self._collect(values, prefix, delimiter or self._DEFAULT_ENV_DELIMITER)
        if data:
            self._sources.append(data)
        return self

    def add_env(
        self,
        prefix: str = "",
        delimiter: Optional[str] = None,
    ) -> "ConfigLoader":
        """환경 변수 설정을 추가한다."""

        delimiter = delimiter or self._DEFAULT_ENV_DELIMITER
        env_data = self._collect(os.environ, prefix, delimiter)
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

    def _collect(
        self,
        values: Mapping[str, str],
        prefix: str,
        delimiter: str,
    ) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        for key, value in values.items():
            if prefix and not key.startswith(prefix):
                continue
            trimmed = key[len(prefix) :] if prefix else key
            if not trimmed:
                continue
            parts = [part.lower() for part in trimmed.split(delimiter) if part]
            if not parts:
                continue
            self._assign_nested(data, parts, self._parse_value(value))
        return data

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
