"""
목적: 설정 로더와 daokit 설정 모델을 검증한다.
설명: 소스 병합 순서, 환경 변수 접두사/중첩, 값 파싱, .env 로딩과 설정 모델 검증을 확인한다.
디자인 패턴: 테스트 케이스
참조: src/daokit/shared/config/loader.py, src/daokit/shared/config/settings.py
"""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from daokit.dao import AccessConfig
from daokit.integrations.db import Database
from daokit.shared.config import ConfigLoader, DaoSettings, load_settings


def test_later_sources_override_earlier(tmp_path) -> None:
    """뒤에 추가된 소스가 앞선 값을 덮어쓰는지 확인한다."""

    path = tmp_path / "config.json"
    path.write_text(json.dumps({"engine_options": {"pool_size": 5, "echo_pool": False}}), encoding="utf-8")

    data = (
        ConfigLoader()
        .add_dict({"echo": False, "engine_options": {"pool_size": 1}})
        .add_json_file(str(path))
        .build({"echo": True})
    )

    assert data == {"echo": True, "engine_options": {"pool_size": 5, "echo_pool": False}}


def test_missing_required_json_file_raises(tmp_path) -> None:
    """필수 JSON 파일이 없으면 FileNotFoundError를 던지는지 확인한다."""

    with pytest.raises(FileNotFoundError):
        ConfigLoader().add_json_file(str(tmp_path / "missing.json"), required=True)


def test_env_prefix_nesting_and_parsing(monkeypatch) -> None:
    """접두사, 중첩 구분자, 값 파싱 규칙을 확인한다."""

    monkeypatch.setenv("DAOKIT_SAVE_SQL", "true")
    monkeypatch.setenv("DAOKIT_BATCH_SIZE", "500")
    monkeypatch.setenv("DAOKIT_ENGINE_OPTIONS__POOL_PRE_PING", "false")
    monkeypatch.setenv("OTHER_VALUE", "1")

    data = ConfigLoader().add_env(prefix="DAOKIT_").build()

    assert data["save_sql"] is True
    assert data["batch_size"] == 500
    assert data["engine_options"] == {"pool_pre_ping": False}
    assert "other_value" not in data


def test_load_settings_reads_dotenv_then_env(tmp_path, monkeypatch) -> None:
    """.env 값을 읽고 환경 변수가 이를 덮어쓰는지 확인한다."""

    env_file = tmp_path / ".env"
    env_file.write_text("DAOKIT_PAGE_LIMIT=25\nDAOKIT_AS_ARRAY=true\n", encoding="utf-8")
    monkeypatch.setenv("DAOKIT_PAGE_LIMIT", "30")

    settings = load_settings(str(env_file))

    assert settings.page_limit == 30
    assert settings.as_array is True
    assert settings.database_url == "sqlite://"


def test_settings_reject_invalid_batch_size() -> None:
    """batch_size가 1보다 작으면 검증에 실패하는지 확인한다."""

    with pytest.raises(ValidationError):
        DaoSettings(batch_size=0)


def test_settings_feed_access_config_and_database(user_model) -> None:
    """설정 모델이 AccessConfig와 Database 생성에 쓰이는지 확인한다."""

    settings = DaoSettings(save_sql=True, batch_size=200, page_limit=5)

    config = AccessConfig.from_settings(settings, model_class=user_model)
    database = Database.from_settings(settings)

    try:
        assert config.is_save_sql is True
        assert config.batch_size == 200
        assert config.page_limit == 5
        assert config.model_class is user_model
        assert database.dialect_name == "sqlite"
    finally:
        database.close()
