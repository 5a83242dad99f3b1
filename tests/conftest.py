"""
목적: pytest 공통 로깅 훅과 DB 픽스처를 제공한다.
설명: 테스트 시작/종료와 결과를 로깅하고, 인메모리 SQLite Database와 샘플 레코드 모델을 준비한다.
디자인 패턴: 테스트 훅, 픽스처
참조: pyproject.toml, src/daokit/integrations/db/database.py
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterator, Optional

import pytest
from dotenv import load_dotenv
from pydantic import BaseModel, Field
from sqlalchemy import Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from daokit.dao import InstanceRegistry
from daokit.integrations.db import Database, Record


_LOGGER = logging.getLogger("tests")


def _load_env_files() -> None:
    """환경 변수 파일이 있으면 로딩한다."""

    root = Path(__file__).resolve().parents[1]
    env_path = root / ".env"
    if env_path.exists():
        load_dotenv(env_path, override=False)


_load_env_files()


class UserSchema(BaseModel):
    """User 레코드 검증 스키마."""

    id: Optional[int] = None
    name: str = Field(min_length=1)
    age: Optional[int] = Field(default=None, ge=0)
    count: Optional[int] = None
    amt: Optional[float] = None
    deleted: Optional[int] = None


class User(Record):
    __tablename__ = "users"
    __table_args__ = {"sqlite_autoincrement": True}
    __schema__ = UserSchema

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(64), nullable=False)
    age: Mapped[Optional[int]] = mapped_column(Integer, default=0)
    count: Mapped[Optional[int]] = mapped_column(Integer, default=0)
    amt: Mapped[Optional[float]] = mapped_column(Float, default=0)
    deleted: Mapped[Optional[int]] = mapped_column(Integer, default=0)


class Tag(Record):
    __tablename__ = "tags"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    label: Mapped[str] = mapped_column(String(32), nullable=False, unique=True)


@pytest.fixture
def database() -> Iterator[Database]:
    """샘플 테이블이 생성된 인메모리 SQLite Database를 반환한다."""

    db = Database("sqlite://")
    Record.use_database(db)
    db.create_tables(Record.metadata)
    yield db
    Record.use_database(None)
    db.close()


@pytest.fixture
def user_model() -> type:
    return User


@pytest.fixture
def tag_model() -> type:
    return Tag


@pytest.fixture(autouse=True)
def reset_registry() -> Iterator[None]:
    """테스트마다 DAO 레지스트리를 비운다."""

    InstanceRegistry.clear()
    yield
    InstanceRegistry.clear()


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path) -> None:
    """퍼사드가 읽는 DAOKIT_ 환경 변수와 `.env`를 테스트마다 비운다."""

    for key in list(os.environ):
        if key.startswith("DAOKIT_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)


def pytest_sessionstart(session) -> None:  # noqa: D401 - pytest 훅 시그니처 유지
    """테스트 세션 시작을 로깅한다."""

    _LOGGER.info("테스트 세션 시작")


def pytest_sessionfinish(session, exitstatus: int) -> None:  # noqa: D401 - pytest 훅 시그니처 유지
    """테스트 세션 종료를 로깅한다."""

    _LOGGER.info("테스트 세션 종료 (exitstatus=%s)", exitstatus)


def pytest_runtest_logstart(nodeid: str, location) -> None:  # noqa: D401 - pytest 훅 시그니처 유지
    """각 테스트 시작을 로깅한다."""

    _LOGGER.info("테스트 시작: %s", nodeid)


def pytest_runtest_logreport(report) -> None:  # noqa: D401 - pytest 훅 시그니처 유지
    """테스트 결과를 로깅한다."""

    if report.when != "call":
        return
    if report.passed:
        _LOGGER.info("테스트 완료: %s", report.nodeid)
        return
    if report.skipped:
        _LOGGER.warning("테스트 스킵: %s", report.nodeid)
        return
    _LOGGER.error("테스트 실패: %s", report.nodeid)
