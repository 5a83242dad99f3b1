"""
목적: SQLAlchemy 엔진과 세션, 트랜잭션을 관리한다.
설명: 스레드별 세션을 제공하고, 명시적 트랜잭션이 없을 때는 쓰기마다 자동 커밋한다.
디자인 패턴: 매니저 패턴, 컨텍스트 매니저
참조: src/daokit/integrations/db/base/session.py, src/daokit/shared/config/settings.py
"""

from __future__ import annotations

import threading
from typing import Any, Dict, Mapping, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, Result
from sqlalchemy.exc import CompileError
from sqlalchemy.orm import Session, scoped_session, sessionmaker
from sqlalchemy.pool import StaticPool
from sqlalchemy.sql import Executable

from daokit.integrations.db.base.session import BaseTransaction
from daokit.shared.config import DaoSettings
from daokit.shared.const import SharedConst
from daokit.shared.logging import Logger, create_default_logger


class Transaction(BaseTransaction):
    """Database 세션 단위 트랜잭션 핸들."""

    def __init__(self, database: "Database") -> None:
        self._database = database
        self._active = False

    @property
    def is_active(self) -> bool:
        return self._active

    def begin(self) -> None:
        if self._active:
            raise RuntimeError("이미 시작된 트랜잭션입니다.")
        self._database._attach(self)
        self._active = True

    def commit(self) -> None:
        if not self._active:
            raise RuntimeError("진행 중인 트랜잭션이 없습니다.")
        try:
            self._database.session.commit()
        finally:
            self._finish()

    def rollback(self) -> None:
        if not self._active:
            return
        try:
            self._database.session.rollback()
        finally:
            self._finish()

    def _finish(self) -> None:
        self._active = False
        self._database._detach(self)


class Database:
    """SQLAlchemy 엔진/세션 관리자.

    Args:
        url: SQLAlchemy 엔진 URL.
        echo: 엔진 SQL 에코 여부.
        logger: 주입 가능한 로거.
        engine_options: create_engine 추가 옵션.
    """

    def __init__(
        self,
        url: str = SharedConst.DEFAULT_DATABASE_URL,
        echo: bool = False,
        logger: Optional[Logger] = None,
        engine_options: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self._logger = logger or create_default_logger("Database")
        options: Dict[str, Any] = dict(engine_options or {})
        if self._is_sqlite_memory(url):
            # 인메모리 SQLite는 커넥션마다 별도 DB가 되므로 단일 커넥션을 공유한다.
            options.setdefault("poolclass", StaticPool)
            options.setdefault("connect_args", {"check_same_thread": False})
        self._engine: Engine = create_engine(url, echo=echo, **options)
        self._sessions = scoped_session(
            sessionmaker(bind=self._engine, autoflush=False, expire_on_commit=False)
        )
        self._local = threading.local()
        self._logger.info(f"DB 엔진이 초기화되었습니다: {self._engine.url.render_as_string(hide_password=True)}")

    @classmethod
    def from_settings(cls, settings: DaoSettings, logger: Optional[Logger] = None) -> "Database":
        """설정 모델로 Database를 생성한다."""

        return cls(
            url=settings.database_url,
            echo=settings.echo,
            logger=logger,
            engine_options=settings.engine_options,
        )

    @property
    def engine(self) -> Engine:
        """내부 엔진을 반환한다."""

        return self._engine

    @property
    def session(self) -> Session:
        """현재 스레드의 세션을 반환한다."""

        return self._sessions()

    @property
    def dialect_name(self) -> str:
        """SQL 방언 이름을 반환한다."""

        return self._engine.dialect.name

    @property
    def database_name(self) -> str:
        """URL에 지정된 데이터베이스 이름을 반환한다."""

        return self._engine.url.database or ""

    @property
    def in_transaction(self) -> bool:
        """명시적 트랜잭션이 진행 중인지 반환한다."""

        return getattr(self._local, "transaction", None) is not None

    def begin_transaction(self) -> Transaction:
        """트랜잭션을 시작하고 핸들을 반환한다."""

        transaction = Transaction(self)
        transaction.begin()
        return transaction

    def execute(self, statement: Executable, params: Optional[Mapping[str, Any]] = None) -> Result:
        """현재 세션에서 구문을 실행한다."""

        if params:
            return self.session.execute(statement, dict(params))
        return self.session.execute(statement)

    def autocommit(self) -> None:
        """명시적 트랜잭션이 없으면 커밋한다."""

        if not self.in_transaction:
            self.session.commit()

    def rollback_if_autocommit(self) -> None:
        """명시적 트랜잭션이 없으면 롤백한다."""

        if not self.in_transaction:
            self.session.rollback()

    def render(self, statement: Executable) -> str:
        """구문을 현재 방언의 SQL 문자열로 렌더링한다.

        바인딩 값은 가능한 경우 리터럴로 치환한다.
        """

        dialect = self._engine.dialect
        try:
            return str(statement.compile(dialect=dialect, compile_kwargs={"literal_binds": True}))
        except (CompileError, NotImplementedError) as error:
            self._logger.debug(f"리터럴 렌더링에 실패해 바인딩 형태로 기록합니다: {error}")
            return str(statement.compile(dialect=dialect))

    def create_tables(self, metadata) -> None:
        """메타데이터의 테이블을 생성한다."""

        metadata.create_all(self._engine)

    def drop_tables(self, metadata) -> None:
        """메타데이터의 테이블을 삭제한다."""

        metadata.drop_all(self._engine)

    def close(self) -> None:
        """세션을 정리하고 엔진을 종료한다."""

        self._local.transaction = None
        self._sessions.remove()
        self._engine.dispose()
        self._logger.info("DB 엔진이 종료되었습니다.")

    def _attach(self, transaction: Transaction) -> None:
        if self.in_transaction:
            raise RuntimeError("중첩 트랜잭션은 지원하지 않습니다.")
        self._local.transaction = transaction

    def _detach(self, transaction: Transaction) -> None:
        if getattr(self._local, "transaction", None) is transaction:
            self._local.transaction = None

    def _is_sqlite_memory(self, url: str) -> bool:
        normalized = str(url)
        return normalized.startswith("sqlite") and (
            normalized.rstrip("/") in {"sqlite:", "sqlite+pysqlite:"}
            or ":memory:" in normalized
        )
