"""
목적: DAO 공통 상태와 보조 연산을 제공한다.
설명: 모델 클래스, 기본 조건, 결과 형태 설정을 보관하고 질의 조립, SQL 기록,
    오류 기록, 트랜잭션 시작, 테이블 메타 정보 조회를 담당한다.
디자인 패턴: 템플릿 메서드
참조: src/daokit/dao/dao.py, src/daokit/dao/composer.py, src/daokit/integrations/db/query.py
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Any, Iterator, List, Mapping, Optional, Sequence, Union

from sqlalchemy import func, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.sql import Executable

from daokit.dao.composer import QueryComposer
from daokit.dao.models import AccessConfig, ErrorEntry, ExecutionFault, ValidationFailure
from daokit.integrations.db import Database, Record, RecordQuery, Transaction, is_record_class
from daokit.shared.exceptions import InvalidModelClassError
from daokit.shared.logging import LogContext, Logger, QueryMetadata, create_default_logger


class AbstractDao:
    """DAO 베이스 클래스.

    Args:
        model_class: 대상 Record 하위 클래스.
        base_where: 모든 질의에 결합되는 기본 조건.
        config: 접근 설정. 생략하면 기본값을 사용한다.
        logger: 주입 가능한 로거.
    """

    def __init__(
        self,
        model_class: Optional[type] = None,
        base_where: Any = None,
        config: Optional[AccessConfig] = None,
        logger: Optional[Logger] = None,
    ) -> None:
        self._config = config.model_copy() if config is not None else AccessConfig()
        if model_class is not None:
            self._config.model_class = model_class
        if base_where is not None:
            self._config.base_where = base_where
        self._logger = logger or create_default_logger(type(self).__name__)
        self._composer = QueryComposer(self._config.base_where, self._config.as_array)
        self._sql: List[str] = []
        self._errors: List[ErrorEntry] = []
        self._pk: Optional[str] = None
        self._attributes: Optional[List[str]] = None
        self._scope = threading.local()

    @property
    def config(self) -> AccessConfig:
        """현재 접근 설정을 반환한다."""

        return self._config

    @property
    def logger(self) -> Logger:
        return self._logger

    @property
    def model_class(self) -> type:
        """대상 모델 클래스를 반환한다. 지정되지 않았으면 예외를 던진다."""

        model_class = self._config.model_class
        if not is_record_class(model_class):
            raise InvalidModelClassError(model_class)
        return model_class

    @property
    def pk(self) -> str:
        return self.get_pk()

    def database(self) -> Database:
        return self.model_class.database()

    def get_model_class(self) -> Optional[type]:
        return self._config.model_class

    def set_model_class(self, model_class: type) -> "AbstractDao":
        """모델 클래스를 바꾸고 기본 키/속성 캐시를 초기화한다."""

        if not is_record_class(model_class):
            raise InvalidModelClassError(model_class)
        self._config.model_class = model_class
        self._pk = None
        self._attributes = None
        return self

    def get_base_where(self) -> Any:
        """현재 스레드에 적용되는 기본 조건을 반환한다."""

        return getattr(self._scope, "base_where", self._config.base_where)

    @contextmanager
    def using_base_where(self, base_where: Any) -> Iterator["AbstractDao"]:
        """블록 안에서만 현재 스레드의 기본 조건을 바꾼다.

        설정에 저장된 기본 조건은 바꾸지 않으므로 여러 호출자가 같은 Dao를 공유할 수 있다.
        """

        previous = getattr(self._scope, "base_where", _UNSET)
        self._scope.base_where = base_where if base_where is not None else {}
        try:
            yield self
        finally:
            if previous is _UNSET:
                del self._scope.base_where
            else:
                self._scope.base_where = previous

    def set_base_where(self, base_where: Any) -> "AbstractDao":
        self._config.base_where = base_where if base_where is not None else {}
        self._composer.base_where = self._config.base_where
        return self

    def get_as_array(self) -> bool:
        return self._config.as_array

    def set_as_array(self, as_array: bool = True) -> "AbstractDao":
        self._config.as_array = bool(as_array)
        self._composer.as_array = self._config.as_array
        return self

    def get_pk(self) -> str:
        """첫 번째 기본 키 속성 이름을 반환한다."""

        if self._pk is None:
            keys = self.model_class.primary_key()
            self._pk = keys[0] if keys else "id"
        return self._pk

    def get_attributes(self) -> List[str]:
        if self._attributes is None:
            self._attributes = list(self.model_class.attributes())
        return list(self._attributes)

    def get_default_order(self) -> str:
        return f"{self.get_pk()} DESC"

    def get_table_name(self) -> str:
        return self.model_class.table_name()

    def get_db_name(self) -> str:
        """연결된 데이터베이스 이름을 반환한다."""

        return self.database().database_name

    def get_auto_increment(self) -> int:
        """다음 자동 증가 값을 반환한다. 알 수 없으면 1이다."""

        database = self.database()
        table = self.get_table_name()
        value: Any = None
        try:
            if database.dialect_name == "mysql":
                value = database.execute(
                    text(
                        "SELECT AUTO_INCREMENT FROM information_schema.TABLES "
                        "WHERE TABLE_SCHEMA = :schema AND TABLE_NAME = :table"
                    ),
                    {"schema": database.database_name, "table": table},
                ).scalar()
            elif database.dialect_name == "sqlite":
                sequence = database.execute(
                    text("SELECT seq FROM sqlite_sequence WHERE name = :table"),
                    {"table": table},
                ).scalar()
                if sequence is not None:
                    value = int(sequence) + 1
        except SQLAlchemyError as error:
            database.rollback_if_autocommit()
            self._logger.debug(
                f"자동 증가 메타 정보를 읽지 못해 최댓값으로 계산합니다: {error}",
                self._context("get_auto_increment"),
            )
        if value is None:
            try:
                column = getattr(self.model_class, self.get_pk())
                current = database.execute(select(func.max(column))).scalar()
            except SQLAlchemyError as error:
                database.rollback_if_autocommit()
                self._record_fault(error, "get_auto_increment")
                return 1
            value = int(current) + 1 if current is not None else 1
        return int(value)

    def get_model(self, data: Optional[Mapping[str, Any]] = None) -> Record:
        """새 레코드 인스턴스를 만든다."""

        model = self.model_class()
        if data:
            model.set_attributes(data)
        return model

    def find(self) -> RecordQuery:
        return self.model_class.find()

    def get_where(self, where: Any = None) -> List[Any]:
        """호출 조건과 기본 조건을 합친 조건을 반환한다."""

        where = self._composer.normalize_where(where, self.get_pk())
        return self._composer.build_condition(where, self.get_base_where())

    def get_query(
        self,
        where: Any = None,
        fields: Union[str, Sequence[str], None] = "",
        order: Any = "",
    ) -> RecordQuery:
        """조건, 필드, 정렬을 반영한 질의를 만든다. SQL 기록이 켜져 있으면 SQL을 남긴다."""

        query = self._build_query(where, fields, order)
        self._capture(query)
        return query

    def _build_query(
        self,
        where: Any = None,
        fields: Union[str, Sequence[str], None] = "",
        order: Any = "",
    ) -> RecordQuery:
        intent = self._composer.compose(
            where,
            fields,
            order,
            pk=self.get_pk(),
            base_where=self.get_base_where(),
            default_order=self.get_default_order(),
        )
        return (
            self.find()
            .where(intent.condition)
            .select(intent.fields)
            .order_by(intent.order)
            .as_array(intent.as_array)
        )

    def begin_transaction(self) -> Transaction:
        return self.database().begin_transaction()

    def get_sql(self) -> List[str]:
        return list(self._sql)

    def get_last_sql(self) -> str:
        return self._sql[-1] if self._sql else ""

    def set_sql(self, sql: Union[str, RecordQuery, Executable]) -> "AbstractDao":
        """SQL 기록에 항목을 추가한다. 질의 객체와 구문은 렌더링해서 저장한다."""

        if isinstance(sql, RecordQuery):
            rendered = sql.raw_sql()
        elif isinstance(sql, str):
            rendered = sql
        else:
            rendered = self.database().render(sql)
        self._sql.append(rendered)
        self._logger.debug(
            "SQL을 기록했습니다.",
            self._context("sql"),
            metadata=QueryMetadata(sql=rendered).as_metadata(),
        )
        return self

    def get_errors(self) -> List[ErrorEntry]:
        return list(self._errors)

    def get_error(self) -> Optional[ErrorEntry]:
        return self._errors[0] if self._errors else None

    def set_errors(
        self,
        errors: Union[ErrorEntry, Mapping[str, Any], str],
        operation: Optional[str] = None,
    ) -> "AbstractDao":
        """오류 기록에 항목을 추가한다.

        사전은 검증 실패로, 문자열은 실행 오류로 기록한다.
        """

        if isinstance(errors, (ValidationFailure, ExecutionFault)):
            entry = errors
        elif isinstance(errors, Mapping):
            entry = ValidationFailure(
                errors={key: _as_messages(value) for key, value in errors.items()},
                model=self._model_name(),
                operation=operation,
            )
        else:
            entry = ExecutionFault(message=str(errors), operation=operation)
        self._errors.append(entry)
        return self

    def _capture(self, sql: Union[RecordQuery, Executable]) -> None:
        if self._config.is_save_sql:
            self.set_sql(sql)

    def _record_validation(self, errors: Mapping[str, Any], operation: str) -> None:
        self.set_errors(errors, operation)
        self._logger.warning(
            f"레코드 검증에 실패했습니다: {dict(errors)}",
            self._context(operation),
        )

    def _record_fault(self, error: Union[Exception, str], operation: str) -> None:
        if isinstance(error, Exception):
            entry = ExecutionFault(
                message=str(error),
                exception_type=type(error).__name__,
                operation=operation,
            )
        else:
            entry = ExecutionFault(message=error, operation=operation)
        self._errors.append(entry)
        self._logger.error(
            f"DAO 실행 오류가 발생했습니다: {entry.message}",
            self._context(operation),
            metadata=QueryMetadata(exception_type=entry.exception_type).as_metadata(),
        )

    def _record_rowcount(self, rowcount: int, operation: str) -> None:
        self._logger.debug(
            f"{rowcount}개 행이 처리되었습니다.",
            self._context(operation),
            metadata=QueryMetadata(rowcount=rowcount).as_metadata(),
        )

    def _rollback(self, transaction: Transaction, operation: str) -> None:
        transaction.rollback()
        self._logger.info("트랜잭션을 롤백했습니다.", self._context(operation))

    def _context(self, operation: str) -> LogContext:
        model_class = self._config.model_class
        table = model_class.table_name() if is_record_class(model_class) else None
        return LogContext(model=self._model_name(), table=table, operation=operation)

    def _model_name(self) -> Optional[str]:
        model_class = self._config.model_class
        return model_class.__name__ if model_class is not None else None


_UNSET = object()


def _as_messages(value: Any) -> List[str]:
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value]
    return [str(value)]

