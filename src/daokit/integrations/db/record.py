"""
목적: DAO가 다루는 구조적 레코드 베이스를 제공한다.
설명: SQLAlchemy 선언형 베이스 위에 검증, 저장, 삭제, 일괄 갱신/삭제 등 레코드 수준 동작을 정의한다.
디자인 패턴: 액티브 레코드, 템플릿 메서드
참조: src/daokit/integrations/db/database.py, src/daokit/integrations/db/query.py
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence

from pydantic import ValidationError
from sqlalchemy import delete, insert, inspect, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.sql import Delete, Insert, Update

from daokit.integrations.db.condition_builder import ConditionBuilder
from daokit.integrations.db.database import Database
from daokit.integrations.db.expression import to_clause_value
from daokit.integrations.db.query import RecordQuery
from daokit.shared.exceptions import DatabaseNotBoundError


class Record(DeclarativeBase):
    """DAO 대상 레코드의 선언형 베이스.

    하위 클래스는 `__tablename__`과 매핑 컬럼을 정의하고,
    필요하면 `__schema__`에 검증용 Pydantic 모델을 지정한다.
    """

    __schema__ = None
    __database__ = None

    @classmethod
    def use_database(cls, database: Optional[Database]) -> None:
        """레코드 클래스가 사용할 Database를 연결한다."""

        cls.__database__ = database

    @classmethod
    def database(cls) -> Database:
        """연결된 Database를 반환한다."""

        database = cls.__database__
        if database is None:
            raise DatabaseNotBoundError(cls.__name__)
        return database

    @classmethod
    def primary_key(cls) -> List[str]:
        """기본 키 속성 이름 목록을 반환한다."""

        mapper = inspect(cls)
        return [mapper.get_property_by_column(column).key for column in mapper.primary_key]

    @classmethod
    def attributes(cls) -> List[str]:
        """매핑된 컬럼 속성 이름 목록을 선언 순서대로 반환한다."""

        return [prop.key for prop in inspect(cls).column_attrs]

    @classmethod
    def table_name(cls) -> str:
        return cls.__table__.name

    @classmethod
    def find(cls) -> RecordQuery:
        """레코드 클래스에 대한 빈 질의를 반환한다."""

        return RecordQuery(cls, cls.database())

    @classmethod
    def update_all(
        cls,
        attributes: Mapping[str, Any],
        condition: Any = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> int:
        """조건에 맞는 행을 한 번의 UPDATE로 갱신하고 영향받은 행 수를 반환한다."""

        return cls.execute_bulk(cls.update_statement(attributes, condition, params))

    @classmethod
    def delete_all(cls, condition: Any = None, params: Optional[Mapping[str, Any]] = None) -> int:
        """조건에 맞는 행을 한 번의 DELETE로 삭제하고 영향받은 행 수를 반환한다."""

        return cls.execute_bulk(cls.delete_statement(condition, params))

    @classmethod
    def update_statement(
        cls,
        attributes: Mapping[str, Any],
        condition: Any = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> Update:
        values = {key: to_clause_value(value) for key, value in attributes.items()}
        statement = update(cls).values(values).execution_options(synchronize_session=False)
        clause = ConditionBuilder(cls).build(condition, params)
        if clause is not None:
            statement = statement.where(clause)
        return statement

    @classmethod
    def delete_statement(cls, condition: Any = None, params: Optional[Mapping[str, Any]] = None) -> Delete:
        statement = delete(cls).execution_options(synchronize_session=False)
        clause = ConditionBuilder(cls).build(condition, params)
        if clause is not None:
            statement = statement.where(clause)
        return statement

    @classmethod
    def batch_insert_statement(cls, columns: Sequence[str], rows: Sequence[Sequence[Any]]) -> Insert:
        """다중 VALUES INSERT 구문을 만든다."""

        mapper = inspect(cls)
        names = [mapper.column_attrs[key].columns[0].name for key in columns]
        payload = [dict(zip(names, row)) for row in rows]
        return insert(cls.__table__).values(payload)

    @classmethod
    def execute_bulk(cls, statement) -> int:
        """UPDATE/DELETE 구문을 실행하고 영향받은 행 수를 반환한다."""

        database = cls.database()
        try:
            result = database.execute(statement)
            database.autocommit()
        except SQLAlchemyError:
            database.rollback_if_autocommit()
            raise
        return result.rowcount

    @property
    def errors(self) -> Dict[str, List[str]]:
        """마지막 검증 오류를 반환한다."""

        return dict(self._error_map())

    def add_error(self, attribute: str, message: str) -> None:
        self._error_map().setdefault(attribute, []).append(message)

    def clear_errors(self) -> None:
        self._error_map().clear()

    def set_attributes(self, data: Mapping[str, Any]) -> None:
        """알려진 속성만 대입한다."""

        known = set(self.attributes())
        for key, value in data.items():
            if key in known:
                setattr(self, key, value)

    def to_dict(self) -> Dict[str, Any]:
        """속성 사전을 반환한다. 로딩되지 않은 속성은 None이다."""

        unloaded = inspect(self).unloaded
        return {
            key: None if key in unloaded else getattr(self, key)
            for key in self.attributes()
        }

    def validate(self) -> bool:
        """`__schema__`로 현재 속성을 검증한다."""

        self.clear_errors()
        schema = type(self).__schema__
        if schema is None:
            return True
        state = inspect(self)
        if state.persistent:
            data = {key: getattr(self, key) for key in self.attributes()}
        else:
            data = self.to_dict()
        try:
            schema.model_validate(data)
        except ValidationError as error:
            for item in error.errors():
                location = ".".join(str(part) for part in item["loc"]) or "__root__"
                self.add_error(location, item["msg"])
            return False
        return True

    def save(self, validate: bool = True) -> bool:
        """검증 후 레코드를 저장한다.

        검증에 실패하면 False를 반환하고, 영속 레코드의 변경분은 버린다.
        실행 오류는 롤백 후 그대로 전파한다.
        """

        database = self.database()
        session = database.session
        if validate and not self.validate():
            if inspect(self).persistent:
                session.expire(self)
            return False
        try:
            session.add(self)
            session.flush()
            database.autocommit()
        except SQLAlchemyError:
            database.rollback_if_autocommit()
            raise
        return True

    def delete(self) -> bool:
        """레코드를 삭제한다."""

        database = self.database()
        session = database.session
        try:
            session.delete(self)
            session.flush()
            database.autocommit()
        except SQLAlchemyError:
            database.rollback_if_autocommit()
            raise
        return True

    def _error_map(self) -> Dict[str, List[str]]:
        errors = getattr(self, "_errors", None)
        if errors is None:
            errors = {}
            self._errors = errors
        return errors


def is_record_class(value: object) -> bool:
    """Record 하위 모델 클래스인지 확인한다."""

    return isinstance(value, type) and issubclass(value, Record) and value is not Record
