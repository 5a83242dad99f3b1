"""
목적: 레코드 클래스 대상 질의 객체를 제공한다.
설명: 조건, 필드 선택, 정렬, 페이지 범위를 누적한 뒤 레코드 또는 사전 형태로 실행한다.
    필드 문자열의 `expr as alias` 구문은 사전 모드에서 라벨 컬럼으로 변환된다.
디자인 패턴: 빌더 패턴
참조: src/daokit/integrations/db/condition_builder.py, src/daokit/integrations/db/record.py
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from sqlalchemy import func, literal_column, select, text
from sqlalchemy.orm import load_only
from sqlalchemy.sql import Select
from sqlalchemy.sql.elements import ColumnElement

from daokit.integrations.db.condition_builder import ConditionBuilder
from daokit.integrations.db.database import Database

_ALIAS_PATTERN = re.compile(r"^(.+?)\s+as\s+(\w+)$", re.IGNORECASE | re.DOTALL)


def split_fields(fields: Union[str, Sequence[str], None]) -> List[str]:
    """필드 문자열을 최상위 쉼표 기준으로 나눈다. 괄호 안의 쉼표는 유지한다."""

    if not fields:
        return []
    if not isinstance(fields, str):
        return [str(field).strip() for field in fields if str(field).strip()]
    parts: List[str] = []
    depth = 0
    current = ""
    for char in fields:
        if char == "(":
            depth += 1
        elif char == ")":
            depth = max(depth - 1, 0)
        if char == "," and depth == 0:
            parts.append(current)
            current = ""
            continue
        current += char
    parts.append(current)
    return [part.strip() for part in parts if part.strip()]


class RecordQuery:
    """레코드 질의 빌더.

    Args:
        model: 질의 대상 Record 하위 클래스.
        database: 실행에 사용할 Database.
    """

    def __init__(self, model: type, database: Database) -> None:
        self._model = model
        self._database = database
        self._builder = ConditionBuilder(model)
        self._where: Optional[ColumnElement] = None
        self._fields: List[str] = []
        self._order: List[Any] = []
        self._offset: Optional[int] = None
        self._limit: Optional[int] = None
        self._as_array = False

    @property
    def model(self) -> type:
        return self._model

    @property
    def is_array(self) -> bool:
        return self._as_array

    def where(self, condition: Any, params: Optional[Mapping[str, Any]] = None) -> "RecordQuery":
        """조건을 설정한다."""

        self._where = self._builder.build(condition, params)
        return self

    def select(self, fields: Union[str, Sequence[str], None]) -> "RecordQuery":
        """조회 필드를 설정한다."""

        self._fields = split_fields(fields)
        return self

    def order_by(self, order: Union[str, Mapping[str, Any], Sequence[str], None]) -> "RecordQuery":
        """정렬을 설정한다. 문자열은 원문 그대로 사용한다."""

        self._order = []
        if not order:
            return self
        if isinstance(order, str):
            self._order.append(text(order))
        elif isinstance(order, Mapping):
            for name, direction in order.items():
                column = self._builder.column(str(name))
                descending = str(direction).strip().lower() in ("desc", "-1")
                self._order.append(column.desc() if descending else column.asc())
        else:
            self._order.extend(text(str(item)) for item in order if item)
        return self

    def offset(self, offset: Optional[int]) -> "RecordQuery":
        self._offset = offset
        return self

    def limit(self, limit: Optional[int]) -> "RecordQuery":
        self._limit = limit
        return self

    def as_array(self, value: bool = True) -> "RecordQuery":
        """결과를 사전으로 받을지 설정한다."""

        self._as_array = bool(value)
        return self

    def statement(self) -> Select:
        """누적된 설정으로 SELECT 구문을 만든다."""

        if self._as_array:
            statement = self._array_statement()
        else:
            statement = self._record_statement()
        if self._where is not None:
            statement = statement.where(self._where)
        if self._order:
            statement = statement.order_by(*self._order)
        if self._offset:
            statement = statement.offset(self._offset)
        if self._limit is not None:
            statement = statement.limit(self._limit)
        return statement

    def raw_sql(self) -> str:
        """실행될 SQL을 문자열로 반환한다."""

        return self._database.render(self.statement())

    def one(self) -> Union[Dict[str, Any], Any, None]:
        """첫 행을 반환한다. 없으면 None이다."""

        result = self._database.execute(self.statement())
        if self._as_array:
            row = result.mappings().first()
            return dict(row) if row is not None else None
        return result.scalars().first()

    def all(self) -> List[Any]:
        """모든 행을 반환한다."""

        result = self._database.execute(self.statement())
        if self._as_array:
            return [dict(row) for row in result.mappings().all()]
        return list(result.scalars().all())

    def count(self, field: str = "*") -> Any:
        return self._aggregate(func.count, field)

    def sum(self, field: str) -> Any:
        return self._aggregate(func.sum, field)

    def min(self, field: str) -> Any:
        return self._aggregate(func.min, field)

    def max(self, field: str) -> Any:
        return self._aggregate(func.max, field)

    def _aggregate(self, function, field: str) -> Any:
        if not field or field.strip() == "*":
            target = literal_column("*")
        else:
            target = self._builder.column(field)
        statement = select(function(target)).select_from(self._model.__table__)
        if self._where is not None:
            statement = statement.where(self._where)
        return self._database.execute(statement).scalar()

    def _array_statement(self) -> Select:
        if not self._fields:
            return select(self._model.__table__)
        columns = []
        for field in self._fields:
            match = _ALIAS_PATTERN.match(field)
            if match:
                columns.append(self._builder.column(match.group(1)).label(match.group(2)))
            else:
                columns.append(self._builder.column(field))
        return select(*columns).select_from(self._model.__table__)

    def _record_statement(self) -> Select:
        statement = select(self._model).execution_options(populate_existing=True)
        mapped = self._model.__mapper__.column_attrs
        names = [field for field in self._fields if field in mapped]
        if names:
            statement = statement.options(load_only(*[getattr(self._model, name) for name in names]))
        return statement
