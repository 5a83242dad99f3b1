"""
목적: 이스케이프되지 않는 SQL 조각 표현식을 제공한다.
설명: 갱신 페이로드나 조건에 문자열을 그대로 SQL로 삽입할 때 사용한다. 인젝션 방지는 호출자 책임이다.
디자인 패턴: 값 객체
참조: src/daokit/integrations/db/record.py, src/daokit/integrations/db/condition_builder.py
"""

from __future__ import annotations

from sqlalchemy import literal_column
from sqlalchemy.sql.elements import ColumnElement


class RawExpression:
    """원문 SQL 표현식."""

    __slots__ = ("expression",)

    def __init__(self, expression: str) -> None:
        self.expression = str(expression)

    def to_clause(self) -> ColumnElement:
        """SQLAlchemy 컬럼 표현식으로 변환한다."""

        return literal_column(self.expression)

    def __clause_element__(self) -> ColumnElement:
        return self.to_clause()

    def __eq__(self, other: object) -> bool:
        if isinstance(other, RawExpression):
            return self.expression == other.expression
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.expression)

    def __str__(self) -> str:
        return self.expression

    def __repr__(self) -> str:
        return f"RawExpression({self.expression!r})"


def to_clause_value(value: object) -> object:
    """RawExpression이면 SQL 표현식으로, 아니면 그대로 반환한다."""

    if isinstance(value, RawExpression):
        return value.to_clause()
    return value
