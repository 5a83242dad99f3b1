"""
목적: DAO 조건 형식을 SQLAlchemy WHERE 절로 변환한다.
설명: 필드-값 사전, 연산자 리스트, 원문 SQL 문자열을 지원한다.
    - 사전: 항목별 동등 비교를 AND로 묶는다. 리스트 값은 IN, None은 IS NULL이다.
    - 연산자 리스트: ["and", c1, c2], [">", "age", 18], ["in", "id", [1, 2]] 등.
    - 문자열: text()로 그대로 삽입하며 params로 바인딩 값을 전달한다.
디자인 패턴: 인터프리터
참조: src/daokit/integrations/db/query.py, src/daokit/integrations/db/record.py
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from sqlalchemy import and_, literal_column, not_, or_, text
from sqlalchemy.sql.elements import ClauseElement, ColumnElement

from daokit.integrations.db.expression import RawExpression, to_clause_value

_COMPARISONS: Dict[str, Callable[[Any, Any], ColumnElement]] = {
    "=": lambda column, value: column == value,
    "!=": lambda column, value: column != value,
    "<>": lambda column, value: column != value,
    ">": lambda column, value: column > value,
    ">=": lambda column, value: column >= value,
    "<": lambda column, value: column < value,
    "<=": lambda column, value: column <= value,
}


class ConditionBuilder:
    """레코드 클래스 기준 조건 변환기."""

    def __init__(self, model_class: type) -> None:
        self._model_class = model_class

    def build(self, condition: Any, params: Optional[Mapping[str, Any]] = None) -> Optional[ColumnElement]:
        """조건을 WHERE 절로 변환한다. 빈 조건은 None이다."""

        if condition is None:
            return None
        if isinstance(condition, ClauseElement):
            return condition
        if isinstance(condition, RawExpression):
            return text(condition.expression)
        if isinstance(condition, str):
            if not condition.strip():
                return None
            clause = text(condition)
            if params:
                clause = clause.bindparams(**dict(params))
            return clause
        if isinstance(condition, Mapping):
            return self._build_hash(condition)
        if isinstance(condition, (list, tuple)):
            if not condition:
                return None
            return self._build_operator(list(condition), params)
        raise ValueError(f"지원하지 않는 조건 형식입니다: {condition!r}")

    def column(self, name: str) -> ColumnElement:
        """속성 또는 컬럼 이름을 컬럼 표현식으로 변환한다."""

        name = name.strip()
        mapped = getattr(self._model_class, "__mapper__", None)
        if mapped is not None and name in mapped.column_attrs:
            return getattr(self._model_class, name)
        table = getattr(self._model_class, "__table__", None)
        if table is not None:
            if name in table.c:
                return table.c[name]
            prefix, _, bare = name.rpartition(".")
            if prefix.strip("`\"") == table.name and bare in table.c:
                return table.c[bare]
        return literal_column(name)

    def _build_hash(self, condition: Mapping[str, Any]) -> Optional[ColumnElement]:
        parts: List[ColumnElement] = []
        for name, value in condition.items():
            column = self.column(str(name))
            if value is None:
                parts.append(column.is_(None))
            elif isinstance(value, (list, tuple, set, frozenset)):
                parts.append(column.in_(list(value)))
            else:
                parts.append(column == to_clause_value(value))
        if not parts:
            return None
        if len(parts) == 1:
            return parts[0]
        return and_(*parts)

    def _build_operator(self, condition: List[Any], params: Optional[Mapping[str, Any]]) -> Optional[ColumnElement]:
        operator = str(condition[0]).strip().lower()
        operands = condition[1:]

        if operator in ("and", "or"):
            parts = [
                clause
                for clause in (self.build(operand, params) for operand in operands if not _is_empty(operand))
                if clause is not None
            ]
            if not parts:
                return None
            if len(parts) == 1:
                return parts[0]
            return and_(*parts) if operator == "and" else or_(*parts)

        if operator == "not":
            self._require(operator, operands, 1)
            inner = self.build(operands[0], params)
            return None if inner is None else not_(inner)

        if operator in ("in", "not in"):
            self._require(operator, operands, 2)
            column = self.column(operands[0])
            values = operands[1]
            if not isinstance(values, (list, tuple, set, frozenset)):
                values = [values]
            clause = column.in_(list(values))
            return clause if operator == "in" else not_(clause)

        if operator in ("between", "not between"):
            self._require(operator, operands, 3)
            clause = self.column(operands[0]).between(operands[1], operands[2])
            return clause if operator == "between" else not_(clause)

        if operator in ("like", "not like", "or like", "or not like"):
            self._require(operator, operands, 2)
            return self._build_like(operator, operands)

        if operator in _COMPARISONS:
            self._require(operator, operands, 2)
            return _COMPARISONS[operator](self.column(operands[0]), to_clause_value(operands[1]))

        raise ValueError(f"지원하지 않는 조건 연산자입니다: {condition[0]!r}")

    def _build_like(self, operator: str, operands: Sequence[Any]) -> ColumnElement:
        column = self.column(operands[0])
        values = operands[1]
        if not isinstance(values, (list, tuple)):
            values = [values]
        wrap = len(operands) < 3 or operands[2] is not False
        negate = "not" in operator
        parts = []
        for value in values:
            pattern = f"%{_escape_like(str(value))}%" if wrap else str(value)
            clause = column.like(pattern, escape="\\")
            parts.append(not_(clause) if negate else clause)
        if len(parts) == 1:
            return parts[0]
        return or_(*parts) if operator.startswith("or") else and_(*parts)

    def _require(self, operator: str, operands: Sequence[Any], count: int) -> None:
        if len(operands) < count:
            raise ValueError(f"'{operator}' 연산자는 피연산자 {count}개가 필요합니다.")


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (str, Mapping, list, tuple)):
        return len(value) == 0
    return False


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
