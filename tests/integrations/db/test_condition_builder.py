"""
목적: 조건 변환기 동작을 검증한다.
설명: 사전/연산자 리스트/문자열 조건이 기대한 WHERE 절로 변환되는지 SQLite 방언으로 렌더링해 확인한다.
디자인 패턴: 테스트 케이스
참조: src/daokit/integrations/db/condition_builder.py
"""

from __future__ import annotations

import pytest
from sqlalchemy.dialects import sqlite

from daokit.integrations.db import ConditionBuilder, RawExpression


def _render(clause) -> str:
    """절을 SQLite 리터럴 SQL로 렌더링한다."""

    return str(clause.compile(dialect=sqlite.dialect(), compile_kwargs={"literal_binds": True}))


@pytest.fixture
def builder(user_model) -> ConditionBuilder:
    return ConditionBuilder(user_model)


def test_empty_conditions_build_nothing(builder) -> None:
    """빈 조건은 None으로 변환되는지 확인한다."""

    assert builder.build(None) is None
    assert builder.build({}) is None
    assert builder.build("") is None
    assert builder.build(["and"]) is None
    assert builder.build(["and", {}, None]) is None


def test_hash_condition(builder) -> None:
    """사전 조건이 동등/IN/IS NULL 비교로 변환되는지 확인한다."""

    sql = _render(builder.build({"name": "a", "age": [1, 2], "deleted": None}))

    assert "users.name = 'a'" in sql
    assert "users.age IN (1, 2)" in sql
    assert "users.deleted IS NULL" in sql
    assert sql.count(" AND ") == 2


def test_operator_conditions(builder) -> None:
    """연산자 리스트가 대응하는 SQL 연산으로 변환되는지 확인한다."""

    assert _render(builder.build([">", "age", 18])) == "users.age > 18"
    assert _render(builder.build(["<>", "age", 18])) == "users.age != 18"
    assert _render(builder.build(["between", "age", 1, 9])) == "users.age BETWEEN 1 AND 9"
    assert "users.id NOT IN (1, 2)" in _render(builder.build(["not in", "id", [1, 2]]))
    assert _render(builder.build(["or", {"id": 1}, {"id": 2}])) == "users.id = 1 OR users.id = 2"
    assert _render(builder.build(["not", {"id": 1}])) == "users.id != 1"


def test_like_escapes_and_wraps(builder) -> None:
    """like 값이 이스케이프되고 %로 감싸지는지 확인한다."""

    wrapped = _render(builder.build(["like", "name", "50%_off"]))
    raw = _render(builder.build(["like", "name", "ab%", False]))
    either = _render(builder.build(["or like", "name", ["a", "b"]]))

    assert "'%50\\%\\_off%'" in wrapped
    assert "'ab%'" in raw
    assert " OR " in either


def test_string_condition_with_params(builder) -> None:
    """문자열 조건이 바인딩 값과 함께 사용되는지 확인한다."""

    assert _render(builder.build("age > :age", {"age": 3})) == "age > 3"
    assert _render(builder.build(RawExpression("1 = 1"))) == "1 = 1"


def test_column_resolution(builder) -> None:
    """테이블 접두사와 알 수 없는 이름이 컬럼 표현식으로 변환되는지 확인한다."""

    assert _render(builder.column("users.age")) == "users.age"
    assert _render(builder.column("lower(name)")) == "lower(name)"


def test_invalid_operator_raises_value_error(builder) -> None:
    """지원하지 않는 연산자나 부족한 피연산자는 ValueError를 던지는지 확인한다."""

    with pytest.raises(ValueError):
        builder.build(["regexp", "name", "a"])
    with pytest.raises(ValueError):
        builder.build(["between", "age", 1])
    with pytest.raises(ValueError):
        builder.build(3.5)
