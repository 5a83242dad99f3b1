"""
목적: 질의 조립기 동작을 검증한다.
설명: 숫자 조건 정규화, 조건 결합, 결과 형태 결정, 정렬 선택 규칙을 확인한다.
디자인 패턴: 테스트 케이스
참조: src/daokit/dao/composer.py
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from daokit.dao import QueryComposer, is_numeric


def test_build_condition_without_parts_is_bare_and() -> None:
    """빈 조건끼리 결합하면 ["and"]만 남는지 확인한다."""

    composer = QueryComposer()

    assert composer.build_condition({}, {}) == ["and"]
    assert composer.build_condition(None, None) == ["and"]


def test_build_condition_keeps_caller_then_base() -> None:
    """호출 조건 뒤에 기본 조건이 붙는지 확인한다."""

    composer = QueryComposer(base_where={"deleted": 0})

    assert composer.build_condition({"age": 3}) == ["and", {"age": 3}, {"deleted": 0}]
    assert composer.build_condition(["=", "age", 3], {}) == ["and", ["=", "age", 3]]
    assert composer.build_condition("", {"deleted": 0}) == ["and", {"deleted": 0}]


@pytest.mark.parametrize("where", [5, "5", 5.0, Decimal("5"), " 12 "])
def test_numeric_where_becomes_primary_key_condition(where) -> None:
    """숫자 조건이 기본 키 조건으로 바뀌는지 확인한다."""

    composer = QueryComposer()

    assert composer.normalize_where(where, "id") == {"id": where}


@pytest.mark.parametrize("where", [True, False, "abc", "5 or 1=1", {"id": 5}, None])
def test_non_numeric_where_is_untouched(where) -> None:
    """숫자가 아닌 조건은 그대로 유지되는지 확인한다."""

    composer = QueryComposer()

    assert composer.normalize_where(where, "id") == where


def test_is_numeric_rejects_bool() -> None:
    """bool은 숫자 조건으로 취급하지 않는지 확인한다."""

    assert is_numeric(1)
    assert is_numeric("-3.5")
    assert not is_numeric(True)
    assert not is_numeric("")


@pytest.mark.parametrize(
    "fields",
    ["count(*) as total", "name AS title", "id, age As years", ["id", "sum(age) as s"]],
)
def test_alias_in_fields_forces_array_shape(fields) -> None:
    """필드 문자열에 별칭이 있으면 대소문자와 무관하게 사전 형태가 되는지 확인한다."""

    composer = QueryComposer(as_array=False)

    assert composer.resolve_shape(fields) is True


def test_shape_follows_configuration_without_alias() -> None:
    """별칭이 없으면 설정 값을 따르는지 확인한다."""

    assert QueryComposer(as_array=False).resolve_shape("id,name") is False
    assert QueryComposer(as_array=True).resolve_shape("id,name") is True
    assert QueryComposer(as_array=False).resolve_shape("alias_name") is False


def test_select_fields_joins_sequences() -> None:
    """필드 목록이 쉼표로 이어지는지 확인한다."""

    composer = QueryComposer()

    assert composer.select_fields(["id", "name"]) == "id,name"
    assert composer.select_fields("id") == "id"
    assert composer.select_fields(None) == ""


def test_compose_uses_default_order_and_pk() -> None:
    """정렬이 없으면 기본 정렬을 쓰고 숫자 조건은 기본 키 조건이 되는지 확인한다."""

    composer = QueryComposer(base_where={"deleted": 0}, default_order="id DESC")

    intent = composer.compose(7, "", "", pk="id")

    assert intent.condition == ["and", {"id": 7}, {"deleted": 0}]
    assert intent.order == "id DESC"
    assert intent.fields == ""
    assert intent.as_array is False

    explicit = composer.compose({}, ["id", "name as n"], "age ASC", pk="id")

    assert explicit.order == "age ASC"
    assert explicit.fields == "id,name as n"
    assert explicit.as_array is True


def test_compose_accepts_call_scoped_base_where_and_order() -> None:
    """호출 단위 기본 조건과 기본 정렬이 저장된 값을 바꾸지 않고 적용되는지 확인한다."""

    composer = QueryComposer(base_where={"deleted": 0}, default_order="id DESC")

    intent = composer.compose(None, "", "", pk="id", base_where={"deleted": 1}, default_order="uid DESC")

    assert intent.condition == ["and", {"deleted": 1}]
    assert intent.order == "uid DESC"
    assert composer.base_where == {"deleted": 0}
    assert composer.compose(None, pk="id").condition == ["and", {"deleted": 0}]
