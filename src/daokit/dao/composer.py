"""
목적: 호출 단위 조건과 기본 조건을 합쳐 질의 의도를 만든다.
설명: 숫자 조건을 기본 키 조건으로 바꾸고, 필드 문자열의 별칭 여부로 결과 형태를 결정한다.
디자인 패턴: 빌더 패턴
참조: src/daokit/dao/models.py, src/daokit/dao/abstract.py
"""

from __future__ import annotations

import re
from decimal import Decimal
from typing import Any, List, Optional, Sequence, Union

from daokit.dao.models import QueryIntent

_NUMERIC_PATTERN = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$")
_ALIAS_MARKER = re.compile(r"\sas\s", re.IGNORECASE)


def is_numeric(value: Any) -> bool:
    """숫자 또는 숫자 문자열인지 확인한다. bool은 숫자로 보지 않는다."""

    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float, Decimal)):
        return True
    if isinstance(value, str):
        return bool(_NUMERIC_PATTERN.match(value))
    return False


class QueryComposer:
    """질의 조건 조립기.

    Args:
        base_where: 모든 질의에 결합되는 기본 조건.
        as_array: 기본 결과 형태.
        default_order: 정렬 미지정 시 사용할 정렬.
    """

    def __init__(self, base_where: Any = None, as_array: bool = False, default_order: str = "") -> None:
        self.base_where = base_where if base_where is not None else {}
        self.as_array = as_array
        self.default_order = default_order

    def normalize_where(self, where: Any, pk: str) -> Any:
        """숫자 조건을 `{pk: where}`로 바꾼다."""

        if is_numeric(where):
            return {pk: where}
        return where

    def build_condition(self, where: Any, base_where: Any = None) -> List[Any]:
        """`["and", where, base_where]` 형태로 조건을 합친다. 빈 항목은 생략한다."""

        base = self.base_where if base_where is None else base_where
        condition: List[Any] = ["and"]
        for part in (where, base):
            if _has_value(part):
                condition.append(part)
        return condition

    def select_fields(self, fields: Union[str, Sequence[str], None]) -> str:
        if fields is None:
            return ""
        if isinstance(fields, str):
            return fields
        return ",".join(str(field) for field in fields)

    def resolve_shape(self, fields: Union[str, Sequence[str], None], as_array: Optional[bool] = None) -> bool:
        """별칭이 포함된 필드 문자열이면 사전 형태를 강제한다."""

        configured = self.as_array if as_array is None else as_array
        if _ALIAS_MARKER.search(self.select_fields(fields)):
            return True
        return bool(configured)

    def resolve_order(self, order: Any, default_order: Optional[str] = None) -> Any:
        if order:
            return order
        return self.default_order if default_order is None else default_order

    def compose(
        self,
        where: Any = None,
        fields: Union[str, Sequence[str], None] = "",
        order: Any = "",
        pk: Optional[str] = None,
        base_where: Any = None,
        default_order: Optional[str] = None,
    ) -> QueryIntent:
        """질의 의도를 조립한다. base_where와 default_order를 주면 이번 호출에만 사용한다."""

        if pk is not None:
            where = self.normalize_where(where, pk)
        selected = self.select_fields(fields)
        return QueryIntent(
            condition=self.build_condition(where, base_where),
            fields=selected,
            order=self.resolve_order(order, default_order),
            as_array=self.resolve_shape(selected),
        )


def _has_value(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, (str, dict, list, tuple)):
        return len(value) > 0
    return True
