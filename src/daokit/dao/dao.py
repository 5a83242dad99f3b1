"""
목적: 레코드 단위 CRUD, 일괄 처리, 집계, 카운터 연산을 제공한다.
설명: 모든 연산은 실패 시 예외 대신 빈 값(False, 0, {}, [])을 반환하고 ErrorLog에 항목을 남긴다.
    여러 단계로 이루어진 쓰기는 하나의 트랜잭션 안에서 수행하며 첫 실패에서 롤백한다.
디자인 패턴: 데이터 접근 객체(DAO), 템플릿 메서드
참조: src/daokit/dao/abstract.py, src/daokit/integrations/db/record.py
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from sqlalchemy.exc import SQLAlchemyError

from daokit.dao.abstract import AbstractDao
from daokit.dao.composer import is_numeric
from daokit.integrations.db import RawExpression

_FAULTS = (SQLAlchemyError, ValueError)


class Dao(AbstractDao):
    """모델 클래스 하나를 담당하는 DAO."""

    def get(self, where: Any = None, fields: Union[str, Sequence[str], None] = "", order: Any = "") -> Any:
        """조건에 맞는 첫 레코드를 반환한다. 없으면 빈 사전이다."""

        try:
            result = self.get_query(where, fields, order).one()
        except _FAULTS as error:
            self._record_fault(error, "get")
            return {}
        return result if result is not None else {}

    def get_all(self, where: Any = None, fields: Union[str, Sequence[str], None] = "", order: Any = "") -> List[Any]:
        """조건에 맞는 레코드 목록을 반환한다."""

        try:
            return self.get_query(where, fields, order).all()
        except _FAULTS as error:
            self._record_fault(error, "get_all")
            return []

    def get_page(
        self,
        where: Any = None,
        page: Optional[int] = 1,
        limit: Optional[int] = None,
        fields: Union[str, Sequence[str], None] = "",
        order: Any = "",
    ) -> List[Any]:
        """페이지 단위로 레코드 목록을 반환한다.

        page가 1보다 작으면 1, limit가 없거나 1보다 작으면 기본 페이지 크기를 사용한다.
        숫자가 아닌 값은 없는 값으로 본다.
        """

        page = max(_to_int(page), 1)
        limit = _to_int(limit)
        if limit < 1:
            limit = self._config.page_limit
        try:
            query = self._build_query(where, fields, order).offset((page - 1) * limit).limit(limit)
            self._capture(query)
            return query.all()
        except _FAULTS as error:
            self._record_fault(error, "get_page")
            return []

    def add(self, data: Mapping[str, Any]) -> Any:
        """레코드를 추가하고 기본 키 값을 반환한다. 실패하면 0이다."""

        model = self.get_model(data)
        try:
            saved = model.save()
        except _FAULTS as error:
            self._record_fault(error, "add")
            return 0
        if not saved:
            self._record_validation(model.errors, "add")
            return 0
        return getattr(model, self.get_pk())

    def add_all(self, data: Union[Sequence[Mapping[str, Any]], Mapping[Any, Mapping[str, Any]]]) -> Dict[Any, Any]:
        """여러 레코드를 하나의 트랜잭션으로 추가한다.

        첫 실패에서 롤백하고 그때까지 모은 `{키: 기본 키}` 사전을 반환한다.
        롤백된 항목의 기본 키도 결과에 남는다.
        """

        items = data.items() if isinstance(data, Mapping) else enumerate(data)
        result: Dict[Any, Any] = {}
        transaction = self.begin_transaction()
        try:
            for key, row in items:
                new_id = self.add(row)
                if not new_id:
                    self._rollback(transaction, "add_all")
                    return result
                result[key] = new_id
            transaction.commit()
        except _FAULTS as error:
            self._rollback(transaction, "add_all")
            self._record_fault(error, "add_all")
        return result

    def batch_insert(self, data: Union[Sequence[Mapping[str, Any]], Mapping[Any, Mapping[str, Any]]]) -> int:
        """다중 VALUES INSERT로 레코드를 일괄 추가하고 추가된 행 수를 반환한다.

        행은 모델 속성만 남기며 컬럼 목록은 묶음의 첫 행을 따른다.
        모든 묶음은 하나의 트랜잭션이며 실패하면 0을 반환한다.
        """

        rows = list(data.values()) if isinstance(data, Mapping) else list(data)
        if not rows:
            return 0
        model_class = self.model_class
        attributes = self.get_attributes()
        batch_size = self._config.batch_size
        database = self.database()
        total = 0
        transaction = self.begin_transaction()
        try:
            for start in range(0, len(rows), batch_size):
                chunk = [_filter_row(row, attributes) for row in rows[start:start + batch_size]]
                columns = list(chunk[0].keys())
                if not columns:
                    self._rollback(transaction, "batch_insert")
                    self._record_fault("일괄 삽입할 컬럼이 없습니다.", "batch_insert")
                    return 0
                values = [[row.get(column) for column in columns] for row in chunk]
                statement = model_class.batch_insert_statement(columns, values)
                self._capture(statement)
                inserted = database.execute(statement).rowcount
                if inserted is None or inserted < 0:
                    inserted = len(values)
                if not inserted:
                    self._rollback(transaction, "batch_insert")
                    self._record_fault("일괄 삽입된 행이 없습니다.", "batch_insert")
                    return 0
                total += inserted
            transaction.commit()
        except _FAULTS as error:
            self._rollback(transaction, "batch_insert")
            self._record_fault(error, "batch_insert")
            return 0
        self._record_rowcount(total, "batch_insert")
        return total

    def update(self, where: Any, data: Mapping[str, Any]) -> bool:
        """조건에 맞는 첫 레코드를 갱신한다."""

        try:
            model = self.get_query(where).as_array(False).one()
            if model is None:
                return False
            model.set_attributes(data)
            saved = model.save()
        except _FAULTS as error:
            self._record_fault(error, "update")
            return False
        if not saved:
            self._record_validation(model.errors, "update")
            return False
        return True

    def update_all(self, where: Any, data: Mapping[str, Any]) -> bool:
        """조건에 맞는 모든 레코드를 하나씩 검증해 갱신한다.

        갱신할 필드와 기본 키만 읽어 오며, 첫 실패에서 롤백한다.
        """

        attributes = set(self.get_attributes())
        fields = [key for key in data if key in attributes]
        pk = self.get_pk()
        if pk not in fields:
            fields.append(pk)
        try:
            models = self.get_query(where, fields).as_array(False).all()
        except _FAULTS as error:
            self._record_fault(error, "update_all")
            return False
        if not models:
            return False
        transaction = self.begin_transaction()
        try:
            for model in models:
                model.set_attributes(data)
                if not model.save():
                    self._rollback(transaction, "update_all")
                    self._record_validation(model.errors, "update_all")
                    return False
            transaction.commit()
        except _FAULTS as error:
            self._rollback(transaction, "update_all")
            self._record_fault(error, "update_all")
            return False
        return True

    def delete(self, where: Any) -> bool:
        """조건에 맞는 첫 레코드를 기본 키만 읽어 삭제한다."""

        try:
            model = self.get_query(where, self.get_pk()).as_array(False).one()
            if model is None:
                return False
            return model.delete()
        except _FAULTS as error:
            self._record_fault(error, "delete")
            return False

    def delete_all(self, where: Any = None, params: Optional[Mapping[str, Any]] = None) -> Union[int, bool]:
        """조건에 맞는 행을 한 번에 삭제하고 삭제된 행 수를 반환한다.

        기본 조건은 적용하지 않는다.
        """

        where = self._composer.normalize_where(where, self.get_pk())
        model_class = self.model_class
        try:
            statement = model_class.delete_statement(where, params)
            self._capture(statement)
            deleted = model_class.execute_bulk(statement)
        except _FAULTS as error:
            self._record_fault(error, "delete_all")
            return False
        self._record_rowcount(deleted, "delete_all")
        return deleted

    def count(self, where: Any = None, field: str = "*") -> int:
        return self._aggregate("count", where, field)

    def sum(self, where: Any = None, field: str = "") -> int:
        return self._aggregate("sum", where, field)

    def min(self, where: Any = None, field: str = "") -> int:
        return self._aggregate("min", where, field)

    def max(self, where: Any = None, field: str = "") -> int:
        return self._aggregate("max", where, field)

    def inc(self, where: Any, field: Union[str, Sequence[str], Mapping[Any, Any]], step: Any = 1) -> bool:
        """데이터베이스 연산으로 필드 값을 증가시킨다."""

        return self._update_counters(where, field, step, "+", "inc")

    def dec(self, where: Any, field: Union[str, Sequence[str], Mapping[Any, Any]], step: Any = 1) -> bool:
        """데이터베이스 연산으로 필드 값을 감소시킨다.

        필드 목록이나 정수 키 사전 항목은 inc와 같이 더한다.
        """

        return self._update_counters(where, field, step, "-", "dec")

    def raw(self, expression: str) -> RawExpression:
        """이스케이프되지 않는 SQL 조각을 만든다."""

        return RawExpression(expression)

    def _aggregate(self, function: str, where: Any, field: str) -> int:
        try:
            query = self.get_query(where).as_array(True)
            value = getattr(query, function)(field)
        except _FAULTS as error:
            self._record_fault(error, function)
            return 0
        return _to_int(value)

    def _update_counters(self, where: Any, field: Any, step: Any, sign: str, operation: str) -> bool:
        counters = self._counter_payload(field, step, sign)
        if not counters:
            return False
        where = self._composer.normalize_where(where, self.get_pk())
        model_class = self.model_class
        try:
            statement = model_class.update_statement(counters, where)
            self._capture(statement)
            affected = model_class.execute_bulk(statement)
        except _FAULTS as error:
            self._record_fault(error, operation)
            return False
        self._record_rowcount(affected, operation)
        return bool(affected)

    def _counter_payload(self, field: Any, step: Any, sign: str) -> Dict[str, RawExpression]:
        counters: Dict[str, RawExpression] = {}
        if isinstance(field, str):
            if field:
                counters[field] = self.raw(f"{field} {sign} {step}")
            return counters
        entries = field.items() if isinstance(field, Mapping) else enumerate(field or [])
        for key, value in entries:
            if isinstance(key, str) and is_numeric(value):
                counters[key] = self.raw(f"{key} {sign} {value}")
            elif not isinstance(key, str) and isinstance(value, str) and value:
                counters[value] = self.raw(f"{value} + {step}")
        return counters


def _filter_row(row: Mapping[str, Any], attributes: Sequence[str]) -> Dict[str, Any]:
    row = dict(row)
    return {key: row[key] for key in attributes if key in row}


def _to_int(value: Any) -> int:
    if value is None:
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        try:
            return int(float(value))
        except (TypeError, ValueError):
            return 0
