"""
목적: 인스턴스 생성 없이 DAO 연산을 호출하는 정적 퍼사드를 제공한다.
설명: 하위 클래스마다 모델 클래스와 기본 조건을 클래스 상태로 보관하고,
    레지스트리에 캐시된 모델별 Dao로 호출을 위임한다. 결과 레코드는 설정에 따라 사전으로 변환한다.
디자인 패턴: 퍼사드, 프록시
참조: src/daokit/dao/dao.py, src/daokit/dao/registry.py
"""

from __future__ import annotations

import copy
from typing import Any, Callable, ClassVar, FrozenSet, Optional

from daokit.dao.dao import Dao
from daokit.dao.models import AccessConfig
from daokit.dao.registry import InstanceRegistry
from daokit.integrations.db import Record, is_record_class
from daokit.shared.config import DaoSettings, load_settings
from daokit.shared.exceptions import InvalidModelClassError, UnknownOperationError

DAO_OPERATIONS: FrozenSet[str] = frozenset(
    {
        "get_pk",
        "find",
        "get_query",
        "get_where",
        "get_errors",
        "get_error",
        "set_errors",
        "begin_transaction",
        "get_auto_increment",
        "get_db_name",
        "get_table_name",
        "get_default_order",
        "set_sql",
        "get_sql",
        "get_last_sql",
        "get_attributes",
        "get",
        "get_all",
        "get_page",
        "add",
        "add_all",
        "batch_insert",
        "update",
        "update_all",
        "delete",
        "delete_all",
        "count",
        "sum",
        "min",
        "max",
        "inc",
        "dec",
        "raw",
    }
)


def _operation(name: str) -> classmethod:
    def proxy(cls, *args: Any, **kwargs: Any) -> Any:
        return cls.call(name, *args, **kwargs)

    proxy.__name__ = name
    proxy.__qualname__ = f"StaticDao.{name}"
    proxy.__doc__ = f"Dao.{name}를 호출한다."
    return classmethod(proxy)


class StaticDao:
    """모델별 Dao 정적 퍼사드.

    사용 예:
        class UserDao(StaticDao):
            model_class = User
            base_where = {"deleted": 0}

        UserDao.get(5)
        UserDao.call("count", {"age": 20})
    """

    model_class: ClassVar[Optional[type]] = None
    base_where: ClassVar[Any] = {}
    as_array_result: ClassVar[bool] = True
    registry: ClassVar[type] = InstanceRegistry

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls.base_where = copy.copy(cls.base_where)

    def __init__(self) -> None:
        raise TypeError(f"{type(self).__name__}는 인스턴스를 만들 수 없습니다.")

    @classmethod
    def call(cls, name: str, *args: Any, **kwargs: Any) -> Any:
        """이름으로 Dao 연산을 호출하고 결과 형태를 변환한다."""

        if name not in DAO_OPERATIONS:
            raise UnknownOperationError(name, cls.__qualname__)
        dao = cls.get_dao()
        method: Callable[..., Any] = getattr(dao, name)
        with dao.using_base_where(cls.base_where):
            result = method(*args, **kwargs)
        return cls.to_array(result)

    @classmethod
    def get_dao(cls) -> Dao:
        """모델 클래스에 대응하는 Dao를 레지스트리에서 가져온다. 없으면 생성한다.

        같은 모델의 퍼사드는 Dao를 공유하며, 각 퍼사드의 기본 조건은 call 안에서만 적용된다.
        """

        model = cls.model()
        return cls.registry.get_or_create(
            cls._registry_key(model),
            lambda: Dao(
                config=AccessConfig.from_settings(
                    cls.settings(),
                    model_class=model,
                    base_where=cls.base_where,
                )
            ),
        )

    @classmethod
    def settings(cls) -> DaoSettings:
        """Dao 생성 시 사용할 설정을 `.env`와 `DAOKIT_` 환경 변수에서 읽는다."""

        return load_settings()

    @classmethod
    def model(cls) -> type:
        """현재 모델 클래스를 반환한다. Record 하위 클래스가 아니면 예외를 던진다."""

        if not is_record_class(cls.model_class):
            raise InvalidModelClassError(cls.model_class)
        return cls.model_class

    @classmethod
    def get_model_class(cls) -> Optional[type]:
        return cls.model_class

    @classmethod
    def set_model_class(cls, model_class: Optional[type] = None) -> Optional[type]:
        """모델 클래스를 지정하고 Dao에 반영한다. 값이 없으면 현재 값을 반환한다."""

        if not model_class:
            return cls.model_class
        if not is_record_class(model_class):
            raise InvalidModelClassError(model_class)
        cls.model_class = model_class
        cls.get_dao().set_model_class(model_class)
        return cls.model_class

    @classmethod
    def get_base_where(cls) -> Any:
        return cls.base_where

    @classmethod
    def set_base_where(cls, base_where: Any = None) -> Any:
        """기본 조건을 지정한다. 값이 없으면 현재 값을 반환한다."""

        if base_where:
            cls.base_where = base_where
        return cls.base_where

    @classmethod
    def as_array(cls, value: Optional[bool] = None) -> bool:
        """결과 사전 변환 여부를 조회하거나 지정한다."""

        if value is not None:
            cls.as_array_result = bool(value)
        return cls.as_array_result

    @classmethod
    def to_array(cls, result: Any) -> Any:
        """레코드 또는 레코드 목록을 사전으로 변환한다."""

        if not cls.as_array_result:
            return result
        if isinstance(result, Record):
            return result.to_dict()
        if isinstance(result, list) and result and isinstance(result[0], Record):
            return [item.to_dict() if isinstance(item, Record) else item for item in result]
        return result

    @classmethod
    def access_config(cls) -> AccessConfig:
        """현재 Dao 접근 설정의 사본을 퍼사드의 기본 조건으로 반환한다."""

        return cls.get_dao().config.model_copy(update={"base_where": cls.base_where})

    @staticmethod
    def _registry_key(model: type) -> str:
        return f"Dao{model.__module__}.{model.__qualname__}"

    get_pk = _operation("get_pk")
    find = _operation("find")
    get_query = _operation("get_query")
    get_where = _operation("get_where")
    get_errors = _operation("get_errors")
    get_error = _operation("get_error")
    set_errors = _operation("set_errors")
    begin_transaction = _operation("begin_transaction")
    get_auto_increment = _operation("get_auto_increment")
    get_db_name = _operation("get_db_name")
    get_table_name = _operation("get_table_name")
    get_default_order = _operation("get_default_order")
    set_sql = _operation("set_sql")
    get_sql = _operation("get_sql")
    get_last_sql = _operation("get_last_sql")
    get_attributes = _operation("get_attributes")
    get = _operation("get")
    get_all = _operation("get_all")
    get_page = _operation("get_page")
    add = _operation("add")
    add_all = _operation("add_all")
    batch_insert = _operation("batch_insert")
    update = _operation("update")
    update_all = _operation("update_all")
    delete = _operation("delete")
    delete_all = _operation("delete_all")
    count = _operation("count")
    sum = _operation("sum")
    min = _operation("min")
    max = _operation("max")
    inc = _operation("inc")
    dec = _operation("dec")
    raw = _operation("raw")
