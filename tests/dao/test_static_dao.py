"""
목적: 정적 DAO 퍼사드 동작을 검증한다.
설명: 인스턴스 생성 금지, 연산 위임, 미지원 연산 예외, 모델/기본 조건 설정, 결과 사전 변환을 확인한다.
디자인 패턴: 테스트 케이스
참조: src/daokit/dao/static.py
"""

from __future__ import annotations

import threading

import pytest

from daokit.dao import DAO_OPERATIONS, AccessConfig, Dao, InstanceRegistry, StaticDao
from daokit.integrations.db import Record
from daokit.shared.exceptions import InvalidModelClassError, UnknownOperationError


def _facade(model: type, **attributes) -> type:
    """테스트마다 독립된 퍼사드 클래스를 만든다."""

    return type("UserFacade", (StaticDao,), {"model_class": model, **attributes})


def test_static_dao_cannot_be_instantiated(user_model) -> None:
    """퍼사드는 인스턴스를 만들 수 없는지 확인한다."""

    facade = _facade(user_model)

    with pytest.raises(TypeError):
        facade()


def test_call_delegates_and_converts_records(database, user_model) -> None:
    """호출이 Dao로 위임되고 레코드가 사전으로 변환되는지 확인한다."""

    facade = _facade(user_model)

    user_id = facade.add({"name": "alice", "age": 3})
    found = facade.get(user_id)
    listed = facade.call("get_all", {}, "", "id ASC")

    assert found["name"] == "alice"
    assert isinstance(found, dict)
    assert listed == [found]
    assert facade.count() == 1


def test_as_array_disabled_returns_records(database, user_model) -> None:
    """사전 변환을 끄면 레코드를 그대로 반환하는지 확인한다."""

    facade = _facade(user_model, as_array_result=False)
    facade.add({"name": "bob"})

    assert facade.as_array() is False
    assert isinstance(facade.get(1), Record)
    assert facade.as_array(True) is True
    assert facade.get(1) == {"id": 1, "name": "bob", "age": 0, "count": 0, "amt": 0.0, "deleted": 0}


def test_unknown_operation_raises(user_model) -> None:
    """선언되지 않은 연산 호출은 UnknownOperationError를 던지는지 확인한다."""

    facade = _facade(user_model)

    with pytest.raises(UnknownOperationError) as caught:
        facade.call("drop_table")

    assert caught.value.operation == "drop_table"
    assert caught.value.detail.code == "DAO_UNKNOWN_OPERATION"
    assert "set_model_class" not in DAO_OPERATIONS


def test_set_model_class_rejects_non_record(user_model) -> None:
    """Record 하위 클래스가 아니면 InvalidModelClassError를 던지는지 확인한다."""

    facade = _facade(None)

    assert facade.set_model_class() is None
    with pytest.raises(InvalidModelClassError):
        facade.set_model_class("User")
    with pytest.raises(InvalidModelClassError):
        facade.set_model_class(dict)
    with pytest.raises(InvalidModelClassError):
        facade.get(1)

    assert facade.set_model_class(user_model) is user_model
    assert facade.model() is user_model


def test_facades_on_same_model_share_dao(database, user_model) -> None:
    """같은 모델을 쓰는 퍼사드는 레지스트리의 같은 Dao를 쓰는지 확인한다."""

    first = _facade(user_model)
    second = _facade(user_model)

    assert first.get_dao() is second.get_dao()
    assert InstanceRegistry.get(f"Dao{user_model.__module__}.{user_model.__qualname__}") is first.get_dao()


def test_base_where_is_independent_per_subclass(database, user_model) -> None:
    """하위 클래스마다 기본 조건이 독립적으로 적용되는지 확인한다."""

    active = _facade(user_model, base_where={"deleted": 0})
    everyone = _facade(user_model)

    everyone.add({"name": "a", "deleted": 0})
    everyone.add({"name": "b", "deleted": 1})

    assert active.count() == 1
    assert everyone.count() == 2
    assert active.get_base_where() == {"deleted": 0}
    assert everyone.get_base_where() == {}

    assert everyone.set_base_where({"deleted": 1}) == {"deleted": 1}
    assert everyone.count() == 1
    assert everyone.set_base_where() == {"deleted": 1}


def test_access_config_reflects_dao_configuration(database, user_model) -> None:
    """access_config가 Dao 설정 사본을 반환하는지 확인한다."""

    facade = _facade(user_model, base_where={"deleted": 0})

    config = facade.access_config()

    assert isinstance(config, AccessConfig)
    assert config.model_class is user_model
    assert config.base_where == {"deleted": 0}
    assert isinstance(facade.get_dao(), Dao)


def test_to_array_passes_through_other_values(user_model) -> None:
    """레코드가 아닌 값은 그대로 반환하는지 확인한다."""

    facade = _facade(user_model)

    assert facade.to_array(3) == 3
    assert facade.to_array([]) == []
    assert facade.to_array([{"id": 1}]) == [{"id": 1}]
    assert facade.to_array(user_model(name="x"))["name"] == "x"


def test_facade_dao_config_follows_settings(database, user_model, monkeypatch, tmp_path) -> None:
    """퍼사드가 만드는 Dao가 DAOKIT_ 환경 변수와 `.env` 설정을 따르는지 확인한다."""

    (tmp_path / ".env").write_text("DAOKIT_BATCH_SIZE=50\n", encoding="utf-8")
    monkeypatch.setenv("DAOKIT_SAVE_SQL", "true")
    monkeypatch.setenv("DAOKIT_PAGE_LIMIT", "5")
    facade = _facade(user_model)

    config = facade.access_config()

    assert config.is_save_sql is True
    assert config.page_limit == 5
    assert config.batch_size == 50
    assert facade.count() == 0
    assert len(facade.get_sql()) == 1


def test_resolving_another_facade_keeps_shared_dao_base_where(database, user_model) -> None:
    """다른 퍼사드가 같은 Dao를 가져와도 공유 Dao의 기본 조건이 바뀌지 않는지 확인한다."""

    active = _facade(user_model, base_where={"deleted": 0})
    removed = _facade(user_model, base_where={"deleted": 1})
    active.add({"name": "kept", "deleted": 0})
    removed.add({"name": "gone", "deleted": 1})

    dao = active.get_dao()
    removed.get_dao()

    assert dao.get_base_where() == {"deleted": 0}
    assert active.count() == 1
    assert active.get({})["name"] == "kept"
    assert removed.get({})["name"] == "gone"
    assert dao.get_base_where() == {"deleted": 0}


def test_call_scoped_base_where_is_thread_local(user_model) -> None:
    """호출 범위 기본 조건이 다른 스레드에 보이지 않는지 확인한다."""

    dao = Dao(config=AccessConfig(model_class=user_model, base_where={"deleted": 0}))
    seen = []

    with dao.using_base_where({"deleted": 1}):
        worker = threading.Thread(target=lambda: seen.append(dao.get_where()))
        worker.start()
        worker.join()
        assert dao.get_where() == ["and", {"deleted": 1}]

    assert seen == [["and", {"deleted": 0}]]
    assert dao.get_base_where() == {"deleted": 0}
