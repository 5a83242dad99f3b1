"""
목적: 공통 예외와 DAO 예외 구조를 검증한다.
설명: 메시지, 상세 모델, 원본 예외 보관과 사전 변환, 에러 코드를 확인한다.
디자인 패턴: 테스트 케이스
참조: src/daokit/shared/exceptions/base.py, src/daokit/shared/exceptions/models.py
"""

from __future__ import annotations

from daokit.shared.exceptions import (
    BaseAppException,
    DaoError,
    DatabaseNotBoundError,
    ExceptionDetail,
    InvalidModelClassError,
    UnknownOperationError,
)


def test_base_exception_to_dict() -> None:
    """예외가 메시지, 상세, 원본을 사전으로 변환하는지 확인한다."""

    original = KeyError("id")
    error = BaseAppException("조회 실패", ExceptionDetail(code="X", hint="확인"), original)

    payload = error.to_dict()

    assert str(error) == "조회 실패"
    assert error.original is original
    assert payload["detail"]["code"] == "X"
    assert payload["detail"]["hint"] == "확인"
    assert payload["original"] == repr(original)


def test_dao_errors_carry_codes() -> None:
    """DAO 예외가 고정된 에러 코드와 메타데이터를 갖는지 확인한다."""

    unknown = UnknownOperationError("truncate", "UserDao")
    invalid = InvalidModelClassError("User")
    unbound = DatabaseNotBoundError("User")

    assert isinstance(unknown, DaoError)
    assert unknown.detail.code == "DAO_UNKNOWN_OPERATION"
    assert unknown.detail.metadata == {"operation": "truncate", "facade": "UserDao"}
    assert invalid.detail.code == "DAO_INVALID_MODEL_CLASS"
    assert invalid.value == "User"
    assert unbound.detail.code == "DB_NOT_BOUND"
    assert unbound.to_dict()["original"] is None
