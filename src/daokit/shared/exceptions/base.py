"""
목적: 공통 예외 베이스 클래스와 DAO 예외를 제공한다.
설명: 메시지와 Pydantic 상세 모델을 함께 보관하며, 호출자에게 전달되는 구조적 오류만 예외로 정의한다.
디자인 패턴: 도메인 예외 객체
참조: src/daokit/shared/exceptions/models.py, src/daokit/dao/static.py
"""

from __future__ import annotations

from typing import Any, Optional

from daokit.shared.exceptions.models import ExceptionDetail


class BaseAppException(Exception):
    """애플리케이션 공통 예외 클래스이다.

    Args:
        message: 사용자 또는 시스템에 전달할 메시지.
        detail: 예외 상세 정보 모델.
        original: 원본 예외 객체.
    """

    def __init__(
        self,
        message: str,
        detail: ExceptionDetail,
        original: Optional[Exception] = None,
    ) -> None:
        super().__init__(message)
        self._message = message
        self._detail = detail
        self._original = original

    @property
    def message(self) -> str:
        """주입된 메시지를 반환한다."""

        return self._message

    @property
    def detail(self) -> ExceptionDetail:
        """예외 상세 모델을 반환한다."""

        return self._detail

    @property
    def original(self) -> Optional[Exception]:
        """원본 예외를 반환한다."""

        return self._original

    def to_dict(self) -> dict:
        """예외 정보를 사전으로 변환한다."""

        return {
            "message": self._message,
            "detail": self._detail.model_dump(),
            "original": repr(self._original) if self._original else None,
        }


class DaoError(BaseAppException):
    """DAO 계층 예외의 공통 부모 클래스."""


class UnknownOperationError(DaoError):
    """정적 DAO에서 존재하지 않는 연산을 호출했을 때 발생한다."""

    def __init__(self, operation: str, facade: Optional[str] = None) -> None:
        super().__init__(
            f"존재하지 않는 DAO 연산입니다: {operation}",
            ExceptionDetail(
                code="DAO_UNKNOWN_OPERATION",
                cause=f"Dao에 '{operation}' 연산이 정의되어 있지 않습니다.",
                hint="DAO_OPERATIONS에 등록된 연산 이름을 사용하세요.",
                metadata={"operation": operation, "facade": facade},
            ),
        )
        self.operation = operation


class InvalidModelClassError(DaoError):
    """레코드 클래스가 아닌 값을 모델로 지정했을 때 발생한다."""

    def __init__(self, value: Any) -> None:
        super().__init__(
            f"유효하지 않은 모델 클래스입니다: {value!r}",
            ExceptionDetail(
                code="DAO_INVALID_MODEL_CLASS",
                cause="모델 클래스는 Record 하위 클래스여야 합니다.",
                hint="문자열이나 인스턴스 대신 Record 하위 클래스를 전달하세요.",
                metadata={"value": repr(value)},
            ),
        )
        self.value = value


class DatabaseNotBoundError(DaoError):
    """레코드 클래스에 Database가 연결되지 않은 상태에서 사용했을 때 발생한다."""

    def __init__(self, model: str) -> None:
        super().__init__(
            f"Database가 연결되지 않았습니다: {model}",
            ExceptionDetail(
                code="DB_NOT_BOUND",
                cause="Record.use_database()가 호출되지 않았습니다.",
                hint="애플리케이션 시작 시 Record.use_database(database)를 호출하세요.",
                metadata={"model": model},
            ),
        )
