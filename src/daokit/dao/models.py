"""
목적: DAO 설정과 질의 의도, 오류 기록 모델을 제공한다.
설명: 모델 클래스별 접근 설정(AccessConfig), 호출 단위 질의 의도(QueryIntent),
    ErrorLog 항목(ValidationFailure, ExecutionFault)을 Pydantic 모델로 정의한다.
디자인 패턴: 데이터 전송 객체(DTO)
참조: src/daokit/dao/abstract.py, src/daokit/dao/composer.py
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from daokit.shared.config import DaoSettings
from daokit.shared.const import SharedConst


class AccessConfig(BaseModel):
    """모델 클래스별 DAO 접근 설정.

    Args:
        model_class: 대상 Record 하위 클래스.
        base_where: 모든 질의에 AND로 결합되는 기본 조건.
        as_array: 조회 결과를 사전으로 반환할지 여부.
        is_save_sql: 실행 SQL을 보관할지 여부.
        batch_size: 일괄 삽입 1회당 최대 행 수.
        page_limit: 페이지 조회 기본 크기.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, validate_assignment=True)

    model_class: Optional[type] = None
    base_where: Any = Field(default_factory=dict)
    as_array: bool = False
    is_save_sql: bool = False
    batch_size: int = Field(default=SharedConst.BATCH_INSERT_CHUNK_SIZE, ge=1)
    page_limit: int = Field(default=SharedConst.DEFAULT_PAGE_LIMIT, ge=1)

    @classmethod
    def from_settings(cls, settings: DaoSettings, **values: Any) -> "AccessConfig":
        """DaoSettings 기본값으로 설정을 만든다."""

        data: Dict[str, Any] = {
            "as_array": settings.as_array,
            "is_save_sql": settings.save_sql,
            "batch_size": settings.batch_size,
            "page_limit": settings.page_limit,
        }
        data.update(values)
        return cls(**data)


class QueryIntent(BaseModel):
    """한 번의 호출에서 조립된 질의 의도."""

    condition: List[Any] = Field(default_factory=lambda: ["and"])
    fields: str = ""
    order: Any = ""
    as_array: bool = False


class ValidationFailure(BaseModel):
    """레코드 검증 실패 항목."""

    kind: Literal["validation"] = "validation"
    errors: Dict[str, List[str]] = Field(default_factory=dict)
    model: Optional[str] = None
    operation: Optional[str] = None


class ExecutionFault(BaseModel):
    """질의 실행 오류 항목."""

    kind: Literal["execution"] = "execution"
    message: str
    exception_type: str = ""
    operation: Optional[str] = None


ErrorEntry = Union[ValidationFailure, ExecutionFault]
