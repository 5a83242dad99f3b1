"""
목적: 예외 모듈 공개 API를 제공한다.
설명: 외부에서 사용할 예외 모델과 베이스/도메인 예외 클래스를 노출한다.
디자인 패턴: 퍼사드
참조: src/daokit/shared/exceptions/models.py, src/daokit/shared/exceptions/base.py
"""

from daokit.shared.exceptions.base import (
    BaseAppException,
    DaoError,
    DatabaseNotBoundError,
    InvalidModelClassError,
    UnknownOperationError,
)
from daokit.shared.exceptions.models import ExceptionDetail

__all__ = [
    "BaseAppException",
    "ExceptionDetail",
    "DaoError",
    "UnknownOperationError",
    "InvalidModelClassError",
    "DatabaseNotBoundError",
]
