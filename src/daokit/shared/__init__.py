"""
목적: shared 패키지의 공개 API를 제공한다.
설명: 하위 공통 모듈에 대한 접근 포인트를 제공한다.
디자인 패턴: 퍼사드
참조: src/daokit/shared/exceptions, src/daokit/shared/logging, src/daokit/shared/config
"""

from __future__ import annotations

from daokit.shared.config import ConfigLoader, DaoSettings, load_settings
from daokit.shared.const import SharedConst
from daokit.shared.exceptions import (
    BaseAppException,
    DaoError,
    DatabaseNotBoundError,
    ExceptionDetail,
    InvalidModelClassError,
    UnknownOperationError,
)
from daokit.shared.logging import (
    InMemoryLogger,
    LogContext,
    LogLevel,
    LogRecord,
    Logger,
    LogRepository,
    StandardLogRepository,
    create_default_logger,
    create_standard_logger,
)

__all__ = [
    "SharedConst",
    "ConfigLoader",
    "DaoSettings",
    "load_settings",
    "BaseAppException",
    "ExceptionDetail",
    "DaoError",
    "UnknownOperationError",
    "InvalidModelClassError",
    "DatabaseNotBoundError",
    "LogContext",
    "LogLevel",
    "LogRecord",
    "Logger",
    "LogRepository",
    "InMemoryLogger",
    "StandardLogRepository",
    "create_default_logger",
    "create_standard_logger",
]
