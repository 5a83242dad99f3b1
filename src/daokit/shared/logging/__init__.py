"""
목적: 로깅 모듈 공개 API를 제공한다.
설명: 로거 구현과 모델을 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/daokit/shared/logging/logger.py, src/daokit/shared/logging/models.py
"""

from daokit.shared.logging.logger import (
    InMemoryLogger,
    InMemoryLogRepository,
    LogRepository,
    Logger,
    StandardLogRepository,
    create_default_logger,
    create_standard_logger,
)
from daokit.shared.logging.models import LogContext, LogLevel, LogRecord, QueryMetadata

__all__ = [
    "LogContext",
    "LogLevel",
    "LogRecord",
    "QueryMetadata",
    "Logger",
    "LogRepository",
    "InMemoryLogger",
    "InMemoryLogRepository",
    "StandardLogRepository",
    "create_default_logger",
    "create_standard_logger",
]
