"""
목적: daokit 패키지의 공개 API를 제공한다.
설명: 애플리케이션 코드가 주로 사용하는 DAO, 레코드, 데이터베이스 진입점을 모아 노출한다.
디자인 패턴: 퍼사드
참조: src/daokit/dao, src/daokit/integrations/db
"""

from daokit.dao import AccessConfig, Dao, ExecutionFault, InstanceRegistry, StaticDao, ValidationFailure
from daokit.integrations.db import Database, RawExpression, Record
from daokit.shared.config import DaoSettings, load_settings

__all__ = [
    "Dao",
    "StaticDao",
    "InstanceRegistry",
    "AccessConfig",
    "ValidationFailure",
    "ExecutionFault",
    "Database",
    "Record",
    "RawExpression",
    "DaoSettings",
    "load_settings",
]
