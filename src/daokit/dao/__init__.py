"""
목적: DAO 모듈 공개 API를 제공한다.
설명: Dao, 정적 퍼사드, 레지스트리, 질의 조립기와 설정/오류 모델을 노출한다.
디자인 패턴: 퍼사드
참조: src/daokit/dao/dao.py, src/daokit/dao/static.py
"""

from .abstract import AbstractDao
from .composer import QueryComposer, is_numeric
from .dao import Dao
from .models import AccessConfig, ErrorEntry, ExecutionFault, QueryIntent, ValidationFailure
from .registry import InstanceRegistry
from .static import DAO_OPERATIONS, StaticDao

__all__ = [
    "AbstractDao",
    "Dao",
    "StaticDao",
    "DAO_OPERATIONS",
    "InstanceRegistry",
    "QueryComposer",
    "is_numeric",
    "AccessConfig",
    "QueryIntent",
    "ErrorEntry",
    "ValidationFailure",
    "ExecutionFault",
]
