"""
목적: DB 통합 모듈 공개 API를 제공한다.
설명: SQLAlchemy 기반 Database, Record, 질의 빌더, 조건 변환기를 노출한다.
디자인 패턴: 퍼사드
참조: src/daokit/integrations/db/database.py, src/daokit/integrations/db/record.py
"""

from .condition_builder import ConditionBuilder
from .database import Database, Transaction
from .expression import RawExpression
from .query import RecordQuery, split_fields
from .record import Record, is_record_class

__all__ = [
    "ConditionBuilder",
    "Database",
    "Transaction",
    "RawExpression",
    "Record",
    "is_record_class",
    "RecordQuery",
    "split_fields",
]
