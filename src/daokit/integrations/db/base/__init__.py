"""
목적: DB 베이스 모듈 공개 API를 제공한다.
설명: 트랜잭션 인터페이스를 노출한다.
디자인 패턴: 퍼사드
참조: src/daokit/integrations/db/base/session.py
"""

from .session import BaseTransaction

__all__ = ["BaseTransaction"]
