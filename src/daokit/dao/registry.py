"""
목적: 프로세스 전역 인스턴스 레지스트리를 제공한다.
설명: 키를 직렬화한 뒤 MD5 해시로 식별해 값을 보관한다. 모델 클래스별 DAO 싱글턴 보관에 사용한다.
디자인 패턴: 레지스트리, 싱글턴
참조: src/daokit/dao/static.py
"""

from __future__ import annotations

import hashlib
import json
import threading
from typing import Any, Callable, ClassVar, Dict, Optional, TypeVar

from daokit.shared.const import SharedConst

T = TypeVar("T")


class InstanceRegistry:
    """키 해시 기반 전역 레지스트리.

    직렬화 결과가 같은 키는 같은 항목을 가리킨다. 항목은 제거되지 않는다.
    """

    _instances: ClassVar[Dict[str, Any]] = {}
    _lock: ClassVar[threading.RLock] = threading.RLock()

    @classmethod
    def get(cls, key: Any) -> Optional[Any]:
        """키에 해당하는 값을 반환한다. 없으면 None이다."""

        return cls._instances.get(cls._build_id(key))

    @classmethod
    def set(cls, key: Any, value: T) -> T:
        """값을 저장하고 그대로 반환한다."""

        with cls._lock:
            cls._instances[cls._build_id(key)] = value
        return value

    @classmethod
    def get_or_create(cls, key: Any, factory: Callable[[], T]) -> T:
        """값이 없을 때만 factory로 생성해 저장한다."""

        identifier = cls._build_id(key)
        with cls._lock:
            if identifier not in cls._instances:
                cls._instances[identifier] = factory()
            return cls._instances[identifier]

    @classmethod
    def has(cls, key: Any) -> bool:
        return cls._build_id(key) in cls._instances

    @classmethod
    def clear(cls) -> None:
        with cls._lock:
            cls._instances.clear()

    @staticmethod
    def _build_id(key: Any) -> str:
        serialized = json.dumps(key, sort_keys=True, default=repr, ensure_ascii=False)
        return hashlib.md5(serialized.encode(SharedConst.DEFAULT_ENCODING)).hexdigest()
