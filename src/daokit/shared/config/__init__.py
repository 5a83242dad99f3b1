"""
목적: 설정 모듈 공개 API를 제공한다.
설명: 설정 병합 로더와 daokit 설정 모델을 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/daokit/shared/config/loader.py, src/daokit/shared/config/settings.py
"""

from daokit.shared.config.loader import ConfigLoader
from daokit.shared.config.settings import DaoSettings, load_settings

__all__ = ["ConfigLoader", "DaoSettings", "load_settings"]
