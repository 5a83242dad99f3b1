"""
목적: 공통 상수 집합을 제공한다.
설명: 설정 로더와 DAO 계층에서 사용하는 기본 상수 값을 정의한다.
디자인 패턴: 상수 객체
참조: src/daokit/shared/config/loader.py, src/daokit/dao/models.py
"""


class SharedConst:
    """공통 상수 집합이다.

    Attributes:
        DEFAULT_ENCODING: 기본 파일 인코딩.
        ENV_NESTED_DELIMITER: 환경 변수 키를 중첩 경로로 해석하는 구분자.
        ENV_PREFIX: daokit 설정 환경 변수 접두사.
        DEFAULT_DATABASE_URL: 설정이 없을 때 사용하는 DB URL.
        BATCH_INSERT_CHUNK_SIZE: 일괄 삽입 1회당 최대 행 수.
        DEFAULT_PAGE_LIMIT: 페이지 조회 기본 크기.
    """

    DEFAULT_ENCODING = "utf-8"
    ENV_NESTED_DELIMITER = "__"
    ENV_PREFIX = "DAOKIT_"
    DEFAULT_DATABASE_URL = "sqlite://"
    BATCH_INSERT_CHUNK_SIZE = 1000
    DEFAULT_PAGE_LIMIT = 10


__all__ = ["SharedConst"]
