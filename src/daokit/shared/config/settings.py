"""
목적: daokit 런타임 설정 모델을 제공한다.
설명: ConfigLoader가 병합한 사전을 Pydantic 모델로 검증하고 기본값을 채운다.
디자인 패턴: 데이터 전송 객체(DTO), 팩토리 함수
참조: src/daokit/shared/config/loader.py, src/daokit/integrations/db/database.py
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, Field

from daokit.shared.config.loader import ConfigLoader
from daokit.shared.const import SharedConst
from daokit.shared.logging import Logger


class DaoSettings(BaseModel):
    """daokit 설정 모델이다.

    Args:
        database_url: SQLAlchemy 엔진 URL.
        echo: SQLAlchemy 엔진 SQL 에코 여부.
        save_sql: DAO가 실행 SQL을 보관할지 여부.
        as_array: 조회 결과를 기본적으로 사전으로 반환할지 여부.
        batch_size: 일괄 삽입 1회당 최대 행 수.
        page_limit: 페이지 조회 기본 크기.
        engine_options: create_engine에 그대로 전달할 추가 옵션.
    """

    database_url: str = Field(default=SharedConst.DEFAULT_DATABASE_URL)
    echo: bool = False
    save_sql: bool = False
    as_array: bool = False
    batch_size: int = Field(default=SharedConst.BATCH_INSERT_CHUNK_SIZE, ge=1)
    page_limit: int = Field(default=SharedConst.DEFAULT_PAGE_LIMIT, ge=1)
    engine_options: Dict[str, Any] = Field(default_factory=dict)


def load_settings(
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, Any]] = None,
    logger: Optional[Logger] = None,
) -> DaoSettings:
    """`.env` 파일과 `DAOKIT_` 환경 변수로 설정을 생성한다.

    Args:
        env_file: 읽을 `.env` 파일 경로. None이면 건너뛴다.
        overrides: 마지막에 덮어쓸 설정 값.
        logger: 주입 가능한 로거.

    Returns:
        검증된 DaoSettings.
    """

    loader = ConfigLoader(logger=logger)
    if env_file:
        loader.add_dotenv(env_file, prefix=SharedConst.ENV_PREFIX)
    loader.add_env(prefix=SharedConst.ENV_PREFIX)
    return DaoSettings.model_validate(loader.build(overrides))
