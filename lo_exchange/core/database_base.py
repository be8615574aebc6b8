# lo_exchange/core/database_base.py

"""
여러 도메인 모델이 공유하는 컬럼 타입과 컬럼 생성 헬퍼입니다.
"""

from sqlalchemy import JSON, Column
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.sql import func
from sqlalchemy.types import TIMESTAMP

# PostgreSQL 에서는 JSONB, 그 외(SQLite 테스트 DB 등)에서는 일반 JSON 으로 저장합니다.
JSONDocument = JSON().with_variant(JSONB(), "postgresql")


def created_at_column() -> Column:
    return Column(TIMESTAMP(timezone=True), server_default=func.now())


def updated_at_column() -> Column:
    return Column(TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now())
