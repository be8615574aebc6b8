# lo_exchange/domains/usr/models.py

"""
'usr' 도메인의 데이터베이스 ORM 모델을 정의하는 모듈입니다.
사용자는 정확히 하나의 회사에 소속되며, 회사 PIN 을 알아야 등록할 수 있습니다.
"""

from typing import Optional
from datetime import datetime, UTC

from sqlalchemy import Column, ForeignKey, String
from sqlmodel import Field, SQLModel

from lo_exchange.core.database_base import created_at_column, updated_at_column


class User(SQLModel, table=True):
    """
    users 테이블에 매핑되는 SQLModel ORM 클래스입니다.
    """
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True, description="사용자 고유 ID")
    email: str = Field(max_length=100, unique=True, index=True, description="로그인 ID 로 사용하는 이메일")
    full_name: Optional[str] = Field(default=None, max_length=100, description="사용자 전체 이름")
    password_hash: str = Field(max_length=255, description="해싱된 비밀번호")
    company_id: str = Field(
        sa_column=Column(
            String(100),
            ForeignKey("companies.company_id", onupdate="CASCADE", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        description="소속 회사 슬러그 (FK)"
    )
    is_active: bool = Field(default=True, description="계정 활성 여부")

    created_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=created_at_column(),
        description="레코드 생성 일시"
    )
    updated_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=updated_at_column(),
        description="레코드 마지막 업데이트 일시"
    )
