# lo_exchange/domains/lo/models.py

"""
'lo' 도메인 (물류 객체)의 데이터베이스 ORM 모델을 정의하는 모듈입니다.
"""

from typing import Optional, Dict, Any
from datetime import datetime, UTC

from sqlalchemy import Column, ForeignKey, Index, String
from sqlmodel import Field, SQLModel

from lo_exchange.core.database_base import JSONDocument, created_at_column, updated_at_column

# 알려진 물류 객체 타입. 생성 시 이 목록으로 검증하지는 않습니다 (@type 존재 여부만 확인).
LOGISTICS_OBJECT_TYPES = ("Airwaybill", "Housemanifest", "Housewaybill", "Booking")


class LogisticsObject(SQLModel, table=True):
    """
    los 테이블에 매핑되는 SQLModel ORM 클래스입니다.
    logistics_object 컬럼에는 JSON-LD 본문 전체가 저장되며, 항상 '@id' 에 canonical URL 을 담습니다.
    (company_id, lo_id) 는 고유 제약이 없습니다. 호출자가 지정한 @id 는 중복 검사를 하지 않습니다.
    """
    __tablename__ = "los"
    __table_args__ = (Index("ix_los_company_id_lo_id", "company_id", "lo_id"),)

    id: Optional[int] = Field(default=None, primary_key=True, description="고유 ID (내부용)")
    lo_id: str = Field(max_length=255, description="회사 내 물류 객체 ID (canonical URL 의 마지막 경로)")
    company_id: str = Field(
        sa_column=Column(
            String(100),
            ForeignKey("companies.company_id", onupdate="CASCADE", ondelete="CASCADE"),
            nullable=False,
        ),
        description="소유 회사 슬러그 (FK)"
    )
    url: str = Field(description="canonical URL")
    type: str = Field(max_length=100, index=True, description="물류 객체 타입 (@type)")
    logistics_object: Dict[str, Any] = Field(
        default_factory=dict,
        sa_column=Column(JSONDocument, nullable=False),
        description="물류 객체 JSON-LD 본문"
    )

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
