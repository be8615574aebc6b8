# lo_exchange/domains/corp/models.py

"""
'corp' 도메인의 데이터베이스 ORM 모델을 정의하는 모듈입니다.

- `Company`: 네트워크에 등록된 회사와 구독 메타데이터(정보 엔드포인트, 접근 키).
- `CompanyTopic`: 회사가 알림을 받고자 하는 토픽(물류 객체 타입) 한 건.
  토픽별 구독 회사 조회(Topic Subscriber Index)는 이 테이블을 기준으로 수행합니다.
"""

from typing import Optional, List
from datetime import datetime, UTC
from enum import Enum

from sqlalchemy import Column, ForeignKey, Integer
from sqlmodel import Field, Relationship, SQLModel

from lo_exchange.core.database_base import created_at_column, updated_at_column


class CompanyType(str, Enum):
    """
    회사 유형. 등록 시 아래 값 중 하나여야 합니다.
    """
    SHIPPER = "shipper"
    FORWARDER = "forwarder"
    AIRLINE = "airline"
    HANDLER = "handler"
    CUSTOMS = "customs"
    TRUCKING = "trucking"
    WAREHOUSE = "warehouse"
    SALES_AGENT = "salesagent"


# =============================================================================
# 1. companies 테이블 모델
# =============================================================================
class Company(SQLModel, table=True):
    """
    companies 테이블에 매핑되는 SQLModel ORM 클래스입니다.
    company_id 는 호출자가 정하는 전역 고유 슬러그이며, 다른 테이블의 외래 키로 사용됩니다.
    """
    __tablename__ = "companies"

    id: Optional[int] = Field(default=None, primary_key=True, description="회사 고유 ID (내부용)")
    company_id: str = Field(max_length=100, unique=True, index=True, description="회사 식별 슬러그")
    company_name: str = Field(max_length=200, description="회사명")
    company_type: CompanyType = Field(description="회사 유형")
    contact_name: str = Field(max_length=100, description="담당자 이름")
    contact_email: str = Field(max_length=100, description="담당자 이메일")
    company_image: Optional[str] = Field(default=None, description="회사 이미지 URL")
    company_description: Optional[str] = Field(default=None, description="회사 설명")

    # 구독 메타데이터: 알림 전송 전에 이 엔드포인트를 조회해 콜백 정보를 얻습니다.
    server_information_endpoint: Optional[str] = Field(default=None, description="회사 서버의 serverInformation 엔드포인트")
    key_for_server_information_endpoint: Optional[str] = Field(default=None, description="serverInformation 엔드포인트 접근 키")

    company_pin: str = Field(default="1234", max_length=100, description="사용자 등록용 회사 PIN")
    active: bool = Field(default=True, description="회사 활성 여부")

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

    topic_links: List["CompanyTopic"] = Relationship(
        back_populates="company",
        sa_relationship_kwargs={"lazy": "selectin", "cascade": "all, delete-orphan"},
    )

    @property
    def topics(self) -> List[str]:
        return [link.topic for link in self.topic_links]

    @property
    def can_be_notified(self) -> bool:
        """정보 엔드포인트와 접근 키가 모두 있어야 알림 대상이 됩니다."""
        return bool(self.server_information_endpoint and self.key_for_server_information_endpoint)


# =============================================================================
# 2. company_topics 테이블 모델
# =============================================================================
class CompanyTopic(SQLModel, table=True):
    __tablename__ = "company_topics"

    id: Optional[int] = Field(default=None, primary_key=True)
    company_pk: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False),
        description="회사 ID (FK)"
    )
    topic: str = Field(max_length=100, index=True, description="구독 토픽 (물류 객체 타입)")

    company: Optional[Company] = Relationship(back_populates="topic_links")
