# lo_exchange/domains/corp/schemas.py

"""
'corp' 도메인의 API 데이터 전송 객체(DTO)를 정의하는 모듈입니다.
JSON 필드명은 camelCase(companyId, serverInformationEndpoint 등)를 사용합니다.
"""

from typing import Optional, List
from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

from . import models as corp_models


class CamelModel(BaseModel):
    """snake_case 속성을 camelCase JSON 필드로 주고받는 공통 베이스 스키마"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class CompanyBase(CamelModel):
    company_name: str = Field(..., min_length=1, max_length=200)
    company_type: corp_models.CompanyType
    contact_name: str = Field(..., min_length=1, max_length=100)
    contact_email: EmailStr
    company_image: Optional[str] = None
    company_description: Optional[str] = None
    server_information_endpoint: Optional[str] = Field(None, description="https://example.org/serverInformation 형식의 엔드포인트")
    key_for_server_information_endpoint: Optional[str] = None
    topics: List[str] = Field(default_factory=list, description="알림을 받을 토픽 (Airwaybill, Housemanifest, Housewaybill, Booking)")


class CompanyCreate(CompanyBase):
    """회사 등록 스키마. companyId 는 소문자/숫자 등 URL 에 안전한 문자만 허용합니다."""
    company_id: str = Field(..., min_length=1, max_length=100, pattern=r"^[A-Za-z0-9_-]+$")
    company_pin: Optional[str] = Field(None, min_length=1, max_length=100)


class CompanyUpdate(CamelModel):
    """회사 정보 수정 스키마. 모든 필드는 선택 사항입니다 (부분 업데이트)."""
    company_name: Optional[str] = Field(None, min_length=1, max_length=200)
    company_type: Optional[corp_models.CompanyType] = None
    contact_name: Optional[str] = Field(None, min_length=1, max_length=100)
    contact_email: Optional[EmailStr] = None
    company_image: Optional[str] = None
    company_description: Optional[str] = None
    server_information_endpoint: Optional[str] = None
    key_for_server_information_endpoint: Optional[str] = None
    topics: Optional[List[str]] = None
    company_pin: Optional[str] = Field(None, min_length=1, max_length=100)
    active: Optional[bool] = None


class CompanyRead(CompanyBase):
    """회사 상세 조회 스키마 (PIN 제외)"""
    company_id: str
    active: bool


class CompanySummary(CamelModel):
    """서버 운영자용 회사 목록 항목"""
    company_name: str
    company_id: str
    endpoint: Optional[str] = None


class StatusResponse(BaseModel):
    status: str


class MessageResponse(BaseModel):
    message: str
