# lo_exchange/domains/usr/schemas.py

"""
'usr' 도메인 (사용자 및 인증)의 API 데이터 전송 객체(DTO)를 정의하는 모듈입니다.
"""

from typing import Optional
from pydantic import BaseModel, EmailStr, Field

from lo_exchange.domains.corp.schemas import CamelModel


# =============================================================================
# 1. 사용자 (User) 스키마
# =============================================================================
class UserCreate(CamelModel):
    """회사 PIN 을 포함한 사용자 등록 스키마"""
    email: EmailStr
    full_name: Optional[str] = Field(None, max_length=100)
    password: str = Field(..., min_length=8)
    company_pin: str = Field(..., min_length=1)


class UserRead(CamelModel):
    """비밀번호 해시값 등 민감한 정보를 제외한 사용자 조회 스키마"""
    id: int
    email: str
    full_name: Optional[str] = None
    company_id: str
    is_active: bool


# =============================================================================
# 2. 인증 토큰 (Token) 스키마
# =============================================================================
class Token(BaseModel):
    """JWT 토큰 응답 스키마"""
    access_token: str
    token_type: str
