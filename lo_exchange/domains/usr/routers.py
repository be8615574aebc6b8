# lo_exchange/domains/usr/routers.py

"""
'usr' 도메인 (사용자 및 인증)과 관련된 API 엔드포인트를 정의하는 모듈입니다.
"""

from typing import List
from datetime import timedelta

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlmodel.ext.asyncio.session import AsyncSession

# 애플리케이션 설정 및 의존성 임포트
from lo_exchange.core.config import settings
from lo_exchange.core import dependencies as deps
from lo_exchange.domains.corp import crud as corp_crud
from lo_exchange.domains.corp import models as corp_models

# usr 도메인의 CRUD, 모델, 스키마
from . import crud as usr_crud
from . import models as usr_models
from . import schemas as usr_schemas


router = APIRouter(
    tags=["Users & Authentication (사용자 및 인증)"],
    responses={404: {"description": "Not found"}},
)


# =============================================================================
# 1. 인증 (Authentication) 엔드포인트
# =============================================================================

@router.post("/auth/token", response_model=usr_schemas.Token, summary="Access Token 획득")
async def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: AsyncSession = Depends(deps.get_db_session),
):
    """
    이메일(username 필드)과 비밀번호로 로그인합니다.
    발급된 토큰에는 사용자의 소속 회사(companyId)가 함께 담깁니다.
    """
    user = await usr_crud.user.authenticate(db, email=form_data.username, password=form_data.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if not user.is_active:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Inactive user")

    access_token_expires = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    access_token = deps.create_access_token(
        data={"sub": user.email, "companyId": user.company_id}, expires_delta=access_token_expires
    )
    return {"access_token": access_token, "token_type": "bearer"}


@router.get("/auth/me", response_model=usr_schemas.UserRead, summary="현재 사용자 정보 조회")
async def read_users_me(current_user: usr_models.User = Depends(deps.get_current_active_user)):
    return current_user


# =============================================================================
# 2. 회사 소속 사용자 (User) 엔드포인트
# =============================================================================

@router.post(
    "/companies/{company_id}/users",
    response_model=usr_schemas.UserRead,
    status_code=status.HTTP_201_CREATED,
    summary="회사 소속 사용자 등록",
)
async def register_user(
    company_id: str,
    user_in: usr_schemas.UserCreate,
    db: AsyncSession = Depends(deps.get_db_session),
):
    """
    회사 PIN 을 확인한 뒤 사용자를 등록합니다. Bearer 토큰은 필요하지 않습니다.
    - 회사가 없으면 404, PIN 이 틀리면 401, 이미 등록된 이메일이면 400 을 반환합니다.
    """
    company = await corp_crud.company.get_by_company_id(db, company_id=company_id)
    if not company:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="CompanyId not found.")
    return await usr_crud.user.create(db, obj_in=user_in, company=company)


@router.get("/companies/{company_id}/users", response_model=List[usr_schemas.UserRead], summary="회사 소속 사용자 조회")
async def read_company_users(
    company: corp_models.Company = Depends(deps.get_owned_company),
    db: AsyncSession = Depends(deps.get_db_session),
):
    return await usr_crud.user.get_by_company(db, company_id=company.company_id)
