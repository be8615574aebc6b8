# lo_exchange/domains/corp/routers.py

"""
'corp' 도메인 (회사 디렉터리)과 관련된 API 엔드포인트를 정의하는 모듈입니다.
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlmodel.ext.asyncio.session import AsyncSession

from lo_exchange.core.config import settings
from lo_exchange.core import dependencies as deps
from . import crud as corp_crud
from . import models as corp_models
from . import schemas as corp_schemas


router = APIRouter(
    prefix="/companies",
    tags=["Companies (회사 관리)"],
    responses={404: {"description": "Not found"}},
)


@router.post("", response_model=corp_schemas.StatusResponse, status_code=status.HTTP_201_CREATED, summary="회사 등록")
async def register_company(
    company_in: corp_schemas.CompanyCreate,
    db: AsyncSession = Depends(deps.get_db_session),
):
    """
    새 회사를 등록합니다. 인증이 필요하지 않습니다.
    - companyId 는 회사를 식별하는 고유 문자열입니다 (공백 없이 영문/숫자).
    - companyPin 을 알고 있는 사용자만 이 회사에 계정을 만들 수 있습니다.
      생략하면 서버 기본 PIN 이 사용됩니다.
    """
    await corp_crud.company.create(db, obj_in=company_in, default_pin=settings.DEFAULT_COMPANY_PIN)
    return {"status": "Company registration successful!"}


@router.get(
    "",
    response_model=List[corp_schemas.CompanySummary],
    dependencies=[Depends(deps.verify_server_own_secret)],
    summary="등록된 회사 목록 조회 (서버 운영자)",
)
async def read_companies(db: AsyncSession = Depends(deps.get_db_session)):
    """'serverSecret' 헤더가 필요합니다."""
    companies = await corp_crud.company.get_all(db)
    return [
        corp_schemas.CompanySummary(
            company_name=company.company_name,
            company_id=company.company_id,
            endpoint=company.server_information_endpoint,
        )
        for company in companies
    ]


@router.get("/{company_id}", response_model=corp_schemas.CompanyRead, summary="회사 정보 조회")
async def read_company(company: corp_models.Company = Depends(deps.get_owned_company)):
    """회사 상세 정보를 조회합니다. PIN 은 포함되지 않습니다."""
    return company


@router.patch("/{company_id}", response_model=corp_schemas.MessageResponse, summary="회사 정보 수정")
async def update_company(
    company_in: corp_schemas.CompanyUpdate,
    company: corp_models.Company = Depends(deps.get_owned_company),
    db: AsyncSession = Depends(deps.get_db_session),
):
    """
    회사 정보를 부분 수정합니다. 수정할 필드만 보내면 됩니다.
    topics 를 보내면 구독 토픽 목록 전체가 교체됩니다.
    """
    await corp_crud.company.update(db, db_obj=company, obj_in=company_in)
    return {"message": "Update successful."}


@router.delete("/{company_id}", response_model=corp_schemas.MessageResponse, summary="회사 삭제")
async def delete_company(
    company: corp_models.Company = Depends(deps.get_owned_company),
    db: AsyncSession = Depends(deps.get_db_session),
):
    await corp_crud.company.remove(db, company_id=company.company_id)
    return {"message": "Company successfully deleted"}
