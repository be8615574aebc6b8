# lo_exchange/domains/corp/crud.py

"""
'corp' 도메인의 CRUD 작업과 토픽별 구독 회사 조회(Topic Subscriber Index)를 담당하는 모듈입니다.
"""

import logging
from typing import Any, Dict, List, Optional, Union

from sqlalchemy.orm import selectinload
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from fastapi import HTTPException, status

from lo_exchange.core.crud_base import CRUDBase
from . import models as corp_models
from . import schemas as corp_schemas

logger = logging.getLogger(__name__)


def _topic_links(topics: List[str]) -> List[corp_models.CompanyTopic]:
    # 순서를 유지하며 중복 토픽을 제거합니다.
    return [corp_models.CompanyTopic(topic=topic) for topic in dict.fromkeys(topics)]


class CRUDCompany(CRUDBase[corp_models.Company, corp_schemas.CompanyCreate, corp_schemas.CompanyUpdate]):
    def __init__(self):
        super().__init__(model=corp_models.Company)

    async def get_by_company_id(self, db: AsyncSession, *, company_id: str) -> Optional[corp_models.Company]:
        """회사 슬러그(companyId)로 회사를 조회하며, 토픽 관계를 즉시 로드합니다."""
        statement = (
            select(self.model)
            .where(self.model.company_id == company_id)
            .options(selectinload(self.model.topic_links))
        )
        result = await db.execute(statement)
        return result.scalars().first()

    async def get_all(self, db: AsyncSession) -> List[corp_models.Company]:
        statement = select(self.model).order_by(self.model.id)
        result = await db.execute(statement)
        return result.scalars().all()

    async def find_subscribers(self, db: AsyncSession, *, topic: str) -> List[corp_models.Company]:
        """
        주어진 토픽을 구독한 모든 회사를 반환합니다.

        결과 순서는 보장하지 않으며, 알림에 필요한 엔드포인트/키가 없는 회사도 포함될 수 있습니다.
        (호출하는 쪽에서 걸러내야 합니다.) 비활성(active=False) 회사도 구독 회사로 취급합니다.
        """
        statement = (
            select(self.model)
            .join(corp_models.CompanyTopic, corp_models.CompanyTopic.company_pk == self.model.id)
            .where(corp_models.CompanyTopic.topic == topic)
            .options(selectinload(self.model.topic_links))
            .distinct()
        )
        result = await db.execute(statement)
        companies = result.scalars().all()
        if not companies:
            logger.info("No companies found interested in topic %s", topic)
        return companies

    async def create(
        self, db: AsyncSession, *, obj_in: corp_schemas.CompanyCreate, default_pin: str
    ) -> corp_models.Company:
        """새 회사를 등록합니다. companyId 가 이미 존재하면 400 을 반환합니다."""
        if await self.get_by_company_id(db, company_id=obj_in.company_id):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="CompanyId already exists!")

        company_data = obj_in.model_dump(exclude={"topics", "company_pin"})
        db_company = corp_models.Company(
            **company_data,
            company_pin=obj_in.company_pin or default_pin,
            topic_links=_topic_links(obj_in.topics),
        )
        db.add(db_company)
        await db.commit()
        logger.info("Company registered: %s (topics=%s)", db_company.company_id, obj_in.topics)
        return await self.get_by_company_id(db, company_id=db_company.company_id)

    async def update(
        self,
        db: AsyncSession,
        *,
        db_obj: corp_models.Company,
        obj_in: Union[corp_schemas.CompanyUpdate, Dict[str, Any]]
    ) -> corp_models.Company:
        """
        회사 정보를 부분 업데이트합니다. topics 가 포함되면 구독 토픽 목록 전체를 교체합니다.
        """
        if isinstance(obj_in, dict):
            update_data = obj_in
        else:
            update_data = obj_in.model_dump(exclude_unset=True)

        topics = update_data.pop("topics", None)
        for field, value in update_data.items():
            if value is None and field in ("company_name", "company_type", "contact_name", "contact_email", "company_pin", "active"):
                # 필수 컬럼은 null 로 덮어쓰지 않습니다.
                continue
            setattr(db_obj, field, value)
        if topics is not None:
            db_obj.topic_links = _topic_links(topics)

        db.add(db_obj)
        await db.commit()
        return await self.get_by_company_id(db, company_id=db_obj.company_id)

    async def remove(self, db: AsyncSession, *, company_id: str) -> corp_models.Company:
        db_company = await self.get_by_company_id(db, company_id=company_id)
        if not db_company:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="CompanyId not found.")
        await db.delete(db_company)
        await db.commit()
        return db_company


company = CRUDCompany()
