# lo_exchange/domains/lo/crud.py

"""
'lo' 도메인 (물류 객체)의 CRUD 작업을 담당하는 모듈입니다.
"""

import copy
import logging
from typing import Any, Dict, List, Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from fastapi import HTTPException, status

from lo_exchange.core.crud_base import CRUDBase
from . import models as lo_models
from . import services as lo_services

logger = logging.getLogger(__name__)


class CRUDLogisticsObject(CRUDBase[lo_models.LogisticsObject, lo_models.LogisticsObject, lo_models.LogisticsObject]):
    def __init__(self):
        super().__init__(model=lo_models.LogisticsObject)

    async def get_by_lo_id(
        self, db: AsyncSession, *, company_id: str, lo_id: str
    ) -> Optional[lo_models.LogisticsObject]:
        return await self.get_one_filtered(db, filters={"company_id": company_id, "lo_id": lo_id})

    async def get_by_company(self, db: AsyncSession, *, company_id: str) -> List[lo_models.LogisticsObject]:
        statement = (
            select(self.model)
            .where(self.model.company_id == company_id)
            .order_by(self.model.id)
        )
        result = await db.execute(statement)
        return result.scalars().all()

    async def create_for_company(
        self, db: AsyncSession, *, company_id: str, body: Dict[str, Any], base_url: str
    ) -> lo_models.LogisticsObject:
        """
        ID 와 canonical URL 을 결정한 뒤 물류 객체를 저장합니다.
        저장되는 본문의 '@id' 는 항상 canonical URL 입니다.
        """
        lo_id, url = lo_services.resolve_identity(body, company_id, base_url)

        content = copy.deepcopy(body)
        content[lo_services.ID_FIELD] = url
        db_obj = lo_models.LogisticsObject(
            lo_id=lo_id,
            company_id=company_id,
            url=url,
            type=content[lo_services.TYPE_FIELD],
            logistics_object=content,
        )
        db.add(db_obj)
        await db.commit()
        await db.refresh(db_obj)
        logger.info("Logistics object created: %s (%s) by %s", lo_id, db_obj.type, company_id)
        return db_obj

    async def patch(
        self, db: AsyncSession, *, db_obj: lo_models.LogisticsObject, changes: Dict[str, Any]
    ) -> lo_models.LogisticsObject:
        """
        PATCH 본문을 병합합니다. JSON 컬럼의 변경을 감지하도록 새 dict 를 할당합니다.
        """
        db_obj.logistics_object = lo_services.merge_logistics_object(db_obj.logistics_object, changes)
        db.add(db_obj)
        await db.commit()
        await db.refresh(db_obj)
        return db_obj

    async def remove(self, db: AsyncSession, *, company_id: str, lo_id: str) -> lo_models.LogisticsObject:
        """
        (company_id, lo_id) 로 물류 객체를 찾아 삭제합니다.
        같은 lo_id 를 가진 다른 회사의 객체는 대상이 되지 않습니다.
        """
        db_obj = await self.get_by_lo_id(db, company_id=company_id, lo_id=lo_id)
        if not db_obj:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Cannot find any logistics object to be deleted with the given loId",
            )
        await db.delete(db_obj)
        await db.commit()
        return db_obj


logistics_object = CRUDLogisticsObject()
