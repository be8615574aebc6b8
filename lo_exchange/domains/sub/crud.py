# lo_exchange/domains/sub/crud.py

"""
'sub' 도메인 (게시자로부터 받은 물류 객체)의 CRUD 작업을 담당하는 모듈입니다.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from lo_exchange.core.crud_base import CRUDBase
from . import models as sub_models

logger = logging.getLogger(__name__)


class CRUDInboundRecord(CRUDBase[sub_models.InboundSubscriptionRecord, sub_models.InboundSubscriptionRecord, sub_models.InboundSubscriptionRecord]):
    def __init__(self):
        super().__init__(model=sub_models.InboundSubscriptionRecord)

    async def append(
        self, db: AsyncSession, *, topic: Optional[str], payload: Dict[str, Any]
    ) -> sub_models.InboundSubscriptionRecord:
        """수신 기록을 하나 추가합니다. 같은 본문이 다시 와도 중복 제거하지 않습니다."""
        db_obj = sub_models.InboundSubscriptionRecord(topic=topic, payload=payload)
        db.add(db_obj)
        await db.commit()
        await db.refresh(db_obj)
        logger.info("Logistics object received from publisher (topic=%s, record=%s)", topic, db_obj.id)
        return db_obj

    async def get_by_topic(
        self, db: AsyncSession, *, topic: Optional[str] = None
    ) -> List[sub_models.InboundSubscriptionRecord]:
        """수신 순서대로 기록을 반환합니다. topic 이 없으면 전체를 반환합니다."""
        statement = select(self.model).order_by(self.model.id)
        if topic:
            statement = statement.where(self.model.topic == topic)
        result = await db.execute(statement)
        return result.scalars().all()


inbound_record = CRUDInboundRecord()
