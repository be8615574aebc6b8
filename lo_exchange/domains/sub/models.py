# lo_exchange/domains/sub/models.py

"""
'sub' 도메인의 데이터베이스 ORM 모델을 정의하는 모듈입니다.
"""

from typing import Optional, Dict, Any
from datetime import datetime, UTC

from sqlalchemy import Column
from sqlmodel import Field, SQLModel

from lo_exchange.core.database_base import JSONDocument, created_at_column


class InboundSubscriptionRecord(SQLModel, table=True):
    """
    los_from_subscriptions 테이블에 매핑되는 SQLModel ORM 클래스입니다.
    게시자로부터 받은 물류 객체를 받은 그대로 저장합니다. 추가만 하며 수정/삭제하지 않습니다.
    """
    __tablename__ = "los_from_subscriptions"

    id: Optional[int] = Field(default=None, primary_key=True, description="고유 ID")
    topic: Optional[str] = Field(default=None, max_length=100, index=True, description="수신 토픽 (Resource-Type). 없으면 NULL")
    payload: Dict[str, Any] = Field(
        default_factory=dict,
        sa_column=Column(JSONDocument, nullable=False),
        description="수신한 물류 객체 본문"
    )

    created_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=created_at_column(),
        description="수신 일시"
    )
