# lo_exchange/domains/lo/schemas.py

"""
'lo' 도메인의 API 응답 스키마입니다.
요청 본문은 임의의 JSON-LD 문서이므로 별도의 입력 스키마 없이 dict 로 받습니다.
"""

from typing import Any, Dict, Optional
from datetime import datetime

from lo_exchange.domains.corp.schemas import CamelModel


class LogisticsObjectSummary(CamelModel):
    """회사별 물류 객체 목록의 항목"""
    lo_id: str
    logistics_object: Dict[str, Any]
    type: str
    url: str


class LogisticsObjectRead(LogisticsObjectSummary):
    company_id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
