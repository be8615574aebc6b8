# lo_exchange/domains/sub/schemas.py

"""
'sub' 도메인의 API 응답 스키마입니다.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel


class InboundLogisticsObject(BaseModel):
    """게시자로부터 받은 물류 객체 목록의 항목"""
    lo: Dict[str, Any]
    topic: Optional[str] = None
