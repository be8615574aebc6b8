# lo_exchange/domains/sub/routers.py

"""
'sub' 도메인과 관련된 API 엔드포인트를 정의하는 모듈입니다.

- POST /callbackUrl: 게시자가 구독 정보의 secret 을 'x-api-key' 로 담아 물류 객체를 전송합니다.
- GET /losFromPublishers: 서버 운영자가 받은 물류 객체를 조회합니다 ('serverSecret' 헤더).
- GET /serverInformation: 게시자가 서버 정보 / 구독 정보를 조회합니다 ('x-api-key' 헤더).
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request, status
from fastapi.responses import JSONResponse
from sqlmodel.ext.asyncio.session import AsyncSession

from lo_exchange.core.config import settings
from lo_exchange.core import dependencies as deps
from lo_exchange.domains.corp import schemas as corp_schemas
from . import crud as sub_crud
from . import schemas as sub_schemas
from . import services as sub_services


router = APIRouter(
    tags=["Logistics objects from publishers (구독 수신)"],
)


@router.post("/callbackUrl", response_model=corp_schemas.MessageResponse, summary="게시자로부터 물류 객체 수신")
async def receive_logistics_object(
    request: Request,
    api_key: Optional[str] = Header(None, alias="x-api-key"),
    resource_type: Optional[str] = Header(None, alias="Resource-Type"),
    topic: Optional[str] = Query(None, description="Resource-Type 헤더가 없을 때 사용하는 토픽"),
    db: AsyncSession = Depends(deps.get_db_session),
):
    """
    구독한 게시자가 보낸 물류 객체를 저장합니다.
    - 'x-api-key' 가 구독 시크릿과 다르면 본문을 읽지 않고 401 을 반환합니다.
    - 토픽은 'Resource-Type' 헤더, 없으면 topic 쿼리 파라미터에서 가져옵니다. 둘 다 없으면 토픽 없이 저장합니다.
    """
    if not deps.verify_shared_secret(api_key, settings.SUBSCRIPTION_SECRET.get_secret_value()):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized to send logistics objects to this server",
        )

    try:
        payload = await request.json()
    except ValueError:
        payload = None
    if not isinstance(payload, dict):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Logistics object should be a JSON object")

    await sub_crud.inbound_record.append(db, topic=resource_type or topic, payload=payload)
    return {"message": "Logistics object notification successful!"}


@router.get(
    "/losFromPublishers",
    response_model=List[sub_schemas.InboundLogisticsObject],
    dependencies=[Depends(deps.verify_server_own_secret)],
    summary="게시자로부터 받은 물류 객체 조회",
)
async def read_logistics_objects_from_publishers(
    topic: Optional[str] = Query(None, description="조회할 물류 객체 타입"),
    db: AsyncSession = Depends(deps.get_db_session),
):
    records = await sub_crud.inbound_record.get_by_topic(db, topic=topic)
    return [sub_schemas.InboundLogisticsObject(lo=record.payload, topic=record.topic) for record in records]


@router.get("/serverInformation", summary="서버 정보 / 구독 정보 조회")
async def read_server_information(
    api_key: Optional[str] = Header(None, alias="x-api-key"),
    topic: Optional[str] = Query(None, description="구독 정보를 조회할 토픽"),
):
    """
    topic 이 있으면 해당 토픽의 Subscription 문서를, 없으면 ServerInformation 문서를 반환합니다.
    """
    if not deps.verify_shared_secret(api_key, settings.KEY_FOR_SERVER_INFORMATION.get_secret_value()):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized to retrieve server information",
        )

    if topic:
        document = sub_services.build_subscription(
            topic=topic,
            server_url=settings.SERVER_URL,
            vocab=settings.JSONLD_VOCAB,
            secret=settings.SUBSCRIPTION_SECRET.get_secret_value(),
            cache_for=settings.CACHE_FOR,
        )
    else:
        document = sub_services.build_server_information(
            server_url=settings.SERVER_URL,
            vocab=settings.JSONLD_VOCAB,
            company_name=settings.COMPANY_NAME,
            iata_cargo_agent_code=settings.IATA_CARGO_AGENT_CODE,
        )
    return JSONResponse(content=document, media_type="application/ld+json")
