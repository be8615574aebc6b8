# lo_exchange/domains/lo/routers.py

"""
'lo' 도메인 (물류 객체)과 관련된 API 엔드포인트를 정의하는 모듈입니다.
모든 엔드포인트는 Bearer 토큰이 필요하며, 경로의 companyId 가 로그인 사용자의 회사여야 합니다.
"""

import copy
import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, BackgroundTasks, Body, Depends, HTTPException, Query, Request, status
from redis.exceptions import RedisError
from sqlmodel.ext.asyncio.session import AsyncSession

from lo_exchange.core.config import settings
from lo_exchange.core import dependencies as deps
from lo_exchange.domains.corp import models as corp_models
from lo_exchange.domains.corp import schemas as corp_schemas
from lo_exchange.services.notification import NotificationDispatcher
from . import crud as lo_crud
from . import schemas as lo_schemas
from . import tasks as lo_tasks

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/companies/{company_id}/los",
    tags=["Companies / Logistics objects (물류 객체)"],
    responses={404: {"description": "Not found"}},
)


async def _schedule_dispatch(
    request: Request,
    background_tasks: BackgroundTasks,
    session_factory: deps.SessionFactory,
    dispatcher: NotificationDispatcher,
    lo_body: Dict[str, Any],
    topic: str,
) -> None:
    """
    구독자 알림을 응답과 분리해 예약합니다.
    ARQ Redis pool 이 있으면 워커 큐에 넣고, 없으면 응답 전송 후 프로세스 내에서 실행합니다.
    """
    arq_redis_pool = getattr(request.app.state, "redis", None)
    if arq_redis_pool:
        try:
            await arq_redis_pool.enqueue_job(lo_tasks.dispatch_logistics_object_task.__name__, lo_body, topic)
            logger.info("ARQ Job enqueued: dispatch_logistics_object_task for topic %s", topic)
            return
        except (RedisError, OSError):
            logger.exception("ARQ enqueue failed, notifying subscribers in-process instead")
    background_tasks.add_task(lo_tasks.run_dispatch, session_factory, dispatcher, lo_body, topic)


@router.post("", response_model=lo_schemas.LogisticsObjectRead, status_code=status.HTTP_201_CREATED, summary="물류 객체 생성")
async def create_logistics_object(
    request: Request,
    background_tasks: BackgroundTasks,
    body: Dict[str, Any] = Body(..., description="물류 객체 본문 (@type: Airwaybill, Housemanifest, Housewaybill, Booking)"),
    alert_subscribers: Optional[str] = Query(None, alias="alertSubscribers", description="정확히 'true' 일 때만 토픽 구독 회사에 알림을 보냅니다."),
    company: corp_models.Company = Depends(deps.get_owned_company),
    db: AsyncSession = Depends(deps.get_db_session),
    dispatcher: NotificationDispatcher = Depends(deps.get_notification_dispatcher),
    session_factory: deps.SessionFactory = Depends(deps.get_session_factory),
):
    """
    물류 객체를 생성합니다.
    - alertSubscribers=true 이면 저장 이후, 같은 타입을 구독한 회사들에게 객체를 전달합니다.
      알림 결과는 이 응답에 영향을 주지 않습니다.
    """
    db_obj = await lo_crud.logistics_object.create_for_company(
        db, company_id=company.company_id, body=body, base_url=settings.SERVER_URL
    )

    if alert_subscribers == "true":
        await _schedule_dispatch(
            request, background_tasks, session_factory, dispatcher,
            copy.deepcopy(db_obj.logistics_object), db_obj.type,
        )
    return db_obj


@router.get("", response_model=List[lo_schemas.LogisticsObjectSummary], summary="회사의 물류 객체 목록 조회")
async def read_logistics_objects(
    company: corp_models.Company = Depends(deps.get_owned_company),
    db: AsyncSession = Depends(deps.get_db_session),
):
    return await lo_crud.logistics_object.get_by_company(db, company_id=company.company_id)


@router.get("/{lo_id}", response_model=lo_schemas.LogisticsObjectRead, summary="물류 객체 조회")
async def read_logistics_object(
    lo_id: str,
    company: corp_models.Company = Depends(deps.get_owned_company),
    db: AsyncSession = Depends(deps.get_db_session),
):
    db_obj = await lo_crud.logistics_object.get_by_lo_id(db, company_id=company.company_id, lo_id=lo_id)
    if not db_obj:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="LoId not found.")
    return db_obj


@router.patch("/{lo_id}", response_model=lo_schemas.LogisticsObjectRead, summary="물류 객체 수정")
async def update_logistics_object(
    lo_id: str,
    changes: Dict[str, Any] = Body(..., description="수정할 필드만 포함한 본문"),
    company: corp_models.Company = Depends(deps.get_owned_company),
    db: AsyncSession = Depends(deps.get_db_session),
):
    """
    물류 객체를 부분 수정합니다.
    - 배열 필드는 기존 배열 뒤에 추가되고, 그 외 필드는 덮어씁니다.
    - '@id' 는 변경되지 않습니다.
    """
    db_obj = await lo_crud.logistics_object.get_by_lo_id(db, company_id=company.company_id, lo_id=lo_id)
    if not db_obj:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="LoId not found.")
    return await lo_crud.logistics_object.patch(db, db_obj=db_obj, changes=changes)


@router.delete("/{lo_id}", response_model=corp_schemas.MessageResponse, summary="물류 객체 삭제")
async def delete_logistics_object(
    lo_id: str,
    company: corp_models.Company = Depends(deps.get_owned_company),
    db: AsyncSession = Depends(deps.get_db_session),
):
    await lo_crud.logistics_object.remove(db, company_id=company.company_id, lo_id=lo_id)
    return {"message": "Logistics object successfully deleted"}
