# lo_exchange/domains/lo/tasks.py

"""
물류 객체 생성 이후 응답과 분리되어 실행되는 구독자 알림 작업입니다.

- `run_dispatch`: FastAPI BackgroundTasks 로 프로세스 내에서 실행할 때 사용합니다.
- `dispatch_logistics_object_task`: ARQ 워커가 실행하는 태스크입니다.
"""

import logging
from typing import Any, AsyncContextManager, Callable, Dict

from sqlmodel.ext.asyncio.session import AsyncSession

from lo_exchange.core.config import settings
from lo_exchange.core.database import get_async_session_context
from lo_exchange.services.notification import NotificationDispatcher

logger = logging.getLogger(__name__)


async def run_dispatch(
    session_factory: Callable[[], AsyncContextManager[AsyncSession]],
    dispatcher: NotificationDispatcher,
    lo_body: Dict[str, Any],
    topic: str,
) -> None:
    """
    자체 DB 세션을 열어 구독자 알림을 실행합니다.
    어떤 실패도 물류 객체 생성 요청 쪽으로 전파하지 않고 로그로만 남깁니다.
    """
    logger.info("백그라운드 작업 시작: 토픽 '%s' 구독자 알림", topic)
    try:
        async with session_factory() as db:
            await dispatcher.dispatch(db, lo_body, topic)
    except Exception:
        logger.exception("Subscriber notification for topic %s failed", topic)
        return
    logger.info("작업 완료! 토픽 '%s' 구독자 알림", topic)


async def dispatch_logistics_object_task(
    ctx: Dict[str, Any], lo_body: Dict[str, Any], topic: str
) -> Dict[str, Any]:
    """
    ARQ 워커에서 실행되는 구독자 알림 태스크입니다.
    """
    dispatcher = NotificationDispatcher(
        timeout=settings.PEER_REQUEST_TIMEOUT_SECONDS,
        max_concurrency=settings.DISPATCH_MAX_CONCURRENCY,
    )
    await run_dispatch(get_async_session_context, dispatcher, lo_body, topic)
    return {"status": "ok", "topic": topic}
