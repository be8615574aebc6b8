# lo_exchange/core/dependencies.py

"""
FastAPI 애플리케이션의 의존성 주입(Dependency Injection)을 정의하는 모듈입니다.

- 데이터베이스 세션 관리 (get_db_session, get_session_factory).
- 현재 인증된 사용자 정보 획득 (get_current_active_user).
- 경로의 companyId 가 로그인 사용자의 회사인지 확인 (get_owned_company).
- 구독자 알림 전송기 생성 (get_notification_dispatcher).
- 서버 운영자 시크릿 헤더 확인 (verify_server_own_secret).
"""

from typing import AsyncContextManager, AsyncGenerator, Callable, Optional

from fastapi import Depends, Header, HTTPException, status
from sqlmodel.ext.asyncio.session import AsyncSession

from lo_exchange.core.config import settings
from lo_exchange.core.database import get_session as get_main_app_session
from lo_exchange.core.database import get_async_session_context
# flake8: noqa
from lo_exchange.core.security import (
    create_access_token,
    get_current_active_user,
    verify_shared_secret,
)
from lo_exchange.domains.corp import crud as corp_crud
from lo_exchange.domains.corp import models as corp_models
from lo_exchange.domains.usr import models as usr_models
from lo_exchange.services.notification import NotificationDispatcher

SessionFactory = Callable[[], AsyncContextManager[AsyncSession]]


# --- 데이터베이스 세션 의존성 주입 ---
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI 의존성 주입을 위한 비동기 데이터베이스 세션 제너레이터입니다.
    lo_exchange.core.database.get_session 을 래핑하여 사용합니다.
    """
    async for session in get_main_app_session():
        yield session


def get_session_factory() -> SessionFactory:
    """
    응답 이후에 실행되는 백그라운드 작업이 자체 세션을 열 때 사용하는 팩토리를 반환합니다.
    """
    return get_async_session_context


def get_notification_dispatcher() -> NotificationDispatcher:
    return NotificationDispatcher(
        timeout=settings.PEER_REQUEST_TIMEOUT_SECONDS,
        max_concurrency=settings.DISPATCH_MAX_CONCURRENCY,
    )


# --- 회사 소유권 확인 ---
async def get_owned_company(
    company_id: str,
    db: AsyncSession = Depends(get_db_session),
    current_user: usr_models.User = Depends(get_current_active_user),
) -> corp_models.Company:
    """
    경로의 companyId 에 해당하는 회사를 반환합니다.
    회사가 없으면 404, 로그인 사용자가 다른 회사 소속이면 403 을 발생시킵니다.
    """
    company = await corp_crud.company.get_by_company_id(db, company_id=company_id)
    if not company:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="CompanyId not found.")
    if company.company_id != current_user.company_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="This company is not the one under which the logged in user is registered.",
        )
    return company


# --- 서버 운영자 시크릿 확인 ---
def verify_server_own_secret(
    server_secret: Optional[str] = Header(None, alias="serverSecret"),
) -> None:
    """
    서버 운영자용 조회 엔드포인트에서 'serverSecret' 헤더를 확인합니다.
    일치하지 않으면 403 을 발생시킵니다.
    """
    if not verify_shared_secret(server_secret, settings.SERVER_OWN_SECRET.get_secret_value()):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden to access this resource on this server",
        )
