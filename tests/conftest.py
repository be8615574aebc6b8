# tests/conftest.py

import os
from typing import AsyncGenerator, Awaitable, Callable, Dict, List, Optional, Tuple, Union
from contextlib import asynccontextmanager

# 애플리케이션 설정은 임포트 시점에 한 번 로드되므로, 앱을 임포트하기 전에 테스트용 값을 지정합니다.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["SECRET_KEY"] = "test-secret-key-for-jwt-signing"
os.environ["SERVER_URL"] = "http://test"
os.environ["KEY_FOR_SERVER_INFORMATION"] = "test-server-information-key"
os.environ["SUBSCRIPTION_SECRET"] = "test-subscription-secret"
os.environ["SERVER_OWN_SECRET"] = "test-server-own-secret"
os.environ["CREATE_TABLES_ON_STARTUP"] = "false"
os.environ["ARQ_ENABLED"] = "false"

import httpx  # noqa: E402
import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import AsyncClient, ASGITransport  # noqa: E402

from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import SQLModel  # noqa: E402
from sqlmodel.ext.asyncio.session import AsyncSession  # noqa: E402

# lo_exchange.main을 임포트하여 FastAPI 앱 인스턴스에 접근합니다.
from lo_exchange.main import app as main_app  # noqa: E402
from lo_exchange.core import dependencies as deps  # noqa: E402
from lo_exchange.core.database import get_session  # noqa: E402
from lo_exchange.core.security import get_password_hash  # noqa: E402
from lo_exchange.domains.corp import models as corp_models  # noqa: E402
from lo_exchange.domains.usr import models as usr_models  # noqa: E402
from lo_exchange.services.notification import NotificationDispatcher  # noqa: E402


# --- 테스트용 데이터베이스 설정 ---
# 테스트마다 새 in-memory SQLite DB 를 사용합니다. StaticPool 로 하나의 연결을 공유해야 테이블이 유지됩니다.
TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest_asyncio.fixture(scope="function")
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(test_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """
    각 테스트 함수마다 새 DB 에 연결된 비동기 세션을 제공합니다.
    API 요청, 백그라운드 알림 작업, 테스트 코드가 모두 이 세션을 함께 사용합니다.
    """
    testing_session_local = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    async with testing_session_local() as session:
        yield session


# --- 구독 회사 서버 (httpx.MockTransport) ---
Responder = Union[httpx.Response, Callable[[httpx.Request], httpx.Response]]


class PeerNetwork:
    """
    httpx.MockTransport 로 흉내 낸 외부 회사 서버들입니다.
    등록되지 않은 주소로의 요청은 연결 실패(httpx.ConnectError)로 처리합니다.
    """

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.routes: Dict[Tuple[str, str], Responder] = {}

    @staticmethod
    def _key(method: str, url: Union[str, httpx.URL]) -> Tuple[str, str]:
        url = httpx.URL(url)
        return method.upper(), f"{url.scheme}://{url.host}{url.path}"

    def route(self, method: str, url: str, responder: Responder) -> None:
        self.routes[self._key(method, url)] = responder

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        responder = self.routes.get(self._key(request.method, request.url))
        if responder is None:
            raise httpx.ConnectError("peer unreachable", request=request)
        if callable(responder):
            return responder(request)
        return responder

    def add_subscriber(
        self,
        base_url: str,
        *,
        key: str,
        secret: str,
        content_type: str = "application/ld+json",
        callback_status: int = 200,
    ) -> None:
        """serverInformation 과 callbackUrl 을 가진 정상적인 구독 회사 서버를 등록합니다."""
        def server_information(request: httpx.Request) -> httpx.Response:
            if request.headers.get("x-api-key") != key:
                return httpx.Response(401, json={"title": "Unauthorized"})
            topic = request.url.params.get("topic")
            return httpx.Response(200, json={
                "@context": {"@vocab": "https://onerecord.example.org"},
                "@id": f"{base_url}/serverInformation?topic={topic}",
                "@type": "Subscription",
                "subscribedTo": topic,
                "callbackUrl": f"{base_url}/callbackUrl",
                "contentType": [content_type, "application/json"],
                "secret": secret,
                "subscribeToStatusUpdates": True,
                "cacheFor": 86400,
            })

        self.route("GET", f"{base_url}/serverInformation", server_information)
        self.route(
            "POST", f"{base_url}/callbackUrl",
            httpx.Response(callback_status, json={"message": "Logistics object notification successful!"}),
        )

    def calls(self, method: str, url: str) -> List[httpx.Request]:
        key = self._key(method, url)
        return [request for request in self.requests if self._key(request.method, request.url) == key]


@pytest.fixture(scope="function")
def peer_network() -> PeerNetwork:
    return PeerNetwork()


@pytest.fixture(scope="function")
def dispatcher(peer_network: PeerNetwork) -> NotificationDispatcher:
    return NotificationDispatcher(
        timeout=5.0,
        max_concurrency=4,
        transport=httpx.MockTransport(peer_network.handler),
    )


# --- 비동기 테스트 클라이언트 픽스처 ---
@pytest_asyncio.fixture(scope="function")
async def client(
    db_session: AsyncSession, dispatcher: NotificationDispatcher
) -> AsyncGenerator[AsyncClient, None]:
    """
    인증되지 않은 사용자를 위한 AsyncClient 인스턴스를 생성하고,
    테스트용 DB 세션과 MockTransport 기반 알림 전송기를 주입합니다.
    """
    def override_get_session():
        yield db_session

    @asynccontextmanager
    async def override_session_context():
        yield db_session

    original_overrides = main_app.dependency_overrides.copy()
    try:
        main_app.dependency_overrides[get_session] = override_get_session
        main_app.dependency_overrides[deps.get_db_session] = override_get_session
        main_app.dependency_overrides[deps.get_session_factory] = lambda: override_session_context
        main_app.dependency_overrides[deps.get_notification_dispatcher] = lambda: dispatcher

        async with AsyncClient(transport=ASGITransport(app=main_app), base_url="http://test") as async_client:
            yield async_client

    finally:
        # 클라이언트 픽스처가 끝나면 오버라이드를 반드시 복원해야 합니다.
        main_app.dependency_overrides.clear()
        main_app.dependency_overrides.update(original_overrides)


# --- 회사 / 사용자 픽스처 ---
@pytest_asyncio.fixture(scope="function")
def company_factory(db_session: AsyncSession) -> Callable[..., Awaitable[corp_models.Company]]:
    """
    토픽과 구독 메타데이터를 지정하여 테스트 회사를 생성하는 팩토리 함수를 반환합니다.
    """
    async def _create_company(
        company_id: str,
        topics: Optional[List[str]] = None,
        server_information_endpoint: Optional[str] = None,
        key_for_server_information_endpoint: Optional[str] = None,
        **kwargs,
    ) -> corp_models.Company:
        company_data = {
            "company_id": company_id,
            "company_name": f"{company_id} Logistics",
            "company_type": corp_models.CompanyType.FORWARDER,
            "contact_name": "Contact Person",
            "contact_email": f"contact@{company_id}.example.com",
            "server_information_endpoint": server_information_endpoint,
            "key_for_server_information_endpoint": key_for_server_information_endpoint,
            **kwargs,
        }
        company = corp_models.Company(
            **company_data,
            topic_links=[corp_models.CompanyTopic(topic=topic) for topic in (topics or [])],
        )
        db_session.add(company)
        await db_session.commit()
        await db_session.refresh(company)
        return company
    return _create_company


@pytest_asyncio.fixture(scope="function")
def user_factory(db_session: AsyncSession) -> Callable[..., Awaitable[usr_models.User]]:
    async def _create_user(email: str, password: str, company_id: str, is_active: bool = True) -> usr_models.User:
        user = usr_models.User(
            email=email,
            full_name=email.split("@")[0],
            password_hash=get_password_hash(password),
            company_id=company_id,
            is_active=is_active,
        )
        db_session.add(user)
        await db_session.commit()
        await db_session.refresh(user)
        return user
    return _create_user


@pytest_asyncio.fixture(scope="function")
async def test_company(company_factory: Callable) -> corp_models.Company:
    """로그인 사용자가 소속된 게시 회사를 생성합니다."""
    return await company_factory("acme", company_pin="4321")


@pytest_asyncio.fixture(scope="function")
async def other_company(company_factory: Callable) -> corp_models.Company:
    return await company_factory("globex")


@pytest_asyncio.fixture(scope="function")
async def test_user(user_factory: Callable, test_company: corp_models.Company) -> usr_models.User:
    return await user_factory("alice@acme.example.com", "alicepass123", company_id=test_company.company_id)


@pytest_asyncio.fixture(scope="function")
async def other_user(user_factory: Callable, other_company: corp_models.Company) -> usr_models.User:
    return await user_factory("bob@globex.example.com", "bobpass1234", company_id=other_company.company_id)


# --- 인증 클라이언트 픽스처 ---
@pytest_asyncio.fixture(scope="function")
def authorized_client_factory(client: AsyncClient):
    """
    특정 사용자로 로그인된 AsyncClient를 생성하는 팩토리 함수를 반환합니다.
    의존성 오버라이드는 client 픽스처가 적용한 것을 그대로 사용합니다.
    """
    @asynccontextmanager
    async def _create_client_context(user: usr_models.User, password: str) -> AsyncGenerator[AsyncClient, None]:
        transport = ASGITransport(app=main_app)
        async with AsyncClient(transport=transport, base_url="http://test") as authed_client:
            login_data = {"username": user.email, "password": password}
            res = await authed_client.post("/auth/token", data=login_data)

            if res.status_code != 200:
                pytest.fail(f"Login failed for {user.email}: {res.text}")

            token = res.json()["access_token"]
            authed_client.headers["Authorization"] = f"Bearer {token}"
            yield authed_client

    return _create_client_context


@pytest_asyncio.fixture(scope="function")
async def authorized_client(
    authorized_client_factory: Callable[..., AsyncGenerator[AsyncClient, None]],
    test_user: usr_models.User,
) -> AsyncGenerator[AsyncClient, None]:
    """test_company 소속 사용자로 인증된 클라이언트를 반환합니다."""
    async with authorized_client_factory(test_user, "alicepass123") as authed_client:
        yield authed_client


@pytest_asyncio.fixture(scope="function")
async def other_client(
    authorized_client_factory: Callable[..., AsyncGenerator[AsyncClient, None]],
    other_user: usr_models.User,
) -> AsyncGenerator[AsyncClient, None]:
    """other_company 소속 사용자로 인증된 클라이언트를 반환합니다."""
    async with authorized_client_factory(other_user, "bobpass1234") as authed_client:
        yield authed_client
