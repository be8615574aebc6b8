# tests/services/test_notification.py

"""
구독자 알림 전송(NotificationDispatcher)에 대한 테스트입니다.
외부 회사 서버는 conftest 의 PeerNetwork(httpx.MockTransport)로 흉내 냅니다.
"""

import asyncio
import json
from typing import Callable

import httpx
import pytest
from sqlmodel.ext.asyncio.session import AsyncSession

from lo_exchange.domains.corp import crud as corp_crud
from lo_exchange.services.notification import NotificationDispatcher, PeerInfo, PeerTarget

PEER_URL = "https://peer.example.org"
LO_BODY = {"@id": "http://test/companies/acme/los/1", "@type": "Booking", "bookingNumber": "BK-1"}


def _target(key: str = "peer-key") -> PeerTarget:
    return PeerTarget(company_id="peer", information_endpoint=f"{PEER_URL}/serverInformation", information_key=key)


def _peer_info(**overrides) -> PeerInfo:
    data = {
        "callbackUrl": f"{PEER_URL}/callbackUrl",
        "secret": "peer-secret",
        "contentType": ["application/json", "application/ld+json"],
        "subscribedTo": "Booking",
    }
    data.update(overrides)
    return PeerInfo.model_validate(data)


# =============================================================================
# 1. Topic Subscriber Index
# =============================================================================
@pytest.mark.asyncio
async def test_find_subscribers_by_topic(db_session: AsyncSession, company_factory: Callable):
    await company_factory("booker", topics=["Booking", "Airwaybill"])
    await company_factory("airline", topics=["Airwaybill"])
    await company_factory("sleeping", topics=["Booking"], active=False)
    await company_factory("nothing")

    booking = await corp_crud.company.find_subscribers(db_session, topic="Booking")
    assert sorted(company.company_id for company in booking) == ["booker", "sleeping"]

    airwaybill = await corp_crud.company.find_subscribers(db_session, topic="Airwaybill")
    assert sorted(company.company_id for company in airwaybill) == ["airline", "booker"]

    assert await corp_crud.company.find_subscribers(db_session, topic="Housemanifest") == []


# =============================================================================
# 2. Peer Information Fetcher
# =============================================================================
@pytest.mark.asyncio
async def test_fetch_peer_info_success(dispatcher: NotificationDispatcher, peer_network):
    peer_network.add_subscriber(PEER_URL, key="peer-key", secret="peer-secret")

    async with httpx.AsyncClient(transport=httpx.MockTransport(peer_network.handler)) as client:
        peer_info = await dispatcher.fetch_peer_info(client, _target(), "Booking")

    assert peer_info is not None
    assert peer_info.callback_url == f"{PEER_URL}/callbackUrl"
    assert peer_info.secret == "peer-secret"
    assert peer_info.content_type[0] == "application/ld+json"
    assert peer_info.subscribed_to == "Booking"

    request = peer_network.requests[0]
    assert request.url.params["topic"] == "Booking"
    assert request.headers["x-api-key"] == "peer-key"


@pytest.mark.asyncio
async def test_fetch_peer_info_rejected_key_returns_none(dispatcher: NotificationDispatcher, peer_network):
    peer_network.add_subscriber(PEER_URL, key="peer-key", secret="peer-secret")

    async with httpx.AsyncClient(transport=httpx.MockTransport(peer_network.handler)) as client:
        assert await dispatcher.fetch_peer_info(client, _target(key="wrong"), "Booking") is None


@pytest.mark.asyncio
async def test_fetch_peer_info_unreachable_returns_none(dispatcher: NotificationDispatcher, peer_network):
    async with httpx.AsyncClient(transport=httpx.MockTransport(peer_network.handler)) as client:
        assert await dispatcher.fetch_peer_info(client, _target(), "Booking") is None


@pytest.mark.asyncio
@pytest.mark.parametrize("response", [
    httpx.Response(200, content=b"not json"),
    httpx.Response(200, json={"secret": "s", "contentType": ["application/json"]}),
    httpx.Response(200, json={"callbackUrl": f"{PEER_URL}/callbackUrl", "secret": "s", "contentType": []}),
    httpx.Response(200, json={"callbackUrl": f"{PEER_URL}/callbackUrl", "secret": "s", "contentType": [""]}),
    httpx.Response(200, json=["callbackUrl"]),
])
async def test_fetch_peer_info_unusable_body_returns_none(
    dispatcher: NotificationDispatcher, peer_network, response: httpx.Response
):
    peer_network.route("GET", f"{PEER_URL}/serverInformation", response)

    async with httpx.AsyncClient(transport=httpx.MockTransport(peer_network.handler)) as client:
        assert await dispatcher.fetch_peer_info(client, _target(), "Booking") is None


@pytest.mark.asyncio
async def test_fetch_peer_info_keeps_unexpected_flag_formats(dispatcher: NotificationDispatcher, peer_network):
    """구독 플래그 형식이 달라도 콜백 URL, 시크릿, Content-Type 이 있으면 사용할 수 있습니다."""
    peer_network.route("GET", f"{PEER_URL}/serverInformation", httpx.Response(200, json={
        "callbackUrl": f"{PEER_URL}/callbackUrl",
        "secret": "peer-secret",
        "contentType": ["application/ld+json"],
        "cacheFor": "P1D",
        "subscribeToStatusUpdates": "yes",
    }))

    async with httpx.AsyncClient(transport=httpx.MockTransport(peer_network.handler)) as client:
        peer_info = await dispatcher.fetch_peer_info(client, _target(), "Booking")

    assert peer_info is not None
    assert peer_info.cache_for == "P1D"
    assert peer_info.subscribe_to_status_updates == "yes"


@pytest.mark.asyncio
async def test_fetch_peer_info_slow_body_is_bounded_by_timeout(peer_network):
    """응답 본문을 조금씩 흘려보내는 서버도 timeout 안에 포기합니다."""
    async def drip():
        for _ in range(100):
            await asyncio.sleep(0.1)
            yield b" "

    peer_network.route("GET", f"{PEER_URL}/serverInformation", lambda request: httpx.Response(200, content=drip()))
    slow_dispatcher = NotificationDispatcher(timeout=0.3)

    loop = asyncio.get_running_loop()
    started = loop.time()
    async with httpx.AsyncClient(transport=httpx.MockTransport(peer_network.handler)) as client:
        assert await slow_dispatcher.fetch_peer_info(client, _target(), "Booking") is None
    assert loop.time() - started < 2.0


# =============================================================================
# 3. Push
# =============================================================================
@pytest.mark.asyncio
async def test_push_sends_headers_and_body(dispatcher: NotificationDispatcher, peer_network):
    peer_network.route("POST", f"{PEER_URL}/callbackUrl", httpx.Response(200, json={"message": "ok"}))

    async with httpx.AsyncClient(transport=httpx.MockTransport(peer_network.handler)) as client:
        assert await dispatcher.push(client, LO_BODY, _peer_info(), "Booking") is True

    request = peer_network.requests[0]
    assert request.method == "POST"
    assert request.url.params["topic"] == "Booking"
    assert request.headers["x-api-key"] == "peer-secret"
    assert request.headers["Content-Type"] == "application/json"
    assert request.headers["Resource-Type"] == "Booking"
    assert request.headers["Orig-Request-Method"] == "POST"
    assert json.loads(request.content) == LO_BODY


@pytest.mark.asyncio
async def test_push_non_200_is_failure(dispatcher: NotificationDispatcher, peer_network):
    peer_network.route("POST", f"{PEER_URL}/callbackUrl", httpx.Response(500))

    async with httpx.AsyncClient(transport=httpx.MockTransport(peer_network.handler)) as client:
        assert await dispatcher.push(client, LO_BODY, _peer_info(), "Booking") is False


@pytest.mark.asyncio
async def test_push_twice_delivers_twice(dispatcher: NotificationDispatcher, peer_network):
    """전송에는 중복 제거 키가 없으므로, 같은 객체를 두 번 보내면 상대 서버에 두 건이 도착합니다."""
    received = []

    def callback(request: httpx.Request) -> httpx.Response:
        received.append(json.loads(request.content))
        return httpx.Response(200, json={"message": "ok"})

    peer_network.route("POST", f"{PEER_URL}/callbackUrl", callback)

    async with httpx.AsyncClient(transport=httpx.MockTransport(peer_network.handler)) as client:
        assert await dispatcher.push(client, LO_BODY, _peer_info(), "Booking") is True
        assert await dispatcher.push(client, LO_BODY, _peer_info(), "Booking") is True

    assert received == [LO_BODY, LO_BODY]


# =============================================================================
# 4. Notification Dispatcher
# =============================================================================
@pytest.mark.asyncio
async def test_dispatch_without_subscribers_makes_no_calls(
    db_session: AsyncSession, dispatcher: NotificationDispatcher, peer_network
):
    await dispatcher.dispatch(db_session, LO_BODY, "Booking")
    assert peer_network.requests == []


@pytest.mark.asyncio
async def test_dispatch_notifies_inactive_subscriber(
    db_session: AsyncSession, dispatcher: NotificationDispatcher, company_factory: Callable, peer_network
):
    peer_network.add_subscriber(PEER_URL, key="peer-key", secret="peer-secret")
    await company_factory(
        "peer",
        topics=["Booking"],
        server_information_endpoint=f"{PEER_URL}/serverInformation",
        key_for_server_information_endpoint="peer-key",
        active=False,
    )

    await dispatcher.dispatch(db_session, LO_BODY, "Booking")

    assert len(peer_network.calls("POST", f"{PEER_URL}/callbackUrl")) == 1


@pytest.mark.asyncio
async def test_dispatch_failures_are_isolated(
    db_session: AsyncSession, dispatcher: NotificationDispatcher, company_factory: Callable, peer_network
):
    """조회 실패, 전송 실패, 정상 구독 회사가 섞여 있어도 dispatch 는 예외 없이 끝나고 정상 회사는 알림을 받습니다."""
    peer_network.add_subscriber(PEER_URL, key="peer-key", secret="peer-secret")
    peer_network.add_subscriber("https://broken.example.org", key="broken-key", secret="s", callback_status=503)
    await company_factory(
        "peer", topics=["Booking"],
        server_information_endpoint=f"{PEER_URL}/serverInformation",
        key_for_server_information_endpoint="peer-key",
    )
    await company_factory(
        "broken", topics=["Booking"],
        server_information_endpoint="https://broken.example.org/serverInformation",
        key_for_server_information_endpoint="broken-key",
    )
    await company_factory(
        "gone", topics=["Booking"],
        server_information_endpoint="https://gone.example.org/serverInformation",
        key_for_server_information_endpoint="gone-key",
    )
    await company_factory(
        "bad-url", topics=["Booking"],
        server_information_endpoint="not a url",
        key_for_server_information_endpoint="bad-key",
    )

    await dispatcher.dispatch(db_session, LO_BODY, "Booking")

    assert len(peer_network.calls("POST", f"{PEER_URL}/callbackUrl")) == 1
    assert len(peer_network.calls("POST", "https://broken.example.org/callbackUrl")) == 1
    assert peer_network.calls("POST", "https://gone.example.org/callbackUrl") == []


@pytest.mark.asyncio
async def test_dispatch_slow_subscriber_does_not_block_others(
    db_session: AsyncSession, company_factory: Callable, peer_network
):
    """응답하지 않는 구독 회사가 있어도 timeout 이 지나면 다음 회사가 알림을 받습니다."""
    peer_network.add_subscriber(PEER_URL, key="peer-key", secret="peer-secret")
    peer_network.add_subscriber("https://slow.example.org", key="slow-key", secret="s")
    await company_factory(
        "slow", topics=["Booking"],
        server_information_endpoint="https://slow.example.org/serverInformation",
        key_for_server_information_endpoint="slow-key",
    )
    await company_factory(
        "peer", topics=["Booking"],
        server_information_endpoint=f"{PEER_URL}/serverInformation",
        key_for_server_information_endpoint="peer-key",
    )

    async def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "slow.example.org":
            await asyncio.sleep(30)
        return peer_network.handler(request)

    # 동시 실행 슬롯이 하나뿐이라 느린 회사가 슬롯을 놓아야 다른 회사가 처리됩니다.
    slow_dispatcher = NotificationDispatcher(
        timeout=0.3, max_concurrency=1, transport=httpx.MockTransport(handler)
    )

    loop = asyncio.get_running_loop()
    started = loop.time()
    await slow_dispatcher.dispatch(db_session, LO_BODY, "Booking")
    assert loop.time() - started < 3.0

    assert len(peer_network.calls("POST", f"{PEER_URL}/callbackUrl")) == 1
    assert peer_network.calls("POST", "https://slow.example.org/callbackUrl") == []
