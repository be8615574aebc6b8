# lo_exchange/services/notification.py

"""
새로 생성된 물류 객체를 해당 토픽을 구독한 다른 회사 서버로 전달하는 서비스 모듈입니다.

처리 흐름:
1. 토픽(물류 객체 타입)을 구독한 회사 목록을 조회합니다 (Topic Subscriber Index).
2. 회사마다 serverInformation 엔드포인트를 조회해 콜백 URL, 시크릿, Content-Type 을 얻습니다.
3. 조회에 성공한 회사의 콜백 URL 로 물류 객체를 POST 합니다.

모든 전송은 best-effort 입니다. 재시도, 순서 보장, 중복 제거가 없으며,
한 회사의 실패나 지연은 다른 회사의 처리에 영향을 주지 않습니다.
전체 결과를 집계해서 반환하지 않고, 각 시도의 결과는 로그로만 남습니다.
"""

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Annotated, Any, Dict, List, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from sqlmodel.ext.asyncio.session import AsyncSession

from lo_exchange.domains.corp import crud as corp_crud
from lo_exchange.domains.corp import models as corp_models

logger = logging.getLogger(__name__)

# 원 요청 메서드를 알리는 고정 헤더 값
ORIG_REQUEST_METHOD = "POST"


class PeerInfo(BaseModel):
    """
    구독 회사의 serverInformation?topic= 응답 중 알림 전송에 필요한 부분입니다.
    그 외 필드(@context, @id 등)도 그대로 보존합니다.
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    callback_url: str = Field(..., alias="callbackUrl", min_length=1)
    secret: str
    content_type: List[Annotated[str, Field(min_length=1)]] = Field(..., alias="contentType", min_length=1)
    # 구독 플래그는 전송에 쓰이지 않으므로 형식을 검사하지 않습니다.
    subscribed_to: Optional[Any] = Field(None, alias="subscribedTo")
    subscribe_to_status_updates: Optional[Any] = Field(None, alias="subscribeToStatusUpdates")
    cache_for: Optional[Any] = Field(None, alias="cacheFor")


@dataclass(frozen=True)
class PeerTarget:
    """알림 대상 회사의 스냅샷. 동시 실행되는 작업들이 ORM 객체를 공유하지 않도록 합니다."""
    company_id: str
    information_endpoint: str
    information_key: str

    @classmethod
    def from_company(cls, company: corp_models.Company) -> "PeerTarget":
        return cls(
            company_id=company.company_id,
            information_endpoint=company.server_information_endpoint,
            information_key=company.key_for_server_information_endpoint,
        )


class NotificationDispatcher:
    """
    구독 회사로의 알림 팬아웃(fan-out)을 수행합니다.

    Args:
        timeout: 외부 서버 호출 1건당 제한 시간(초). 응답 본문 수신까지 포함한 전체 시간입니다.
        max_concurrency: 동시에 처리할 구독 회사 수의 상한.
        transport: httpx 트랜스포트. 테스트에서 httpx.MockTransport 를 주입할 때 사용합니다.
    """

    def __init__(
        self,
        *,
        timeout: float,
        max_concurrency: int = 10,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = timeout
        self.max_concurrency = max_concurrency
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self.transport)

    async def dispatch(self, db: AsyncSession, lo_body: Dict[str, Any], topic: str) -> None:
        """
        토픽을 구독한 모든 회사에 물류 객체를 전달합니다.
        회사별 작업은 서로 독립적으로, 순서 없이 동시에 실행됩니다.
        """
        candidates = await corp_crud.company.find_subscribers(db, topic=topic)
        if not candidates:
            return

        targets = []
        for company in candidates:
            if company.can_be_notified:
                targets.append(PeerTarget.from_company(company))
            else:
                logger.info(
                    "Skipping subscriber %s for topic %s: no server information endpoint or key",
                    company.company_id, topic
                )
        if not targets:
            return

        semaphore = asyncio.Semaphore(self.max_concurrency)
        async with self._client() as client:
            results = await asyncio.gather(
                *(self._notify(client, semaphore, target, lo_body, topic) for target in targets),
                return_exceptions=True,
            )

        for target, result in zip(targets, results):
            if isinstance(result, BaseException):
                logger.error(
                    "Unexpected error while notifying subscriber %s for topic %s",
                    target.company_id, topic, exc_info=result
                )

    async def _notify(
        self,
        client: httpx.AsyncClient,
        semaphore: asyncio.Semaphore,
        target: PeerTarget,
        lo_body: Dict[str, Any],
        topic: str,
    ) -> None:
        async with semaphore:
            peer_info = await self.fetch_peer_info(client, target, topic)
            if peer_info is None:
                return
            await self.push(client, lo_body, peer_info, topic)

    async def fetch_peer_info(
        self, client: httpx.AsyncClient, target: PeerTarget, topic: str
    ) -> Optional[PeerInfo]:
        """
        구독 회사의 serverInformation 엔드포인트를 한 번 조회합니다.
        네트워크 오류, 200 이외의 응답, 해석할 수 없는 본문은 모두 None 으로 처리합니다.
        """
        try:
            response = await asyncio.wait_for(
                client.get(
                    target.information_endpoint,
                    params={"topic": topic},
                    headers={"x-api-key": target.information_key},
                ),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(
                "Unable to retrieve subscriber information from %s (%s): no response within %ss",
                target.information_endpoint, target.company_id, self.timeout
            )
            return None
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning(
                "Unable to retrieve subscriber information from %s (%s): %r",
                target.information_endpoint, target.company_id, e
            )
            return None

        if response.status_code != 200:
            logger.warning(
                "Unable to retrieve subscriber information from %s (%s): status %d",
                target.information_endpoint, target.company_id, response.status_code
            )
            return None

        try:
            return PeerInfo.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.warning(
                "Invalid subscriber information from %s (%s): %s",
                target.information_endpoint, target.company_id, e
            )
            return None

    async def push(
        self, client: httpx.AsyncClient, lo_body: Dict[str, Any], peer_info: PeerInfo, topic: str
    ) -> bool:
        """
        물류 객체를 구독 회사의 콜백 URL 로 한 번 POST 합니다. 200 응답만 성공으로 봅니다.
        멱등성 키가 없으므로 같은 객체를 두 번 보내면 상대 서버에 두 건이 저장됩니다.
        """
        headers = {
            "x-api-key": peer_info.secret,
            "Content-Type": peer_info.content_type[0],
            "Resource-Type": topic,
            "Orig-Request-Method": ORIG_REQUEST_METHOD,
        }
        try:
            response = await asyncio.wait_for(
                client.post(
                    peer_info.callback_url,
                    params={"topic": topic},
                    content=json.dumps(lo_body).encode("utf-8"),
                    headers=headers,
                ),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(
                "Unable to send logistics object to subscriber %s: no response within %ss",
                peer_info.callback_url, self.timeout
            )
            return False
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning("Unable to send logistics object to subscriber %s: %r", peer_info.callback_url, e)
            return False

        if response.status_code != 200:
            logger.warning(
                "Unable to send logistics object to subscriber %s: status %d",
                peer_info.callback_url, response.status_code
            )
            return False

        logger.info("Logistics object successfully sent to subscriber %s", peer_info.callback_url)
        return True
