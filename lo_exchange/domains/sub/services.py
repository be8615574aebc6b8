# lo_exchange/domains/sub/services.py

"""
다른 서버(게시자)가 이 서버를 구독할 때 읽어 가는 JSON-LD 문서를 만드는 함수 모음입니다.
"""

from typing import Any, Dict, List

from lo_exchange.domains.lo.models import LOGISTICS_OBJECT_TYPES

CONTENT_TYPES: List[str] = ["application/json", "application/ld+json"]


def build_server_information(
    *, server_url: str, vocab: str, company_name: str, iata_cargo_agent_code: str
) -> Dict[str, Any]:
    """topic 없이 조회했을 때 반환하는 ServerInformation 문서입니다."""
    server_url = server_url.rstrip("/")
    return {
        "@context": {"@vocab": vocab},
        "@id": f"{server_url}/serverInformation",
        "@type": "ServerInformation",
        "company": {
            "@type": "Company",
            "name": company_name,
            "IATACargoAgentCode": iata_cargo_agent_code,
        },
        "serverEndpoint": server_url,
        "supportedLogisticsObjects": [f"{vocab.rstrip('/')}/{lo_type}" for lo_type in LOGISTICS_OBJECT_TYPES],
        "contentTypes": list(CONTENT_TYPES),
    }


def build_subscription(
    *, topic: str, server_url: str, vocab: str, secret: str, cache_for: int
) -> Dict[str, Any]:
    """
    topic 을 지정해 조회했을 때 반환하는 Subscription 문서입니다.
    게시자는 이 문서의 callbackUrl 과 secret 으로 물류 객체를 전송합니다.
    """
    server_url = server_url.rstrip("/")
    return {
        "@context": {"@vocab": vocab},
        "@id": f"{server_url}/serverInformation?topic={topic}",
        "@type": "Subscription",
        "subscribedTo": topic,
        "callbackUrl": f"{server_url}/callbackUrl",
        "contentType": list(CONTENT_TYPES),
        "secret": secret,
        "subscribeToStatusUpdates": True,
        "cacheFor": cache_for,
    }
