# lo_exchange/domains/lo/services.py

"""
물류 객체 문서를 다루는 순수 함수 모음입니다.

- `resolve_identity`: 새 물류 객체의 ID 와 canonical URL 결정.
- `merge_logistics_object`: PATCH 요청 본문을 기존 문서에 병합.
"""

import copy
import uuid
from typing import Any, Dict, Tuple

from fastapi import HTTPException, status

ID_FIELD = "@id"
TYPE_FIELD = "@type"


def build_lo_url(base_url: str, company_id: str, lo_id: str) -> str:
    return f"{base_url.rstrip('/')}/companies/{company_id}/los/{lo_id}"


def get_id_from_url(url: str) -> str:
    """URL 의 마지막 경로 조각을 반환합니다. 끝의 '/' 는 무시합니다."""
    return url.rstrip("/").split("/")[-1]


def resolve_identity(body: Dict[str, Any], company_id: str, base_url: str) -> Tuple[str, str]:
    """
    물류 객체의 (lo_id, canonical URL) 을 결정합니다.

    - 본문에 '@id' 가 있으면 그 값이 canonical URL 이고, 마지막 경로 조각이 ID 입니다.
      기존 객체와의 중복 여부는 확인하지 않습니다.
    - 없으면 UUID4 를 새로 만들고 `{base_url}/companies/{company_id}/los/{id}` 를 URL 로 사용합니다.

    '@type' 이 없거나 '@id' 가 올바르지 않으면 400 을 발생시킵니다.
    """
    lo_type = body.get(TYPE_FIELD)
    if not isinstance(lo_type, str) or not lo_type.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Logistics object should contain @type field: Airwaybill, Housemanifest, Housewaybill or Booking",
        )

    supplied_url = body.get(ID_FIELD)
    if supplied_url is None:
        lo_id = str(uuid.uuid4())
        return lo_id, build_lo_url(base_url, company_id, lo_id)

    if not isinstance(supplied_url, str) or not get_id_from_url(supplied_url):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="@id of a logistics object should be a URL ending with the logistics object id",
        )
    return get_id_from_url(supplied_url), supplied_url


def merge_logistics_object(existing: Dict[str, Any], changes: Dict[str, Any]) -> Dict[str, Any]:
    """
    PATCH 본문을 기존 문서에 얕게 병합한 새 문서를 반환합니다. 입력 dict 는 변경하지 않습니다.

    | 들어온 값            | 기존 값          | 결과                  |
    |---------------------|-----------------|----------------------|
    | '@id' 키            | -               | 무시 (식별자는 불변)    |
    | 배열                 | 배열             | 기존 + 새 값 (append) |
    | 배열                 | 없음 / 배열 아님  | 새 값                 |
    | 스칼라 / 객체         | -               | 새 값으로 덮어쓰기      |
    """
    merged = copy.deepcopy(existing)
    for key, value in changes.items():
        if key == ID_FIELD:
            continue
        current = merged.get(key)
        if isinstance(value, list) and isinstance(current, list):
            merged[key] = current + copy.deepcopy(value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged
