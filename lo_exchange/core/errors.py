# lo_exchange/core/errors.py

"""
애플리케이션 전역 예외 핸들러를 등록하는 모듈입니다.

라우터와 CRUD 에서 발생한 HTTPException, 요청 유효성 검사 오류, 처리되지 않은 예외를
모두 동일한 JSON-LD Error 문서로 응답합니다.

    {"@context": {"@vocab": ...}, "@type": "Error",
     "title": "<message>", "details": [{"code": <status>, "message": "<message>"}]}
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from lo_exchange.core.config import settings

logger = logging.getLogger(__name__)

ERROR_MEDIA_TYPE = "application/ld+json"


def error_document(code: int, title: str, details: Optional[List[Dict[str, Any]]] = None) -> Dict[str, Any]:
    return {
        "@context": {"@vocab": settings.JSONLD_VOCAB},
        "@type": "Error",
        "title": title,
        "details": details if details is not None else [{"code": code, "message": title}],
    }


def error_response(
    code: int,
    title: str,
    details: Optional[List[Dict[str, Any]]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=code,
        content=jsonable_encoder(error_document(code, title, details)),
        media_type=ERROR_MEDIA_TYPE,
        headers=headers,
    )


def _format_location(loc) -> str:
    return ".".join(str(part) for part in loc)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """요청 유효성 검사 오류는 400 으로 응답하며, 오류마다 하나의 detail 을 만듭니다."""
    details = [
        {"code": status.HTTP_400_BAD_REQUEST, "message": f"{_format_location(error.get('loc', ()))}: {error.get('msg')}"}
        for error in exc.errors()
    ]
    return error_response(status.HTTP_400_BAD_REQUEST, "Bad Request", details=details)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
