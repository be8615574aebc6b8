# lo_exchange/main.py

import logging
from typing import AsyncGenerator
from contextlib import asynccontextmanager
from arq.connections import create_pool, RedisSettings

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel.ext.asyncio.session import AsyncSession
from fastapi import FastAPI, Depends, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware

# 핵심 설정 및 데이터베이스 모듈 임포트
from lo_exchange.core.config import settings
from lo_exchange.core.database import engine, create_db_and_tables
from lo_exchange.core import dependencies as deps
from lo_exchange.core.errors import register_exception_handlers

# 태스크 모듈 임포트
from lo_exchange.domains.lo import tasks as lo_tasks

# 각 도메인의 라우터들을 임포트합니다.
from lo_exchange.domains.corp.routers import router as corp_router
from lo_exchange.domains.usr.routers import router as usr_router
from lo_exchange.domains.lo.routers import router as lo_router
from lo_exchange.domains.sub.routers import router as sub_router

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG_MODE else logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# ARQ 워커가 실행할 태스크 함수 목록
worker_functions = [
    lo_tasks.dispatch_logistics_object_task,
]


# ARQ 워커 설정 클래스
# 실행: arq lo_exchange.main.ArqWorkerSettings
class ArqWorkerSettings:
    redis_settings = RedisSettings(host=settings.REDIS_HOST, port=settings.REDIS_PORT)
    functions = worker_functions


# -- 애플리케이션 수명 주기 이벤트 핸들러 --
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI 애플리케이션의 수명 주기 이벤트(데이터베이스, ARQ Redis)를 함께 처리합니다.
    ARQ 를 사용하지 않으면 app.state.redis 는 None 이며, 구독자 알림은 BackgroundTasks 로 실행됩니다.
    """
    logger.info("FastAPI 애플리케이션 시작 중...")
    app.state.redis = None

    # 1. 데이터베이스 테이블 생성
    if settings.CREATE_TABLES_ON_STARTUP:
        await create_db_and_tables()

    # 2. ARQ Redis 커넥션 풀 생성 및 app.state에 할당
    if settings.ARQ_ENABLED:
        logger.info("ARQ Redis 커넥션 풀을 생성합니다...")
        app.state.redis = await create_pool(ArqWorkerSettings.redis_settings)
        logger.info("ARQ Redis 커넥션 풀 생성 완료.")

    yield  # 애플리케이션 실행

    logger.info("FastAPI 애플리케이션 종료 중...")
    # 1. ARQ Redis 연결 풀 종료
    if app.state.redis:
        await app.state.redis.close()
        logger.info("ARQ Redis 연결 풀 종료 완료.")

    # 2. 데이터베이스 연결 풀 종료
    await engine.dispose()
    logger.info("데이터베이스 연결 풀 종료 완료.")


# -- FastAPI 애플리케이션 인스턴스 생성 --
app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
    docs_url="/docs",       # Swagger UI
    redoc_url="/redoc",     # ReDoc
    lifespan=lifespan
)

register_exception_handlers(app)

# -- CORS (Cross-Origin Resource Sharing) 미들웨어 설정 --
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# -- 도메인 라우터 포함 --
# 경로는 각 라우터에 정의되어 있습니다 (/companies, /auth, /callbackUrl 등).
app.include_router(corp_router)
app.include_router(usr_router)
app.include_router(lo_router)
app.include_router(sub_router)


# -- 루트 엔드포인트 --
@app.get("/", summary="API Root", response_description="Welcome message and documentation link.")
async def read_root():
    return {"message": f"Welcome to {settings.APP_NAME}. Visit /docs for interactive API documentation."}


# -- 헬스 체크 엔드포인트 --
@app.get("/health-check", summary="Health Check", response_description="Status of the application and database connection.")
async def health_check(session: AsyncSession = Depends(deps.get_db_session)):
    """
    데이터베이스 연결을 테스트하여 서비스의 정상 작동 여부를 확인합니다.
    """
    try:
        result = await session.execute(text("SELECT 1"))
        if result.scalar() == 1:
            return {"status": "ok", "database_connection": "successful"}
    except SQLAlchemyError as e:
        logger.warning("Database health check failed: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Database connection error during health check: {e}"
        )
    raise HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Database health check failed: No result from test query"
    )
