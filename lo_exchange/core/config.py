# lo_exchange/core/config.py

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict
import os

# 프로젝트의 루트 디렉토리 경로를 계산합니다.
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


class Settings(BaseSettings):
    """
    애플리케이션의 모든 설정을 정의하는 Pydantic BaseSettings 모델입니다.
    환경 변수 및 .env 파일에서 값을 자동으로 로드하며, 로드 이후에는 변경할 수 없습니다.
    """

    # --- Pydantic Settings 설정 ---
    model_config = SettingsConfigDict(
        env_file=os.path.join(BASE_DIR, '.env'),  # 프로젝트 루트의 .env 파일을 명시적으로 지정
        env_file_encoding='utf-8',
        extra='ignore',                      # .env 파일에 정의되었지만 모델에 없는 변수는 무시
        case_sensitive=True,                 # 환경 변수 이름 대소문자 구분
        frozen=True,                         # 시작 시 한 번 로드된 값은 변경 불가
    )

    # --- 애플리케이션 기본 설정 ---
    APP_NAME: str = "LO Exchange API"
    APP_VERSION: str = "0.1.0"
    APP_DESCRIPTION: str = "Logistics object exchange between companies in a federated network"
    APP_ENV: str = Field("development", description="Application environment (e.g., development, production, testing)")
    DEBUG_MODE: bool = Field(False, description="Enable debug mode for detailed logging and error messages")

    # --- 데이터베이스 설정 ---
    DATABASE_URL: SecretStr = Field(..., description="Async database connection URL (e.g. postgresql+asyncpg://...)")
    CREATE_TABLES_ON_STARTUP: bool = Field(True, description="Create missing tables when the application starts")

    # --- JWT (JSON Web Token) 설정 ---
    SECRET_KEY: SecretStr = Field(..., description="Secret key for JWT token signing. Keep this highly secure!")
    ALGORITHM: str = Field("HS256", description="Algorithm used for JWT signing (e.g., HS256)")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(30, description="Access token expiration time in minutes")

    # --- 서버 식별 정보 (serverInformation 응답 및 canonical URL 생성) ---
    SERVER_URL: str = Field("http://localhost:8000", description="Public base URL of this server, without trailing slash")
    COMPANY_NAME: str = Field("LO Exchange", description="Name of the company operating this server")
    IATA_CARGO_AGENT_CODE: str = Field("", description="IATA cargo agent code of the operating company")
    CACHE_FOR: int = Field(86400, description="Seconds peers may cache the subscription details")
    JSONLD_VOCAB: str = Field("https://onerecord.example.org", description="@vocab of the JSON-LD documents and error bodies served by this server")

    # --- 공유 시크릿 ---
    # KEY_FOR_SERVER_INFORMATION: 다른 서버가 /serverInformation 을 조회할 때 사용하는 키
    # SUBSCRIPTION_SECRET: 다른 서버가 /callbackUrl 로 물류 객체를 보낼 때 사용하는 키
    # SERVER_OWN_SECRET: 이 서버 운영자만 사용하는 관리용 키 (/companies 목록, /losFromPublishers)
    KEY_FOR_SERVER_INFORMATION: SecretStr = Field(..., description="Key peers must send to read /serverInformation")
    SUBSCRIPTION_SECRET: SecretStr = Field(..., description="Secret peers must send when pushing to /callbackUrl")
    SERVER_OWN_SECRET: SecretStr = Field(..., description="Server operator secret for administrative listings")
    DEFAULT_COMPANY_PIN: str = Field("1234", description="PIN assigned to companies registered without one")

    # --- 구독자 알림 전송 설정 ---
    PEER_REQUEST_TIMEOUT_SECONDS: float = Field(10.0, gt=0, description="Timeout for each outbound call to a peer server")
    DISPATCH_MAX_CONCURRENCY: int = Field(10, ge=1, description="Maximum number of peers notified at the same time")

    # --- ARQ (Redis 작업 큐) 설정 ---
    ARQ_ENABLED: bool = Field(False, description="Run subscriber notification on the ARQ worker instead of in-process")
    REDIS_HOST: str = Field("localhost", description="Redis host for the ARQ pool")
    REDIS_PORT: int = Field(6379, description="Redis port for the ARQ pool")


settings = Settings()
