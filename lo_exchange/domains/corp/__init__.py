# lo_exchange/domains/corp/__init__.py

"""
'corp' 도메인 패키지입니다.

데이터 교환에 참여하는 회사들의 디렉터리를 관리합니다.
회사 프로필, 서버 정보 엔드포인트와 그 접근 키, 구독 토픽 목록,
그리고 사용자 가입에 필요한 회사 PIN 을 포함합니다.

주요 서브모듈:
- `models.py`: 회사 및 회사-토픽 테이블 정의.
- `schemas.py`: 요청/응답 Pydantic 모델 (camelCase).
- `crud.py`: 회사 CRUD 와 토픽 구독자 조회.
- `routers.py`: `/companies` 엔드포인트.
"""

__title__ = "LO Exchange Company Directory Domain"
__description__ = "Manages participating companies, their server information endpoints and subscribed topics."
__version__ = "0.1.0"
__all__ = ["models", "schemas", "crud", "routers"]
