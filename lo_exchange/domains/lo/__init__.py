# lo_exchange/domains/lo/__init__.py

"""
'lo' 도메인 패키지입니다.

각 회사가 게시하는 물류 객체(Airwaybill, Housemanifest, Housewaybill, Booking 등
JSON-LD 문서)의 저장, 조회, 부분 수정, 삭제와 생성 시의 구독자 알림을 담당합니다.

주요 서브모듈:
- `models.py`: 물류 객체 테이블 정의.
- `schemas.py`: 응답 스키마.
- `services.py`: ID/URL 결정과 PATCH 병합 규칙.
- `crud.py`: 물류 객체 CRUD 로직.
- `tasks.py`: 구독자 알림 백그라운드 작업 (BackgroundTasks / ARQ).
- `routers.py`: `/companies/{companyId}/los` 엔드포인트.
"""

__title__ = "LO Exchange Logistics Object Domain"
__description__ = "Stores logistics objects per company and alerts subscribed companies on creation."
__version__ = "0.1.0"
__all__ = ["models", "schemas", "services", "crud", "tasks", "routers"]
