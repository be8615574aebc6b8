# lo_exchange/services/__init__.py

"""
FastAPI 애플리케이션의 서비스 계층 패키지입니다.

각 도메인의 `crud.py` 가 데이터베이스와 직접 상호 작용하는 반면,
`services` 계층은 여러 도메인의 데이터와 외부 시스템 호출을 조합하는 상위 수준의 로직을 담당합니다.

- `notification.py`: 물류 객체 생성 시 토픽을 구독한 다른 회사 서버로 알림을 전송하는 서비스.
"""

__title__ = "LO Exchange Services"
__description__ = "Cross-domain services for LO Exchange FastAPI application."
__version__ = "0.1.0"
__all__ = []
