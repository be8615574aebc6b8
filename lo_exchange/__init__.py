# lo_exchange/__init__.py

"""
LO Exchange FastAPI 애플리케이션의 메인 패키지입니다.

등록된 회사들 사이에서 물류 객체(Logistics Object: Airwaybill, Booking 등)를
게시하고, 해당 토픽을 구독한 다른 회사 서버로 알림을 전달하는 서비스입니다.

- `core`: 설정, 데이터베이스 연결, 보안, 공통 오류 처리.
- `domains`: 회사(corp), 사용자(usr), 물류 객체(lo), 구독 수신(sub) 도메인.
- `services`: 구독자 알림 전송(notification) 등 도메인을 가로지르는 로직.
"""

APP_NAME = "LO Exchange API"
APP_VERSION = "0.1.0"

__version__ = APP_VERSION
__title__ = APP_NAME
__description__ = "Logistics object exchange between companies in a federated network."
__license__ = "MIT"
__all__ = []
