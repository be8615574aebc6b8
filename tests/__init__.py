# tests/__init__.py

"""
LO Exchange 애플리케이션의 테스트 스위트 패키지입니다.

- `domains/`: 도메인별(corp, usr, lo, sub) API 및 로직 테스트.
- `services/`: 구독자 알림 전송 서비스 테스트.
- `conftest.py`: in-memory SQLite DB, 테스트 클라이언트, 가짜 외부 회사 서버(PeerNetwork) 픽스처.
"""

__title__ = "LO Exchange API Tests"
__version__ = "0.1.0"
__all__ = []
