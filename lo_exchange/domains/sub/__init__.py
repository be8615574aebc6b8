# lo_exchange/domains/sub/__init__.py

"""
'sub' 도메인 패키지입니다.

이 서버가 다른 서버(게시자)를 구독하는 쪽의 기능을 담당합니다.
게시자가 callbackUrl 로 보내온 물류 객체의 저장과 조회,
그리고 게시자가 읽어 가는 서버 정보 / 구독 정보 문서를 제공합니다.

주요 서브모듈:
- `models.py`: 수신 기록 테이블 정의.
- `schemas.py`: 수신 기록 응답 스키마.
- `crud.py`: 수신 기록 추가와 토픽별 조회.
- `services.py`: ServerInformation / Subscription 문서 생성.
- `routers.py`: `/callbackUrl`, `/losFromPublishers`, `/serverInformation` 엔드포인트.
"""

__title__ = "LO Exchange Subscription Domain"
__description__ = "Receives logistics objects from publishers and describes this server to them."
__version__ = "0.1.0"
__all__ = ["models", "schemas", "crud", "services", "routers"]
