# lo_exchange/domains/__init__.py

"""
비즈니스 도메인 패키지입니다.

- `corp`: 회사 디렉터리와 구독 토픽.
- `usr`: 회사 소속 사용자와 인증.
- `lo`: 물류 객체 저장과 구독자 알림.
- `sub`: 게시자로부터의 물류 객체 수신과 서버 정보 제공.
"""
