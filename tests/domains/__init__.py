# tests/domains/__init__.py

"""
도메인별 테스트 패키지입니다.

- `test_corp.py`: 회사 등록/조회/수정/삭제.
- `test_usr.py`: 사용자 등록과 로그인.
- `test_lo.py`, `test_lo_services.py`: 물류 객체 API, ID 결정, PATCH 병합 규칙, 구독자 알림.
- `test_sub.py`: callbackUrl 수신, losFromPublishers, serverInformation.
"""
