# lo_exchange/domains/usr/__init__.py

"""
'usr' 도메인 패키지입니다.

회사에 소속된 사용자 계정과 로그인(JWT Access Token 발급)을 담당합니다.
사용자는 회사 PIN 을 알고 있어야 해당 회사 아래에 등록할 수 있습니다.

주요 서브모듈:
- `models.py`: 사용자 테이블 정의.
- `schemas.py`: 사용자/토큰 Pydantic 모델.
- `crud.py`: 사용자 CRUD 와 인증 로직.
- `routers.py`: `/auth`, `/companies/{companyId}/users` 엔드포인트.
"""

__title__ = "LO Exchange User Domain"
__description__ = "Manages company users and bearer token authentication."
__version__ = "0.1.0"
__all__ = ["models", "schemas", "crud", "routers"]
