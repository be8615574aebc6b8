# lo_exchange/core/__init__.py

"""
FastAPI 애플리케이션의 핵심 구성 요소 패키지입니다.

- `config.py`: 애플리케이션의 설정 및 환경 변수 관리 (Pydantic Settings).
- `database.py`: 데이터베이스 연결, 세션 관리 (SQLModel 및 AsyncSQLAlchemy).
- `security.py`: 비밀번호 해싱, JWT 발급/검증, 공유 시크릿 비교.
- `dependencies.py`: FastAPI 의존성 주입에서 사용되는 공통 의존성 함수들.
- `errors.py`: 모든 오류 응답을 표준 오류 문서 형태로 변환하는 예외 핸들러.
"""

__title__ = "LO Exchange Core"
__description__ = "Core components for LO Exchange FastAPI application."
__version__ = "0.1.0"
__all__ = []
