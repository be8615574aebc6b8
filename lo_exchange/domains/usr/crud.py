# lo_exchange/domains/usr/crud.py

"""
'usr' 도메인의 CRUD 작업을 담당하는 모듈입니다.
"""

from typing import List, Optional

from sqlmodel.ext.asyncio.session import AsyncSession
from fastapi import HTTPException, status

from lo_exchange.core.crud_base import CRUDBase
from lo_exchange.core.security import get_password_hash, verify_password, verify_shared_secret
from lo_exchange.domains.corp import models as corp_models
from . import models as usr_models
from . import schemas as usr_schemas


class CRUDUser(CRUDBase[usr_models.User, usr_schemas.UserCreate, usr_schemas.UserCreate]):
    def __init__(self):
        super().__init__(model=usr_models.User)

    async def get_by_email(self, db: AsyncSession, *, email: str) -> Optional[usr_models.User]:
        """이메일로 사용자를 조회합니다."""
        return await self.get_by_attribute(db, attribute="email", value=email)

    async def get_by_company(self, db: AsyncSession, *, company_id: str) -> List[usr_models.User]:
        return await self.get_multi(db, company_id=company_id)

    async def create(
        self, db: AsyncSession, *, obj_in: usr_schemas.UserCreate, company: corp_models.Company
    ) -> usr_models.User:
        """
        회사 PIN 을 확인한 뒤 새로운 사용자를 생성합니다.
        PIN 이 틀리면 401, 이메일이 이미 등록되어 있으면 400 을 반환합니다.
        """
        if not verify_shared_secret(obj_in.company_pin, company.company_pin):
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Incorrect company PIN")
        if await self.get_by_email(db, email=obj_in.email):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already registered")

        db_user = usr_models.User(
            email=obj_in.email,
            full_name=obj_in.full_name,
            password_hash=get_password_hash(obj_in.password),
            company_id=company.company_id,
        )
        db.add(db_user)
        await db.commit()
        await db.refresh(db_user)
        return db_user

    async def authenticate(self, db: AsyncSession, *, email: str, password: str) -> Optional[usr_models.User]:
        """이메일과 비밀번호를 사용하여 사용자를 인증합니다."""
        user = await self.get_by_email(db, email=email)
        if not user:
            return None
        if not verify_password(password, user.password_hash):
            return None
        return user


user = CRUDUser()
