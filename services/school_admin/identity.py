# services/school_admin/identity.py
import enum
import logging
import uuid
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from shared.auth import Role, get_password_hash, verify_password
from services.school_admin.exceptions import EntityNotFound
from services.school_admin.models.accounts import UserAccount

logger = logging.getLogger(__name__)


class AccountDeletion(str, enum.Enum):
    DELETED = "deleted"
    NOT_FOUND = "not_found"
    TRANSPORT_ERROR = "transport_error"


class IdentityProvider:
    """Account directory backing teacher and student logins.

    Accounts are written through the caller's session so they commit or roll
    back together with the entity row that shares their id.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_account(
        self, *, username: str, password: str, first_name: str, last_name: str, role: Role
    ) -> str:
        account = UserAccount(
            id=str(uuid.uuid4()),
            username=username,
            hashed_password=get_password_hash(password),
            first_name=first_name,
            last_name=last_name,
            role=role,
        )
        self.db.add(account)
        await self.db.flush()
        logger.info("Created %s account %s (%s)", role.value, account.id, username)
        return account.id

    async def update_account(
        self,
        account_id: str,
        *,
        username: str,
        first_name: str,
        last_name: str,
        password: Optional[str] = None,
    ) -> None:
        account = await self.db.get(UserAccount, account_id)
        if account is None:
            raise EntityNotFound(f"No account {account_id}")
        account.username = username
        account.first_name = first_name
        account.last_name = last_name
        if password:
            account.hashed_password = get_password_hash(password)
        await self.db.flush()

    async def delete_account(self, account_id: str) -> AccountDeletion:
        account = await self.db.get(UserAccount, account_id)
        if account is None:
            return AccountDeletion.NOT_FOUND
        try:
            await self.db.delete(account)
            await self.db.flush()
        except SQLAlchemyError:
            logger.exception("Could not delete account %s", account_id)
            await self.db.rollback()
            return AccountDeletion.TRANSPORT_ERROR
        return AccountDeletion.DELETED

    async def authenticate(self, username: str, password: str) -> Optional[UserAccount]:
        result = await self.db.execute(select(UserAccount).where(UserAccount.username == username))
        account = result.scalars().first()
        if not account or not verify_password(password, account.hashed_password):
            return None
        return account
