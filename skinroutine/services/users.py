"""User accounts. Passwords are stored as bcrypt hashes only."""

import logging
from typing import Iterable, Optional

import bcrypt

from skinroutine.errors import ConflictError, ValidationError
from skinroutine.repositories.base import Storage
from skinroutine.schemas import User, UserCreate

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


class UserService:
    def __init__(self, storage: Storage):
        self.storage = storage

    async def register(self, data: UserCreate) -> User:
        if data.confirm_password != data.password:
            raise ValidationError.for_field("confirmPassword", "Passwords don't match")

        if await self.storage.get_user_by_email(data.email):
            logger.warning(f"Registration rejected, email in use: {data.email}")
            raise ConflictError("Email already registered")
        if await self.storage.get_user_by_username(data.username):
            logger.warning(f"Registration rejected, username in use: {data.username}")
            raise ConflictError("Username already taken")

        user = await self.storage.create_user(data.username, data.email, hash_password(data.password))
        logger.info(f"Created new user: {user.username}")
        return user

    async def authenticate(self, email: str, password: str) -> Optional[User]:
        user = await self.storage.get_user_by_email(email)
        if not user or not verify_password(password, user.password_hash):
            logger.warning(f"Failed login for {email}")
            return None
        return user

    async def get_user(self, user_id: str) -> Optional[User]:
        return await self.storage.get_user(user_id)

    async def update_allergies(self, user_id: str, allergies: Iterable[str]) -> Optional[User]:
        cleaned: list[str] = []
        for allergy in allergies:
            allergy = allergy.strip()
            if allergy and allergy not in cleaned:
                cleaned.append(allergy)
        return await self.storage.update_user_allergies(user_id, cleaned)
