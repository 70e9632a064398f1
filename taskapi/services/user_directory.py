"""User Directory - lookups and registration for user accounts"""

from typing import Optional

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from taskapi.auth.password import generate_api_key, hash_password
from taskapi.exceptions import ConflictError
from taskapi.models.user import User

logger = structlog.get_logger()


class UserDirectory:
    """Table gateway for the ``user`` table"""

    def __init__(self, db: AsyncSession):
        """Initialize UserDirectory

        Args:
            db: Database session
        """
        self.db = db

    async def find_by_api_key(self, api_key: str) -> Optional[User]:
        """Get the user owning an API key

        Args:
            api_key: Key from the X-API-Key header

        Returns:
            Optional[User]: Matching user or None
        """
        result = await self.db.execute(select(User).where(User.api_key == api_key))
        return result.scalar_one_or_none()

    async def find_by_username(self, username: str) -> Optional[User]:
        """Get a user by username"""
        result = await self.db.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def find_by_id(self, user_id: int) -> Optional[User]:
        """Get a user by primary key"""
        return await self.db.get(User, user_id)

    async def register(self, name: str, username: str, password: str) -> User:
        """Create a user account with a freshly generated API key

        Args:
            name: Display name
            username: Unique login name
            password: Plain text password, stored only as a bcrypt hash

        Returns:
            User: Created user, including its API key

        Raises:
            ConflictError: If the username is already registered
        """
        if await self.find_by_username(username) is not None:
            raise ConflictError("Username already registered", details={"username": username})

        user = User(
            name=name,
            username=username,
            password_hash=hash_password(password),
            api_key=generate_api_key(),
        )
        self.db.add(user)

        try:
            await self.db.commit()
        except IntegrityError as e:
            # Lost a race with a concurrent registration of the same username
            await self.db.rollback()
            raise ConflictError("Username already registered", details={"username": username}) from e

        await self.db.refresh(user)

        logger.info("User registered", user_id=user.id, username=user.username)
        return user
