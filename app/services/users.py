import logging

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.exc import IntegrityError
from fastapi import HTTPException, status

from app.models.user import User
from app.schemas.user import UserCreate
from app.utils.sanitization import normalize_email
from app.utils.security import get_password_hash, verify_password

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL = "Email already exists"


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    result = await db.execute(select(User).filter(User.email == normalize_email(email)))
    return result.scalars().first()


async def get_user_by_id(db: AsyncSession, user_id: int) -> User | None:
    result = await db.execute(select(User).filter(User.user_id == user_id))
    return result.scalars().first()


async def register_user(db: AsyncSession, user: UserCreate) -> User:
    if await get_user_by_email(db, user.email):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=DUPLICATE_EMAIL)

    new_user = User(
        name=user.name,
        email=normalize_email(user.email),
        hashed_password=get_password_hash(user.password),
    )
    db.add(new_user)
    try:
        await db.flush()
    except IntegrityError:
        # Lost a race against a concurrent registration
        await db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=DUPLICATE_EMAIL)
    logger.info("Registered user %s", new_user.user_id)
    return new_user


async def authenticate_user(db: AsyncSession, email: str, password: str) -> User | None:
    """Return the user only if the email exists and the password verifies."""
    user = await get_user_by_email(db, email)
    if not user or not verify_password(password, user.hashed_password):
        return None
    return user
