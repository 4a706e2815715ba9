from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession
from app.database import get_db as db_session
from app.config import settings
from app.models.user import User as UserModel
from app.schemas.user import TokenData
from app.services.users import get_user_by_id
from app.utils.security import decode_access_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="token", auto_error=False)

def get_db(db: AsyncSession = Depends(db_session)):
    return db


def session_token(request: Request, bearer: str | None = None) -> str | None:
    """Bearer header wins over the session cookie."""
    return bearer or request.cookies.get(settings.SESSION_COOKIE_NAME)


def credentials_exception() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_identity(
    request: Request,
    token: str | None = Depends(oauth2_scheme)
) -> TokenData:
    identity = decode_access_token(session_token(request, token))
    if identity is None:
        raise credentials_exception()
    return identity


async def get_current_user(
    db: AsyncSession = Depends(get_db),
    identity: TokenData = Depends(get_current_identity)
) -> UserModel:
    user = await get_user_by_id(db, identity.user_id)
    if user is None:
        raise credentials_exception()
    return user
