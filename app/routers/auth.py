import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.ext.asyncio import AsyncSession
from app.dependencies import get_db
from app.models.user import User as UserModel
from app.schemas.user import LoginRequest, Token, UserCreate
from app.services import users as user_service
from app.utils.security import create_access_token
from app.config import settings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


def _login_failed() -> HTTPException:
    # Same answer for unknown email and wrong password
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Incorrect email or password",
        headers={"WWW-Authenticate": "Bearer"},
    )


def _issue_token(user: UserModel) -> str:
    return create_access_token(
        data={"sub": str(user.user_id), "name": user.name, "email": user.email}
    )


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(user: UserCreate, db: AsyncSession = Depends(get_db)):
    await user_service.register_user(db, user)
    await db.commit()
    return {"message": "User registered"}


@router.post("/token", response_model=Token)
async def login_for_access_token(
    db: AsyncSession = Depends(get_db),
    form_data: OAuth2PasswordRequestForm = Depends()
):
    user = await user_service.authenticate_user(db, form_data.username, form_data.password)
    if not user:
        logger.info("Rejected token request")
        raise _login_failed()
    return {"access_token": _issue_token(user), "token_type": "bearer"}


@router.get("/login")
async def login_page():
    # Signed-in visitors are redirected to the dashboard by the session guard
    return {
        "message": "Please sign in",
        "login_url": "/login",
        "token_url": "/token",
        "register_url": "/register",
    }


@router.post("/login", response_model=Token)
async def login(credentials: LoginRequest, response: Response, db: AsyncSession = Depends(get_db)):
    user = await user_service.authenticate_user(db, credentials.email, credentials.password)
    if not user:
        logger.info("Rejected login")
        raise _login_failed()

    token = _issue_token(user)
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="lax",
    )
    return {"access_token": token, "token_type": "bearer"}


@router.post("/logout")
async def logout(response: Response):
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return {"message": "Logged out"}
