from fastapi import APIRouter, Depends
from app.dependencies import get_current_user
from app.models.user import User as UserModel
from app.schemas.user import UserResponse

router = APIRouter(prefix="/users", tags=["users"])

@router.get("/me", response_model=UserResponse)
async def get_me(current_user: UserModel = Depends(get_current_user)):
    return current_user
