from fastapi import APIRouter, Depends

from auth.services.auth_service import get_current_active_user
from user.models import User
from user.schemas import UserSchema

user_router = APIRouter(
    prefix='/users',
    tags=['Users']
)


# Get current user
@user_router.get('/me', response_model=UserSchema)
def user_me(current_user: User = Depends(get_current_active_user)):
    return current_user
