from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from core.config_loader import settings
from core.database import get_db
from auth.schemas import LoginPayload, LoginResponse
from user.schemas import UserSchema
from auth.services import auth_service

auth_router = APIRouter(prefix="/auth", tags=["Auth"])


@auth_router.post("/login", response_model=LoginResponse)
def login(payload: LoginPayload, response: Response, db: Session = Depends(get_db)):
    user, token = auth_service.login(db, payload)
    response.set_cookie(
        settings.SESSION_COOKIE_NAME,
        token,
        max_age=settings.SESSION_TTL_SECONDS,
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="strict",
    )
    return LoginResponse(user=UserSchema.model_validate(user), access_token=token)


@auth_router.post("/logout")
def logout(response: Response):
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return {"message": "Logged out"}
