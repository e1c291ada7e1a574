import hmac
from typing import Optional

import structlog
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from core.config_loader import settings
from core.database import get_db
from core.errors import Unauthenticated, ValidationFailed
from auth.schemas import LoginPayload
from auth.utils.auth_utils import create_session_token, decode_session_token
from user.models import User
from user.schemas import UserCreate
from user.service import get_user, get_or_create_user

log = structlog.get_logger(__name__)

http_bearer = HTTPBearer(auto_error=False)


def login(db: Session, payload: LoginPayload) -> tuple[User, str]:
    """Check the shared passcode and email domain, then find or create the user."""
    email = str(payload.email).lower()
    domain = settings.ALLOWED_EMAIL_DOMAIN
    if domain and not email.endswith("@" + domain.lower()):
        raise ValidationFailed(f"Email must be an @{domain} address")

    if settings.LOGIN_PASSCODE is not None and not hmac.compare_digest(
        payload.passcode.encode(), settings.LOGIN_PASSCODE.encode()
    ):
        log.warning("login_rejected", reason="passcode")
        raise Unauthenticated("Invalid pass code")

    user = get_or_create_user(
        db, UserCreate(email=email, full_name=payload.full_name, employee_id=payload.employee_id)
    )
    log.info("login", user_id=user.id)
    return user, create_session_token(user.id)


def _token_from_request(request: Request, creds: Optional[HTTPAuthorizationCredentials]) -> Optional[str]:
    if creds and creds.scheme.lower() == "bearer":
        return creds.credentials
    return request.cookies.get(settings.SESSION_COOKIE_NAME)


def get_current_active_user(
    request: Request,
    creds: Optional[HTTPAuthorizationCredentials] = Depends(http_bearer),
    db: Session = Depends(get_db),
) -> User:
    token = _token_from_request(request, creds)
    if not token:
        raise Unauthenticated("Not authenticated")
    user = get_user(db, decode_session_token(token))
    if user is None:
        raise Unauthenticated("Not authenticated")
    return user
