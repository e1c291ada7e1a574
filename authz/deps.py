from fastapi import Depends
from auth.services.auth_service import get_current_active_user
from core.config_loader import settings
from core.errors import Forbidden
from user.models import User


def require_admin(user: User = Depends(get_current_active_user)) -> User:
    # with no ADMIN_EMAILS configured any signed-in worker may trigger cleanup
    if settings.ADMIN_EMAILS and user.email.lower() not in settings.ADMIN_EMAILS:
        raise Forbidden("Admin role required")
    return user
