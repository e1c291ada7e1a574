from typing import Optional

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from user.models import User
from user.schemas import UserCreate

log = structlog.get_logger(__name__)


def get_user(db: Session, user_id: int) -> Optional[User]:
    return db.get(User, user_id)


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.scalars(select(User).where(User.email == email.lower())).first()


def create_user(db: Session, user: UserCreate) -> User:
    db_user = User(
        email=str(user.email).lower(),
        full_name=user.full_name.strip(),
        employee_id=user.employee_id,
    )
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    log.info("user_created", user_id=db_user.id)
    return db_user


def get_or_create_user(db: Session, user: UserCreate) -> User:
    """Find a user by email, creating one on first login."""
    existing = get_user_by_email(db, str(user.email))
    if existing:
        if user.employee_id and not existing.employee_id:
            existing.employee_id = user.employee_id
            db.commit()
            db.refresh(existing)
        return existing
    try:
        return create_user(db, user)
    except IntegrityError:
        # two first logins raced on the unique email
        db.rollback()
        return get_user_by_email(db, str(user.email))
