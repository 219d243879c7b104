"""Use case for registering traders and administrators."""

import logging

from sqlalchemy.orm import Session

from app.domain.entities import User
from app.domain.exceptions import ValidationError
from app.infrastructure.repositories import RoleRepository, UserRepository

logger = logging.getLogger(__name__)

ROLE_NAMES = {"admin": "Administrator", "trader": "Trader"}


def create_user(
    session: Session,
    *,
    email: str,
    full_name: str | None = None,
    username: str | None = None,
    role_alias: str = "trader",
) -> User:
    """Create a new user ensuring unique email addresses."""

    alias = role_alias.strip().lower()
    if alias not in ROLE_NAMES:
        raise ValidationError(f"Unsupported role '{role_alias}'")

    email = email.strip()
    if "@" not in email:
        raise ValidationError("A valid email address is required")

    repository = UserRepository(session)
    if repository.get_by_email(email):
        raise ValidationError("Email address is already registered")

    role = RoleRepository(session).get_or_create(name=ROLE_NAMES[alias], alias=alias)
    user = repository.create(
        User(
            id=None,
            role=role,
            email=email,
            full_name=full_name,
            username=username,
            is_active=True,
        )
    )
    logger.info("Created %s user %s (%s)", alias, user.id, user.email)
    return user


__all__ = ["ROLE_NAMES", "create_user"]
