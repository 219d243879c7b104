"""Persistence layer for user data."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy.orm import Session, joinedload

from app.domain.entities import Role, User, UserSummary
from app.infrastructure.models import UserModel

from .storage_errors import storage_errors


class UserRepository:
    """Provide the user lookups needed by the identity layer and listings."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> User | None:
        model = self._get_model(id=user_id)
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        model = self._get_model(email=email)
        return self._to_entity(model) if model else None

    def get_summaries(self, user_ids: Iterable[int]) -> dict[int, UserSummary]:
        """Return display projections keyed by user id for the given ids."""

        ids = {user_id for user_id in user_ids if user_id is not None}
        if not ids:
            return {}
        query = self.session.query(UserModel).filter(UserModel.id.in_(ids))
        return {model.id: self.to_summary(model) for model in query.all()}

    def create(self, user: User) -> User:
        with storage_errors(self.session, f"create user '{user.email}'"):
            model = UserModel(
                role_id=user.role.id,
                email=user.email,
                full_name=user.full_name,
                username=user.username,
                is_active=user.is_active,
            )
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
        return self._to_entity(model)

    def _get_model(self, **filters) -> UserModel | None:
        return (
            self.session.query(UserModel)
            .options(joinedload(UserModel.role))
            .filter_by(**filters)
            .first()
        )

    @staticmethod
    def to_summary(model: UserModel) -> UserSummary:
        return UserSummary(
            email=model.email, full_name=model.full_name, username=model.username
        )

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            role=Role(id=model.role.id, name=model.role.name, alias=model.role.alias),
            email=model.email,
            full_name=model.full_name,
            username=model.username,
            is_active=model.is_active,
        )


__all__ = ["UserRepository"]
