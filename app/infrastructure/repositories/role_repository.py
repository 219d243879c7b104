"""Persistence layer for roles data."""

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.domain.entities import Role
from app.infrastructure.models import RoleModel

from .storage_errors import storage_errors


class RoleRepository:
    """Provide access to the roles that decide who is an administrator."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_alias(self, alias: str) -> Role | None:
        model = self._get_model_by_alias(alias)
        return self._to_entity(model) if model else None

    def get_or_create(self, *, name: str, alias: str) -> Role:
        """Return the role with ``alias``, creating it on first use."""

        model = self._get_model_by_alias(alias)
        if model is None:
            with storage_errors(self.session, f"create role '{alias}'"):
                model = RoleModel(name=name, alias=alias)
                self.session.add(model)
                self.session.commit()
                self.session.refresh(model)
        return self._to_entity(model)

    def _get_model_by_alias(self, alias: str) -> RoleModel | None:
        return (
            self.session.query(RoleModel)
            .filter(func.lower(RoleModel.alias) == alias.lower())
            .first()
        )

    @staticmethod
    def _to_entity(model: RoleModel) -> Role:
        return Role(id=model.id, name=model.name, alias=model.alias)


__all__ = ["RoleRepository"]
