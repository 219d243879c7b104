"""Domain entities representing users and their roles."""

from dataclasses import dataclass


@dataclass
class Role:
    """Role assigned to a user; the alias drives authorization checks."""

    id: int
    name: str
    alias: str


@dataclass
class User:
    """Core attributes describing an application user."""

    id: int | None
    role: Role
    email: str
    full_name: str | None
    username: str | None
    is_active: bool = True

    def has_role(self, alias: str) -> bool:
        """Return ``True`` when the user's role alias matches ``alias``."""

        return self.role.alias.lower() == alias.lower()

    def is_admin(self) -> bool:
        """Return ``True`` when the user is an administrator."""

        return self.has_role("admin")

    def can_act_for(self, user_id: int | None) -> bool:
        """Return ``True`` when the user may read or change ``user_id``'s data."""

        return self.is_admin() or (user_id is not None and self.id == user_id)


@dataclass(frozen=True)
class UserSummary:
    """Minimal user projection joined onto violations for display."""

    email: str
    full_name: str | None
    username: str | None

    @property
    def display_name(self) -> str:
        return self.full_name or self.username or self.email


__all__ = ["Role", "User", "UserSummary"]
