"""SQLAlchemy model for user roles."""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from app.infrastructure.database import Base


class RoleModel(Base):
    """Database representation of the roles that gate administrator access."""

    __tablename__ = "role"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), nullable=False, unique=True)
    alias = Column(String(50), nullable=False, unique=True)
    users = relationship("UserModel", back_populates="role")


__all__ = ["RoleModel"]
