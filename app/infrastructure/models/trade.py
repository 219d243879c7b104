"""SQLAlchemy model for the trades owned by the trade journal."""

from sqlalchemy import Column, Date, DateTime, Float, ForeignKey, Integer, String, func
from sqlalchemy.orm import relationship

from app.infrastructure.database import Base


class TradeModel(Base):
    """Columns of a logged trade that rule checks and violation listings read."""

    __tablename__ = "trades"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    date = Column(Date, nullable=True)
    pair = Column(String(20), nullable=True)
    day = Column(String(20), nullable=True)
    lots = Column(Float, nullable=True)
    action = Column(String(10), nullable=True)
    direction = Column(String(10), nullable=True)
    profit_loss = Column(Float, nullable=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())

    violations = relationship(
        "TradeViolationModel",
        back_populates="trade",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


__all__ = ["TradeModel"]
