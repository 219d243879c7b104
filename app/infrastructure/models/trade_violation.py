"""SQLAlchemy model for recorded trading rule violations."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import expression

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime

from .trading_rule import allowed_values_type


class TradeViolationModel(Base):
    """Database representation of one broken rule attached to one trade."""

    __tablename__ = "trade_violations"

    id = Column(Integer, primary_key=True, index=True)
    trade_id = Column(
        Integer, ForeignKey("trades.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    rule_type = Column(String(32), nullable=False)
    violated_value = Column(Text, nullable=False)
    allowed_values = Column(allowed_values_type, nullable=False, default=list)
    acknowledged = Column(
        Boolean,
        nullable=False,
        default=False,
        server_default=expression.false(),
    )
    created_at = Column(
        DateTime, nullable=False, default=now_in_app_naive_datetime, index=True
    )

    trade = relationship("TradeModel", back_populates="violations")
    user = relationship("UserModel")


__all__ = ["TradeViolationModel"]
