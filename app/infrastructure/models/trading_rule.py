"""SQLAlchemy model for per-user trading rules."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.types import JSON

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime

allowed_values_type = JSONB().with_variant(JSON(), "sqlite")


class TradingRuleModel(Base):
    """Database representation of a user's allowed values for one rule kind."""

    __tablename__ = "user_trading_rules"
    __table_args__ = (
        UniqueConstraint("user_id", "rule_type", name="uq_user_trading_rules_user_type"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    rule_type = Column(String(32), nullable=False)
    allowed_values = Column(allowed_values_type, nullable=False, default=list)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(
        DateTime,
        nullable=False,
        default=now_in_app_naive_datetime,
        onupdate=now_in_app_naive_datetime,
    )


__all__ = ["TradingRuleModel", "allowed_values_type"]
