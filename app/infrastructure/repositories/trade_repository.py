"""Read access to the trade store used by compliance checks."""

from __future__ import annotations

from sqlalchemy.orm import Session

from app.domain.entities import Trade, TradeSummary
from app.infrastructure.models import TradeModel


class TradeRepository:
    """Load trades; creating and editing trades belongs to the trade journal."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, trade_id: int) -> Trade | None:
        model = self.session.get(TradeModel, trade_id)
        return self._to_entity(model) if model else None

    @staticmethod
    def to_summary(model: TradeModel) -> TradeSummary:
        return TradeSummary(
            id=model.id,
            date=model.date,
            pair=model.pair,
            action=model.action,
            profit_loss=model.profit_loss,
        )

    @staticmethod
    def _to_entity(model: TradeModel) -> Trade:
        return Trade(
            id=model.id,
            user_id=model.user_id,
            date=model.date,
            pair=model.pair,
            day=model.day,
            lots=model.lots,
            action=model.action,
            direction=model.direction,
            profit_loss=model.profit_loss,
        )


__all__ = ["TradeRepository"]
