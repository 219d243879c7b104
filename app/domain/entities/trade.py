"""Domain entities for the trade data consumed by the compliance engine."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass


@dataclass
class Trade:
    """Trade record as exposed by the trade store."""

    id: int | None
    user_id: int
    date: dt.date | None = None
    pair: str | None = None
    day: str | None = None
    lots: float | None = None
    action: str | None = None
    direction: str | None = None
    profit_loss: float | None = None


@dataclass(frozen=True)
class TradeSummary:
    """Minimal trade projection joined onto violations for display."""

    id: int
    date: dt.date | None
    pair: str | None
    action: str | None
    profit_loss: float | None


@dataclass(frozen=True)
class CandidateTrade:
    """Fields of a trade the rule evaluator looks at.

    Every field is optional; a missing field skips the matching rule check.
    """

    pair: str | None = None
    day: str | None = None
    lots: float | None = None
    action: str | None = None
    direction: str | None = None
    trade_id: int | None = None
    user_id: int | None = None

    @classmethod
    def from_trade(cls, trade: Trade) -> CandidateTrade:
        return cls(
            pair=trade.pair,
            day=trade.day,
            lots=trade.lots,
            action=trade.action,
            direction=trade.direction,
            trade_id=trade.id,
            user_id=trade.user_id,
        )


__all__ = ["CandidateTrade", "Trade", "TradeSummary"]
