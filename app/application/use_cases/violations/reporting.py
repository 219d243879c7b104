"""Read-only projections over recorded violations used by listings and badges."""

from __future__ import annotations

from datetime import date

from sqlalchemy.orm import Session

from app.domain.entities import RuleKind, TradeViolation, UserViolationCount
from app.domain.exceptions import ValidationError
from app.infrastructure.repositories import TradeViolationRepository


def rule_kind_label(rule_type: str | RuleKind) -> str:
    """Return the human readable label of a rule kind; unknown tags pass through."""

    kind = RuleKind.from_value(rule_type)
    if kind is None:
        return str(rule_type)
    return kind.label


def describe_violation(violation: TradeViolation) -> str:
    """Return a one-line description such as ``Lot Size: used 2; allowed 0.1-1.0``."""

    allowed = ", ".join(violation.allowed_values) or "-"
    return (
        f"{rule_kind_label(violation.rule_type)}: "
        f"used {violation.violated_value}; allowed {allowed}"
    )


def has_violations(session: Session, trade_id: int) -> bool:
    return TradeViolationRepository(session).count_for_trade(trade_id) > 0


def count_unacknowledged(session: Session, trade_id: int) -> int:
    return TradeViolationRepository(session).count_for_trade(trade_id, acknowledged=False)


def summarize_by_user(
    session: Session,
    *,
    start_date: date | None = None,
    end_date: date | None = None,
) -> list[UserViolationCount]:
    """Count violations per user, optionally restricted to a creation date range."""

    if start_date and end_date and start_date > end_date:
        raise ValidationError("start_date must not be after end_date")
    return TradeViolationRepository(session).count_by_user(
        start_date=start_date, end_date=end_date
    )


__all__ = [
    "count_unacknowledged",
    "describe_violation",
    "has_violations",
    "rule_kind_label",
    "summarize_by_user",
]
