"""Pure evaluation of candidate trades against a user's trading rules."""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Iterable, Sequence
from typing import Final

from app.domain.entities import (
    COUNTER_TREND_FORBIDDEN,
    CandidateTrade,
    ComplianceResult,
    RuleKind,
    TradeViolation,
    TradingRule,
)
from app.domain.exceptions import MalformedRuleDataError

logger = logging.getLogger(__name__)

# (action, direction) pairs that take a position against the stated trend.
_COUNTER_TREND: Final[frozenset[tuple[str, str]]] = frozenset(
    {("Buy", "Bearish"), ("Sell", "Bullish")}
)

RuleCheck = Callable[[CandidateTrade, Sequence[str]], str | None]


def _parse_interval(raw: str) -> tuple[float, float]:
    if not isinstance(raw, str):
        raise MalformedRuleDataError(f"Lot interval must be a string, got {raw!r}")
    lower, separator, upper = raw.strip().partition("-")
    if not separator:
        raise MalformedRuleDataError(f"Lot interval '{raw}' is not in 'min-max' form")
    try:
        bounds = (float(lower), float(upper))
    except ValueError as exc:
        raise MalformedRuleDataError(f"Lot interval '{raw}' has non-numeric bounds") from exc
    if any(math.isnan(bound) for bound in bounds):
        raise MalformedRuleDataError(f"Lot interval '{raw}' has non-numeric bounds")
    return bounds


def parse_lot_interval(raw: str) -> tuple[float, float] | None:
    """Return ``(min, max)`` for a ``"min-max"`` string or ``None`` when malformed."""

    try:
        return _parse_interval(raw)
    except MalformedRuleDataError as exc:
        logger.warning("Ignoring malformed lot interval: %s", exc)
        return None


def format_lots(lots: float) -> str:
    """Render a lot size the way it was typed (``2.0`` becomes ``"2"``)."""

    text = repr(float(lots))
    return text[:-2] if text.endswith(".0") else text


def _check_pair(trade: CandidateTrade, allowed: Sequence[str]) -> str | None:
    if trade.pair and trade.pair not in allowed:
        return trade.pair
    return None


def _check_day(trade: CandidateTrade, allowed: Sequence[str]) -> str | None:
    if trade.day and trade.day not in allowed:
        return trade.day
    return None


def _check_lot_range(trade: CandidateTrade, allowed: Sequence[str]) -> str | None:
    if trade.lots is None:
        return None
    lots = float(trade.lots)
    for raw in allowed:
        interval = parse_lot_interval(raw)
        if interval is not None and interval[0] <= lots <= interval[1]:
            return None
    return format_lots(lots)


def _check_action_direction(trade: CandidateTrade, allowed: Sequence[str]) -> str | None:
    if COUNTER_TREND_FORBIDDEN not in allowed:
        return None
    if not trade.action or not trade.direction:
        return None
    if (trade.action, trade.direction) in _COUNTER_TREND:
        return f"{trade.action} when {trade.direction}"
    return None


RULE_CHECKS: Final[dict[RuleKind, RuleCheck]] = {
    RuleKind.PAIR: _check_pair,
    RuleKind.DAY: _check_day,
    RuleKind.LOT_RANGE: _check_lot_range,
    RuleKind.ACTION_DIRECTION: _check_action_direction,
}


def evaluate(trade: CandidateTrade, rules: Iterable[TradingRule]) -> list[TradeViolation]:
    """Return the unsaved violations ``trade`` commits against ``rules``.

    The output follows the order of ``rules`` and holds at most one entry per
    rule. Rules with a tag that is not a known :class:`RuleKind` are skipped.
    """

    violations: list[TradeViolation] = []
    for rule in rules:
        kind = rule.kind
        if kind is None:
            logger.warning(
                "Skipping rule %s with unsupported type '%s'", rule.id, rule.rule_type
            )
            continue

        allowed = tuple(rule.allowed_values or ())
        violated_value = RULE_CHECKS[kind](trade, allowed)
        if violated_value is None:
            continue

        violations.append(
            TradeViolation(
                id=None,
                trade_id=trade.trade_id,
                user_id=trade.user_id if trade.user_id is not None else rule.user_id,
                rule_type=kind.value,
                violated_value=violated_value,
                allowed_values=allowed,
            )
        )
    return violations


def check_compliance(trade: CandidateTrade, rules: Iterable[TradingRule]) -> ComplianceResult:
    """Evaluate ``trade`` and wrap the outcome with an ``is_valid`` flag."""

    return ComplianceResult(violations=tuple(evaluate(trade, rules)))


__all__ = [
    "RULE_CHECKS",
    "check_compliance",
    "evaluate",
    "format_lots",
    "parse_lot_interval",
]
