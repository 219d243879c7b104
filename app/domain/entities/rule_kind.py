"""Closed set of trading rule kinds and their display metadata."""

from __future__ import annotations

from enum import Enum
from typing import Final


class RuleKind(str, Enum):
    """Categories of trading constraint a user can configure.

    The values double as the tags persisted in ``user_trading_rules.rule_type``.
    """

    PAIR = "pair"
    DAY = "day"
    LOT_RANGE = "lot"
    ACTION_DIRECTION = "action_direction"

    @classmethod
    def from_value(cls, value: str | RuleKind | None) -> RuleKind | None:
        """Return the kind matching ``value`` or ``None`` for unknown tags.

        Both the stored tags (``lot``) and the member names in any casing
        (``LotRange``, ``LOT_RANGE``) are accepted.
        """

        if isinstance(value, RuleKind):
            return value
        if not isinstance(value, str):
            return None
        key = _normalize(value)
        for kind in cls:
            if key in (_normalize(kind.value), _normalize(kind.name)):
                return kind
        return None

    @property
    def label(self) -> str:
        return RULE_KIND_LABELS[self]


def _normalize(name: str) -> str:
    return name.strip().replace("_", "").replace("-", "").lower()


RULE_KIND_LABELS: Final[dict[RuleKind, str]] = {
    RuleKind.PAIR: "Currency Pair",
    RuleKind.DAY: "Trading Day",
    RuleKind.LOT_RANGE: "Lot Size",
    RuleKind.ACTION_DIRECTION: "Against Trend",
}

# Sentinel stored in an action/direction rule to forbid counter-trend trades.
COUNTER_TREND_FORBIDDEN: Final[str] = "No"

RULE_PRESETS: Final[dict[RuleKind, tuple[str, ...]]] = {
    RuleKind.PAIR: (
        "GBP/USD",
        "EUR/USD",
        "USD/JPY",
        "USD/CHF",
        "AUD/USD",
        "USD/CAD",
        "NZD/USD",
    ),
    RuleKind.DAY: ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday"),
    RuleKind.LOT_RANGE: ("0.01-0.1", "0.1-0.5", "0.5-1.0", "1.0-5.0"),
    RuleKind.ACTION_DIRECTION: (COUNTER_TREND_FORBIDDEN,),
}


__all__ = [
    "COUNTER_TREND_FORBIDDEN",
    "RULE_KIND_LABELS",
    "RULE_PRESETS",
    "RuleKind",
]
