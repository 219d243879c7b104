"""Domain entities exposed by the application."""

from .rule_kind import COUNTER_TREND_FORBIDDEN, RULE_KIND_LABELS, RULE_PRESETS, RuleKind
from .trade import CandidateTrade, Trade, TradeSummary
from .trade_violation import (
    ComplianceResult,
    TradeViolation,
    UserViolationCount,
    ViolationDetail,
    ViolationFilter,
)
from .trading_rule import TradingRule
from .user import Role, User, UserSummary

__all__ = [
    "COUNTER_TREND_FORBIDDEN",
    "RULE_KIND_LABELS",
    "RULE_PRESETS",
    "RuleKind",
    "CandidateTrade",
    "ComplianceResult",
    "Role",
    "Trade",
    "TradeSummary",
    "TradeViolation",
    "TradingRule",
    "User",
    "UserSummary",
    "UserViolationCount",
    "ViolationDetail",
    "ViolationFilter",
]
