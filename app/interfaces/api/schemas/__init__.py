from .trading_rule import (
    CandidateTradeCheck,
    RulePresetRead,
    TradingRuleRead,
    TradingRuleUpsert,
)
from .violation import (
    ComplianceCheckRead,
    TradeSummaryRead,
    TradeViolationStatusRead,
    UnsavedViolationRead,
    UserSummaryRead,
    UserViolationCountRead,
    ViolationRead,
)

__all__ = [
    "CandidateTradeCheck",
    "ComplianceCheckRead",
    "RulePresetRead",
    "TradeSummaryRead",
    "TradeViolationStatusRead",
    "TradingRuleRead",
    "TradingRuleUpsert",
    "UnsavedViolationRead",
    "UserSummaryRead",
    "UserViolationCountRead",
    "ViolationRead",
]
