"""Use cases for recording, listing and acknowledging trade violations."""

from .acknowledge_violation import acknowledge_violation
from .check_trade import check_and_record_trade, check_trade
from .list_violations import list_violations
from .record_violations import record_violations
from .reporting import (
    count_unacknowledged,
    describe_violation,
    has_violations,
    rule_kind_label,
    summarize_by_user,
)

__all__ = [
    "acknowledge_violation",
    "check_and_record_trade",
    "check_trade",
    "count_unacknowledged",
    "describe_violation",
    "has_violations",
    "list_violations",
    "record_violations",
    "rule_kind_label",
    "summarize_by_user",
]
