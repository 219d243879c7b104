"""Aggregate application use cases."""

from .trading_rules import delete_rule, list_rules, upsert_rule
from .users import create_user
from .violations import (
    acknowledge_violation,
    check_and_record_trade,
    check_trade,
    list_violations,
    record_violations,
)

__all__ = [
    "acknowledge_violation",
    "check_and_record_trade",
    "check_trade",
    "create_user",
    "delete_rule",
    "list_rules",
    "list_violations",
    "record_violations",
    "upsert_rule",
]
