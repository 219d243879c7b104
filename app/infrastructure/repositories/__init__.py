"""Repository implementations for infrastructure layer."""

from .role_repository import RoleRepository
from .storage_errors import storage_errors
from .trade_repository import TradeRepository
from .trade_violation_repository import TradeViolationRepository
from .trading_rule_repository import TradingRuleRepository
from .user_repository import UserRepository

__all__ = [
    "RoleRepository",
    "TradeRepository",
    "TradeViolationRepository",
    "TradingRuleRepository",
    "UserRepository",
    "storage_errors",
]
