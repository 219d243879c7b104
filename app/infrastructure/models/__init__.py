"""ORM models used by the application infrastructure."""

from .role import RoleModel
from .trade import TradeModel
from .trade_violation import TradeViolationModel
from .trading_rule import TradingRuleModel
from .user import UserModel

__all__ = [
    "RoleModel",
    "TradeModel",
    "TradeViolationModel",
    "TradingRuleModel",
    "UserModel",
]
