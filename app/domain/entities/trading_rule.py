"""Domain entity representing a personal trading rule."""

from dataclasses import dataclass, field
from datetime import datetime

from .rule_kind import RuleKind


@dataclass
class TradingRule:
    """Allowed values a user has configured for one rule kind.

    ``rule_type`` keeps the raw persisted tag so rules written by newer
    clients survive a round trip; use :attr:`kind` to get the enum member.
    """

    id: int | None
    user_id: int
    rule_type: str
    allowed_values: list[str] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def kind(self) -> RuleKind | None:
        return RuleKind.from_value(self.rule_type)


__all__ = ["TradingRule"]
