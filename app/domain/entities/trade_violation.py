"""Domain entities describing broken trading rules."""

from dataclasses import dataclass, field
from datetime import date, datetime

from app.domain.exceptions import ValidationError

from .trade import TradeSummary
from .user import UserSummary


@dataclass(frozen=True)
class TradeViolation:
    """Immutable record that a trade broke a rule at evaluation time.

    Unsaved violations (straight out of the evaluator) have ``id`` and
    ``created_at`` set to ``None``.
    """

    id: int | None
    trade_id: int | None
    user_id: int | None
    rule_type: str
    violated_value: str
    allowed_values: tuple[str, ...] = field(default_factory=tuple)
    acknowledged: bool = False
    created_at: datetime | None = None

    @property
    def is_persisted(self) -> bool:
        return self.id is not None


@dataclass(frozen=True)
class ViolationDetail:
    """A violation joined with the trade and user projections used for display."""

    violation: TradeViolation
    trade: TradeSummary | None = None
    user: UserSummary | None = None


@dataclass(frozen=True)
class ViolationFilter:
    """Scope of a violation listing: exactly one of a user, a trade or everything.

    ``start_date``/``end_date`` optionally narrow the listing to violations
    recorded within that (inclusive) date range.
    """

    user_id: int | None = None
    trade_id: int | None = None
    include_all: bool = False
    start_date: date | None = None
    end_date: date | None = None

    def __post_init__(self) -> None:
        scopes = [self.user_id is not None, self.trade_id is not None, self.include_all]
        if sum(scopes) != 1:
            raise ValidationError(
                "Exactly one of user_id, trade_id or include_all must be given"
            )
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValidationError("start_date must not be after end_date")


@dataclass(frozen=True)
class UserViolationCount:
    """Number of violations recorded for one user."""

    user_id: int
    user: UserSummary | None
    violation_count: int


@dataclass(frozen=True)
class ComplianceResult:
    """Outcome of checking a candidate trade against a rule set."""

    violations: tuple[TradeViolation, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.violations


__all__ = [
    "ComplianceResult",
    "TradeViolation",
    "UserViolationCount",
    "ViolationDetail",
    "ViolationFilter",
]
