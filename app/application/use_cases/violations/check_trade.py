"""Use cases that run a trade through the owner's trading rules."""

import logging
from dataclasses import replace

from sqlalchemy.orm import Session

from app.domain.entities import CandidateTrade, ComplianceResult, TradeViolation, User
from app.domain.exceptions import NotFoundError, PermissionDeniedError
from app.domain.rule_evaluator import check_compliance, evaluate
from app.infrastructure.repositories import TradeRepository, TradingRuleRepository
from .record_violations import record_violations

logger = logging.getLogger(__name__)

TRADE_NOT_FOUND = "Trade not found"


def check_trade(session: Session, *, user_id: int, trade: CandidateTrade) -> ComplianceResult:
    """Evaluate ``trade`` against ``user_id``'s current rules without recording anything."""

    rules = TradingRuleRepository(session).list_for_user(user_id)
    return check_compliance(replace(trade, user_id=user_id), rules)


def check_and_record_trade(
    session: Session, trade_id: int, *, acting_user: User | None = None
) -> list[TradeViolation]:
    """Evaluate a stored trade against its owner's rules and record the violations.

    Called once per trade create or update. The rules are read once at the
    start so the whole evaluation sees a single snapshot.
    """

    trade = TradeRepository(session).get(trade_id)
    if trade is None:
        raise NotFoundError(TRADE_NOT_FOUND)
    if acting_user is not None and not acting_user.can_act_for(trade.user_id):
        raise PermissionDeniedError("Not allowed to check another user's trade")

    rules = TradingRuleRepository(session).list_for_user(trade.user_id)
    violations = evaluate(CandidateTrade.from_trade(trade), rules)
    logger.debug(
        "Trade %s checked against %d rule(s): %d violation(s)",
        trade_id,
        len(rules),
        len(violations),
    )
    return record_violations(session, violations)


__all__ = ["TRADE_NOT_FOUND", "check_and_record_trade", "check_trade"]
