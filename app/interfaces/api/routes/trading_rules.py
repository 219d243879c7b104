"""Routes for managing personal trading rules."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.application.use_cases.trading_rules import (
    delete_rule as delete_rule_uc,
    list_rules as list_rules_uc,
    upsert_rule as upsert_rule_uc,
)
from app.application.use_cases.violations import (
    check_trade as check_trade_uc,
    describe_violation,
    rule_kind_label,
)
from app.domain.entities import RULE_PRESETS, CandidateTrade, TradingRule, TradeViolation, User
from app.domain.exceptions import ComplianceError
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import ensure_can_act_for, get_current_active_user
from app.interfaces.api.routes_helpers import to_http_exception
from app.interfaces.api.schemas import (
    CandidateTradeCheck,
    ComplianceCheckRead,
    RulePresetRead,
    TradingRuleRead,
    TradingRuleUpsert,
    UnsavedViolationRead,
)

router = APIRouter(tags=["trading-rules"])


def _to_read_model(rule: TradingRule) -> TradingRuleRead:
    return TradingRuleRead(
        id=rule.id,
        user_id=rule.user_id,
        rule_type=rule.rule_type,
        label=rule_kind_label(rule.rule_type),
        allowed_values=list(rule.allowed_values),
        created_at=rule.created_at,
        updated_at=rule.updated_at,
    )


def _unsaved_to_read_model(violation: TradeViolation) -> UnsavedViolationRead:
    return UnsavedViolationRead(
        rule_type=violation.rule_type,
        rule_label=rule_kind_label(violation.rule_type),
        violated_value=violation.violated_value,
        allowed_values=list(violation.allowed_values),
        description=describe_violation(violation),
    )


@router.get("/trading-rules/presets", response_model=list[RulePresetRead])
def list_rule_presets(
    _: User = Depends(get_current_active_user),
) -> list[RulePresetRead]:
    """Return every rule kind with its label and suggested values."""

    return [
        RulePresetRead(rule_type=kind.value, label=kind.label, presets=list(values))
        for kind, values in RULE_PRESETS.items()
    ]


@router.get("/users/{user_id}/trading-rules", response_model=list[TradingRuleRead])
def list_user_rules(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> list[TradingRuleRead]:
    """Return the trading rules configured for ``user_id``."""

    ensure_can_act_for(current_user, user_id)
    return [_to_read_model(rule) for rule in list_rules_uc(db, user_id)]


@router.put("/users/{user_id}/trading-rules/{rule_type}", response_model=TradingRuleRead)
def save_user_rule(
    user_id: int,
    rule_type: str,
    rule_in: TradingRuleUpsert,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> TradingRuleRead:
    """Create the rule of ``rule_type`` or replace its allowed values."""

    ensure_can_act_for(current_user, user_id)
    try:
        rule = upsert_rule_uc(
            db,
            user_id=user_id,
            rule_kind=rule_type,
            allowed_values=rule_in.allowed_values,
        )
    except ComplianceError as exc:
        raise to_http_exception(exc) from exc
    return _to_read_model(rule)


@router.delete("/trading-rules/{rule_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user_rule(
    rule_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> Response:
    """Delete a trading rule; unknown ids are treated as already deleted."""

    try:
        delete_rule_uc(db, rule_id, acting_user=current_user)
    except ComplianceError as exc:
        raise to_http_exception(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/users/{user_id}/trading-rules/check", response_model=ComplianceCheckRead)
def check_candidate_trade(
    user_id: int,
    trade_in: CandidateTradeCheck,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> ComplianceCheckRead:
    """Report which of ``user_id``'s rules a trade would break, without recording."""

    ensure_can_act_for(current_user, user_id)
    candidate = CandidateTrade(**trade_in.model_dump())
    try:
        result = check_trade_uc(db, user_id=user_id, trade=candidate)
    except ComplianceError as exc:
        raise to_http_exception(exc) from exc
    return ComplianceCheckRead(
        is_valid=result.is_valid,
        violations=[_unsaved_to_read_model(violation) for violation in result.violations],
    )
