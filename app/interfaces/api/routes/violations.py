"""Routes for inspecting and acknowledging trading rule violations."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.application.use_cases.violations import (
    acknowledge_violation as acknowledge_violation_uc,
    check_and_record_trade as check_and_record_trade_uc,
    count_unacknowledged,
    describe_violation,
    has_violations,
    list_violations as list_violations_uc,
    rule_kind_label,
    summarize_by_user,
)
from app.domain.entities import TradeViolation, User, ViolationDetail, ViolationFilter
from app.domain.exceptions import ComplianceError, NotFoundError
from app.infrastructure.database import get_db
from app.infrastructure.repositories import TradeRepository
from app.interfaces.api.dependencies import (
    ensure_can_act_for,
    get_current_active_user,
    require_admin,
)
from app.interfaces.api.routes_helpers import to_http_exception
from app.interfaces.api.schemas import (
    TradeSummaryRead,
    TradeViolationStatusRead,
    UserSummaryRead,
    UserViolationCountRead,
    ViolationRead,
)

router = APIRouter(tags=["violations"])


def _to_read_model(violation: TradeViolation, detail: ViolationDetail | None = None) -> ViolationRead:
    trade = detail.trade if detail is not None else None
    user = detail.user if detail is not None else None
    return ViolationRead(
        id=violation.id,
        trade_id=violation.trade_id,
        user_id=violation.user_id,
        rule_type=violation.rule_type,
        rule_label=rule_kind_label(violation.rule_type),
        violated_value=violation.violated_value,
        allowed_values=list(violation.allowed_values),
        acknowledged=violation.acknowledged,
        created_at=violation.created_at,
        description=describe_violation(violation),
        trade=(
            TradeSummaryRead(
                id=trade.id,
                date=trade.date,
                pair=trade.pair,
                action=trade.action,
                profit_loss=trade.profit_loss,
            )
            if trade is not None
            else None
        ),
        user=(
            UserSummaryRead(
                email=user.email,
                full_name=user.full_name,
                username=user.username,
                display_name=user.display_name,
            )
            if user is not None
            else None
        ),
    )


def _list(db: Session, **filter_args) -> list[ViolationRead]:
    try:
        details = list_violations_uc(db, ViolationFilter(**filter_args))
    except ComplianceError as exc:
        raise to_http_exception(exc) from exc
    return [_to_read_model(detail.violation, detail) for detail in details]


def _ensure_trade_visible(db: Session, trade_id: int, current_user: User) -> None:
    trade = TradeRepository(db).get(trade_id)
    if trade is None:
        raise to_http_exception(NotFoundError("Trade not found"))
    ensure_can_act_for(current_user, trade.user_id)


@router.post(
    "/trades/{trade_id}/compliance-check",
    response_model=list[ViolationRead],
    status_code=status.HTTP_201_CREATED,
)
def check_and_record_trade(
    trade_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> list[ViolationRead]:
    """Check a saved or edited trade against its owner's rules and record violations."""

    try:
        violations = check_and_record_trade_uc(db, trade_id, acting_user=current_user)
    except ComplianceError as exc:
        raise to_http_exception(exc) from exc
    return [_to_read_model(violation) for violation in violations]


@router.get("/trades/{trade_id}/violations", response_model=list[ViolationRead])
def list_trade_violations(
    trade_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> list[ViolationRead]:
    """Return every violation recorded for ``trade_id``."""

    _ensure_trade_visible(db, trade_id, current_user)
    return _list(db, trade_id=trade_id)


@router.get("/trades/{trade_id}/violations/status", response_model=TradeViolationStatusRead)
def read_trade_violation_status(
    trade_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> TradeViolationStatusRead:
    """Return whether ``trade_id`` broke any rule and how many are still pending."""

    _ensure_trade_visible(db, trade_id, current_user)
    return TradeViolationStatusRead(
        trade_id=trade_id,
        has_violations=has_violations(db, trade_id),
        unacknowledged_count=count_unacknowledged(db, trade_id),
    )


@router.get("/users/{user_id}/violations", response_model=list[ViolationRead])
def list_user_violations(
    user_id: int,
    start_date: date | None = Query(default=None),
    end_date: date | None = Query(default=None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> list[ViolationRead]:
    """Return the violations recorded for ``user_id``, newest first."""

    ensure_can_act_for(current_user, user_id)
    return _list(db, user_id=user_id, start_date=start_date, end_date=end_date)


@router.get("/violations", response_model=list[ViolationRead])
def list_all_violations(
    start_date: date | None = Query(default=None),
    end_date: date | None = Query(default=None),
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> list[ViolationRead]:
    """Return the violations of every user (administrators only)."""

    return _list(db, include_all=True, start_date=start_date, end_date=end_date)


@router.get("/violations/summary", response_model=list[UserViolationCountRead])
def read_violation_summary(
    start_date: date | None = Query(default=None),
    end_date: date | None = Query(default=None),
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> list[UserViolationCountRead]:
    """Return how many violations each user has within the optional date range."""

    try:
        counts = summarize_by_user(db, start_date=start_date, end_date=end_date)
    except ComplianceError as exc:
        raise to_http_exception(exc) from exc
    return [
        UserViolationCountRead(
            user_id=entry.user_id,
            email=entry.user.email if entry.user else None,
            display_name=entry.user.display_name if entry.user else None,
            violation_count=entry.violation_count,
        )
        for entry in counts
    ]


@router.post("/violations/{violation_id}/acknowledge", response_model=ViolationRead)
def acknowledge_violation(
    violation_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> ViolationRead:
    """Mark a violation as reviewed; repeating the call is harmless."""

    try:
        violation = acknowledge_violation_uc(db, violation_id, acting_user=current_user)
    except ComplianceError as exc:
        raise to_http_exception(exc) from exc
    return _to_read_model(violation)
