"""Tests for recording, listing and acknowledging violations."""

from __future__ import annotations

from datetime import timedelta

import pytest
from sqlalchemy import delete

from app.application.use_cases.trading_rules import upsert_rule
from app.application.use_cases.violations import (
    acknowledge_violation,
    check_and_record_trade,
    check_trade,
    list_violations,
    record_violations,
    summarize_by_user,
)
from app.domain.entities import CandidateTrade, TradeViolation, ViolationFilter
from app.domain.exceptions import (
    NotFoundError,
    PermissionDeniedError,
    StorageError,
    ValidationError,
)
from app.infrastructure.models import TradeModel, TradeViolationModel
from app.utils import now_in_app_timezone


def _violation(trade_id: int | None, user_id: int | None, value: str = "USD/JPY") -> TradeViolation:
    return TradeViolation(
        id=None,
        trade_id=trade_id,
        user_id=user_id,
        rule_type="pair",
        violated_value=value,
        allowed_values=("EUR/USD",),
    )


@pytest.fixture()
def trader(make_user):
    return make_user("trader@example.com", full_name="Tess Trader", username="tess")


def test_record_violations_assigns_ids_and_timestamps(session, trader, make_trade):
    trade_id = make_trade(trader.id, pair="USD/JPY")

    stored = record_violations(session, [_violation(trade_id, trader.id)])

    assert len(stored) == 1
    assert stored[0].id is not None
    assert stored[0].created_at is not None
    assert stored[0].acknowledged is False
    assert stored[0].allowed_values == ("EUR/USD",)


def test_record_violations_requires_trade_and_user(session, trader):
    with pytest.raises(ValidationError):
        record_violations(session, [_violation(None, trader.id)])


def test_record_violations_rejects_already_recorded_rows(session, trader, make_trade):
    trade_id = make_trade(trader.id)
    stored = record_violations(session, [_violation(trade_id, trader.id)])

    with pytest.raises(ValidationError):
        record_violations(session, stored)


def test_record_violations_is_atomic(session, trader, make_trade):
    trade_id = make_trade(trader.id)
    batch = [_violation(trade_id, trader.id), _violation(987654, trader.id)]

    with pytest.raises(StorageError):
        record_violations(session, batch)

    assert session.query(TradeViolationModel).count() == 0


def test_check_and_record_trade_records_each_evaluation(session, trader, make_trade):
    upsert_rule(session, user_id=trader.id, rule_kind="pair", allowed_values=["EUR/USD"])
    trade_id = make_trade(trader.id, pair="USD/JPY")

    check_and_record_trade(session, trade_id)
    check_and_record_trade(session, trade_id)

    details = list_violations(session, ViolationFilter(trade_id=trade_id))
    assert len(details) == 2
    assert {detail.violation.violated_value for detail in details} == {"USD/JPY"}


def test_check_and_record_trade_uses_owner_rules(session, trader, make_user, make_trade):
    other = make_user("other@example.com")
    upsert_rule(session, user_id=trader.id, rule_kind="day", allowed_values=["Monday", "Tuesday"])
    upsert_rule(session, user_id=trader.id, rule_kind="lot", allowed_values=["0.1-1.0"])
    upsert_rule(session, user_id=other.id, rule_kind="pair", allowed_values=["EUR/USD"])
    trade_id = make_trade(trader.id, pair="USD/JPY", day="Friday", lots=0.5)

    stored = check_and_record_trade(session, trade_id)

    assert [(v.rule_type, v.violated_value) for v in stored] == [("day", "Friday")]
    assert stored[0].user_id == trader.id
    assert stored[0].trade_id == trade_id


def test_check_and_record_trade_errors(session, trader, make_user, make_trade):
    stranger = make_user("stranger@example.com")
    trade_id = make_trade(trader.id, pair="USD/JPY")

    with pytest.raises(NotFoundError):
        check_and_record_trade(session, 424242)
    with pytest.raises(PermissionDeniedError):
        check_and_record_trade(session, trade_id, acting_user=stranger)


def test_clean_trade_records_nothing(session, trader, make_trade):
    upsert_rule(session, user_id=trader.id, rule_kind="pair", allowed_values=["EUR/USD"])
    trade_id = make_trade(trader.id, pair="EUR/USD")

    assert check_and_record_trade(session, trade_id) == []
    assert session.query(TradeViolationModel).count() == 0


def test_check_trade_is_a_dry_run(session, trader):
    upsert_rule(session, user_id=trader.id, rule_kind="action_direction", allowed_values=["No"])

    result = check_trade(
        session, user_id=trader.id, trade=CandidateTrade(action="Sell", direction="Bullish")
    )

    assert not result.is_valid
    assert result.violations[0].violated_value == "Sell when Bullish"
    assert result.violations[0].user_id == trader.id
    assert session.query(TradeViolationModel).count() == 0


def test_acknowledge_is_one_way_and_idempotent(session, trader, make_trade):
    trade_id = make_trade(trader.id)
    [stored] = record_violations(session, [_violation(trade_id, trader.id)])

    first = acknowledge_violation(session, stored.id)
    second = acknowledge_violation(session, stored.id)

    assert first.acknowledged is True
    assert second == first
    assert second.violated_value == stored.violated_value
    assert second.allowed_values == stored.allowed_values


def test_acknowledge_unknown_violation(session):
    with pytest.raises(NotFoundError):
        acknowledge_violation(session, 31337)


def test_acknowledge_checks_visibility(session, trader, make_user, make_trade):
    stranger = make_user("stranger@example.com")
    admin = make_user("admin@example.com", role="admin")
    trade_id = make_trade(trader.id)
    [stored] = record_violations(session, [_violation(trade_id, trader.id)])

    with pytest.raises(PermissionDeniedError):
        acknowledge_violation(session, stored.id, acting_user=stranger)
    assert acknowledge_violation(session, stored.id, acting_user=admin).acknowledged


def test_list_violations_scopes_and_joins(session, trader, make_user, make_trade):
    other = make_user("other@example.com")
    trade_id = make_trade(trader.id, pair="USD/JPY", action="Buy", profit_loss=-12.5)
    other_trade_id = make_trade(other.id, pair="AUD/USD")
    record_violations(session, [_violation(trade_id, trader.id)])
    record_violations(session, [_violation(other_trade_id, other.id, "AUD/USD")])

    by_user = list_violations(session, ViolationFilter(user_id=trader.id))
    by_trade = list_violations(session, ViolationFilter(trade_id=other_trade_id))
    everything = list_violations(session, ViolationFilter(include_all=True))

    assert [d.violation.trade_id for d in by_user] == [trade_id]
    assert [d.violation.violated_value for d in by_trade] == ["AUD/USD"]
    assert len(everything) == 2
    assert everything[0].violation.id > everything[1].violation.id

    detail = by_user[0]
    assert detail.trade.pair == "USD/JPY"
    assert detail.trade.action == "Buy"
    assert detail.trade.profit_loss == -12.5
    assert detail.user.email == "trader@example.com"
    assert detail.user.display_name == "Tess Trader"


def test_list_violations_date_range(session, trader, make_trade):
    trade_id = make_trade(trader.id)
    record_violations(session, [_violation(trade_id, trader.id)])
    today = now_in_app_timezone().date()

    assert len(list_violations(session, ViolationFilter(user_id=trader.id, start_date=today, end_date=today))) == 1
    assert list_violations(
        session, ViolationFilter(user_id=trader.id, start_date=today + timedelta(days=1))
    ) == []
    assert list_violations(
        session, ViolationFilter(user_id=trader.id, end_date=today - timedelta(days=1))
    ) == []


@pytest.mark.parametrize(
    "kwargs",
    [{}, {"user_id": 1, "trade_id": 2}, {"user_id": 1, "include_all": True}],
)
def test_violation_filter_requires_exactly_one_scope(kwargs):
    with pytest.raises(ValidationError):
        ViolationFilter(**kwargs)


def test_deleting_trade_cascades_to_violations(session, trader, make_trade):
    trade_id = make_trade(trader.id)
    kept_trade_id = make_trade(trader.id)
    record_violations(
        session,
        [_violation(trade_id, trader.id), _violation(kept_trade_id, trader.id)],
    )

    session.execute(delete(TradeModel).where(TradeModel.id == trade_id))
    session.commit()

    remaining = list_violations(session, ViolationFilter(user_id=trader.id))
    assert [d.violation.trade_id for d in remaining] == [kept_trade_id]


def test_summarize_by_user_counts_violations(session, trader, make_user, make_trade):
    other = make_user("other@example.com")
    trade_id = make_trade(trader.id)
    other_trade_id = make_trade(other.id)
    record_violations(session, [_violation(trade_id, trader.id), _violation(trade_id, trader.id)])
    record_violations(session, [_violation(other_trade_id, other.id)])

    summary = summarize_by_user(session)

    assert [(entry.user_id, entry.violation_count) for entry in summary] == [
        (trader.id, 2),
        (other.id, 1),
    ]
    assert summary[0].user.email == "trader@example.com"

    tomorrow = now_in_app_timezone().date() + timedelta(days=1)
    assert summarize_by_user(session, start_date=tomorrow) == []
    with pytest.raises(ValidationError):
        summarize_by_user(session, start_date=tomorrow, end_date=tomorrow - timedelta(days=2))
