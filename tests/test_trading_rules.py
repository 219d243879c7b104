"""Tests for the trading rule store use cases."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import IntegrityError

from app.application.use_cases.trading_rules import delete_rule, list_rules, upsert_rule
from app.application.use_cases.violations import check_and_record_trade, list_violations
from app.domain.entities import RuleKind, ViolationFilter
from app.domain.exceptions import NotFoundError, PermissionDeniedError, ValidationError
from app.infrastructure.models import TradingRuleModel
from app.infrastructure.repositories import TradingRuleRepository


def test_upsert_keeps_a_single_rule_per_kind(session, make_user):
    user = make_user()

    first = upsert_rule(session, user_id=user.id, rule_kind="pair", allowed_values=["EUR/USD"])
    second = upsert_rule(session, user_id=user.id, rule_kind="pair", allowed_values=["GBP/USD"])

    rules = list_rules(session, user.id)
    assert len(rules) == 1
    assert rules[0].id == first.id == second.id
    assert rules[0].allowed_values == ["GBP/USD"]
    assert rules[0].kind is RuleKind.PAIR
    assert second.updated_at >= first.updated_at


def test_upsert_accepts_enum_members_and_keeps_kinds_apart(session, make_user):
    user = make_user()

    upsert_rule(session, user_id=user.id, rule_kind=RuleKind.DAY, allowed_values=["Monday"])
    upsert_rule(session, user_id=user.id, rule_kind="lot", allowed_values=["0.1-1.0"])

    assert sorted(rule.rule_type for rule in list_rules(session, user.id)) == ["day", "lot"]


def test_rules_are_scoped_per_user(session, make_user):
    alice = make_user("alice@example.com")
    bob = make_user("bob@example.com")

    upsert_rule(session, user_id=alice.id, rule_kind="pair", allowed_values=["EUR/USD"])

    assert list_rules(session, bob.id) == []


@pytest.mark.parametrize(
    ("rule_kind", "allowed_values"),
    [("direction", ["Bullish"]), ("pair", []), ("pair", None), ("pair", "EUR/USD")],
)
def test_upsert_rejects_invalid_input(session, make_user, rule_kind, allowed_values):
    user = make_user()

    with pytest.raises(ValidationError):
        upsert_rule(session, user_id=user.id, rule_kind=rule_kind, allowed_values=allowed_values)

    assert list_rules(session, user.id) == []


def test_upsert_keeps_malformed_lot_intervals(session, make_user):
    user = make_user()

    rule = upsert_rule(session, user_id=user.id, rule_kind="lot", allowed_values=["abc-def", "1-5"])

    assert rule.allowed_values == ["abc-def", "1-5"]


def test_upsert_accepts_kind_member_names(session, make_user):
    user = make_user()

    lot = upsert_rule(session, user_id=user.id, rule_kind="LotRange", allowed_values=["0.1-1.0"])
    trend = upsert_rule(session, user_id=user.id, rule_kind="ACTION_DIRECTION", allowed_values=["No"])

    assert (lot.rule_type, trend.rule_type) == ("lot", "action_direction")


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("lot", RuleKind.LOT_RANGE),
        ("LotRange", RuleKind.LOT_RANGE),
        ("ActionDirection", RuleKind.ACTION_DIRECTION),
        (" Pair ", RuleKind.PAIR),
        ("direction", None),
        (None, None),
    ],
)
def test_rule_kind_from_value(raw, expected):
    assert RuleKind.from_value(raw) is expected


def test_upsert_for_unknown_user_is_not_found(session):
    with pytest.raises(NotFoundError):
        upsert_rule(session, user_id=99999, rule_kind="pair", allowed_values=["EUR/USD"])

    assert session.query(TradingRuleModel).count() == 0


def test_upsert_retries_as_update_after_losing_insert_race(session, make_user, monkeypatch):
    user = make_user()
    existing = upsert_rule(session, user_id=user.id, rule_kind="pair", allowed_values=["EUR/USD"])
    lookup = TradingRuleRepository._get_model
    calls = []

    def stale_lookup(self, **filters):
        calls.append(filters)
        if len(calls) == 1:
            return None
        return lookup(self, **filters)

    monkeypatch.setattr(TradingRuleRepository, "_get_model", stale_lookup)
    saved = upsert_rule(session, user_id=user.id, rule_kind="pair", allowed_values=["GBP/USD"])
    monkeypatch.undo()

    assert len(calls) == 2
    assert saved.id == existing.id
    assert [rule.allowed_values for rule in list_rules(session, user.id)] == [["GBP/USD"]]


def test_database_rejects_duplicate_kind_for_user(session, make_user):
    user = make_user()
    upsert_rule(session, user_id=user.id, rule_kind="day", allowed_values=["Monday"])

    session.add(TradingRuleModel(user_id=user.id, rule_type="day", allowed_values=["Friday"]))
    with pytest.raises(IntegrityError):
        session.commit()
    session.rollback()


def test_delete_rule_is_idempotent(session, make_user):
    user = make_user()
    rule = upsert_rule(session, user_id=user.id, rule_kind="pair", allowed_values=["EUR/USD"])

    delete_rule(session, rule.id)
    delete_rule(session, rule.id)
    delete_rule(session, 9999)

    assert list_rules(session, user.id) == []


def test_delete_rule_checks_ownership(session, make_user):
    owner = make_user("owner@example.com")
    other = make_user("other@example.com")
    admin = make_user("admin@example.com", role="admin")
    rule = upsert_rule(session, user_id=owner.id, rule_kind="pair", allowed_values=["EUR/USD"])

    with pytest.raises(PermissionDeniedError):
        delete_rule(session, rule.id, acting_user=other)
    assert len(list_rules(session, owner.id)) == 1

    delete_rule(session, rule.id, acting_user=admin)
    assert list_rules(session, owner.id) == []


def test_deleting_a_rule_keeps_recorded_violations(session, make_user, make_trade):
    user = make_user()
    rule = upsert_rule(session, user_id=user.id, rule_kind="pair", allowed_values=["EUR/USD"])
    trade_id = make_trade(user.id, pair="USD/JPY")
    check_and_record_trade(session, trade_id)

    delete_rule(session, rule.id)

    details = list_violations(session, ViolationFilter(trade_id=trade_id))
    assert len(details) == 1
    assert details[0].violation.allowed_values == ("EUR/USD",)
