"""Schemas for trade violation endpoints."""

import datetime as dt

from pydantic import BaseModel


class TradeSummaryRead(BaseModel):
    id: int
    date: dt.date | None
    pair: str | None
    action: str | None
    profit_loss: float | None


class UserSummaryRead(BaseModel):
    email: str
    full_name: str | None
    username: str | None
    display_name: str


class UnsavedViolationRead(BaseModel):
    rule_type: str
    rule_label: str
    violated_value: str
    allowed_values: list[str]
    description: str


class ComplianceCheckRead(BaseModel):
    is_valid: bool
    violations: list[UnsavedViolationRead]


class ViolationRead(UnsavedViolationRead):
    id: int
    trade_id: int
    user_id: int
    acknowledged: bool
    created_at: dt.datetime | None
    trade: TradeSummaryRead | None = None
    user: UserSummaryRead | None = None


class TradeViolationStatusRead(BaseModel):
    trade_id: int
    has_violations: bool
    unacknowledged_count: int


class UserViolationCountRead(BaseModel):
    user_id: int
    email: str | None
    display_name: str | None
    violation_count: int
