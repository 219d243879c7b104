"""Schemas for trading rule endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class TradingRuleUpsert(BaseModel):
    """Payload replacing the allowed values of one rule kind."""

    allowed_values: list[str] = Field(
        ..., description="Allowed values; lot ranges use the 'min-max' form"
    )

    model_config = ConfigDict(extra="forbid")


class TradingRuleRead(BaseModel):
    id: int
    user_id: int
    rule_type: str
    label: str
    allowed_values: list[str]
    created_at: datetime | None
    updated_at: datetime | None


class RulePresetRead(BaseModel):
    rule_type: str
    label: str
    presets: list[str]


class CandidateTradeCheck(BaseModel):
    """Trade fields checked by a dry run; omitted fields skip their rule."""

    pair: str | None = None
    day: str | None = None
    lots: float | None = Field(default=None, ge=0)
    action: str | None = Field(default=None, description="Buy or Sell")
    direction: str | None = Field(default=None, description="Bullish or Bearish")
