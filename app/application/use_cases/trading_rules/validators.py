"""Validation helpers for trading rule use cases."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from app.domain.entities import RuleKind
from app.domain.exceptions import ValidationError
from app.domain.rule_evaluator import parse_lot_interval

logger = logging.getLogger(__name__)


def ensure_rule_kind(value: str | RuleKind) -> RuleKind:
    """Return the :class:`RuleKind` for ``value`` or raise ``ValidationError``."""

    kind = RuleKind.from_value(value)
    if kind is None:
        supported = ", ".join(member.value for member in RuleKind)
        raise ValidationError(
            f"Unsupported rule type '{value}'. Expected one of: {supported}"
        )
    return kind


def ensure_allowed_values(kind: RuleKind, allowed_values: Sequence[str] | None) -> list[str]:
    """Return ``allowed_values`` as a list, rejecting an empty collection.

    Lot intervals that cannot be parsed are kept; evaluation treats them as
    never matching.
    """

    if isinstance(allowed_values, str):
        raise ValidationError("allowed_values must be a list of strings")
    values = list(allowed_values or [])
    if not values:
        raise ValidationError("A trading rule needs at least one allowed value")
    if any(not isinstance(value, str) for value in values):
        raise ValidationError("allowed_values must be a list of strings")

    if kind is RuleKind.LOT_RANGE:
        malformed = [value for value in values if parse_lot_interval(value) is None]
        if malformed:
            logger.warning("Saving lot rule with malformed intervals: %s", malformed)
    return values


__all__ = ["ensure_allowed_values", "ensure_rule_kind"]
