"""Use case for persisting evaluator output as violation records."""

import logging
from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import TradeViolation
from app.domain.exceptions import ValidationError
from app.infrastructure.repositories import TradeViolationRepository

logger = logging.getLogger(__name__)


def record_violations(
    session: Session, violations: Sequence[TradeViolation]
) -> list[TradeViolation]:
    """Persist ``violations`` and return the stored rows with ids assigned.

    The batch is atomic: on a storage failure nothing is written and
    ``StorageError`` is raised. Earlier recordings of the same trade are kept,
    so evaluating a trade twice yields two rows per broken rule.
    """

    for violation in violations:
        if violation.is_persisted:
            raise ValidationError(f"Violation {violation.id} has already been recorded")
        if violation.trade_id is None or violation.user_id is None:
            raise ValidationError("Violations need both a trade_id and a user_id to be recorded")

    stored = TradeViolationRepository(session).create_many(violations)
    if stored:
        logger.info(
            "Recorded %d violation(s) for trade(s) %s",
            len(stored),
            sorted({violation.trade_id for violation in stored}),
        )
    return stored


__all__ = ["record_violations"]
