"""Use case for acknowledging a recorded violation."""

import logging

from sqlalchemy.orm import Session

from app.domain.entities import TradeViolation, User
from app.domain.exceptions import NotFoundError, PermissionDeniedError
from app.infrastructure.repositories import TradeViolationRepository

logger = logging.getLogger(__name__)

VIOLATION_NOT_FOUND = "Violation not found"


def acknowledge_violation(
    session: Session, violation_id: int, *, acting_user: User | None = None
) -> TradeViolation:
    """Move a violation from pending to acknowledged.

    Acknowledging twice returns the already acknowledged record unchanged.
    There is no way back to pending.
    """

    repository = TradeViolationRepository(session)
    current = repository.get(violation_id)
    if current is None:
        raise NotFoundError(VIOLATION_NOT_FOUND)
    if acting_user is not None and not acting_user.can_act_for(current.user_id):
        raise PermissionDeniedError("Not allowed to acknowledge another user's violation")
    if current.acknowledged:
        return current

    acknowledged = repository.mark_acknowledged(violation_id)
    if acknowledged is None:  # deleted together with its trade in the meantime
        raise NotFoundError(VIOLATION_NOT_FOUND)
    logger.info("Violation %s of trade %s acknowledged", violation_id, acknowledged.trade_id)
    return acknowledged


__all__ = ["VIOLATION_NOT_FOUND", "acknowledge_violation"]
