"""Use case for listing recorded violations."""

from sqlalchemy.orm import Session

from app.domain.entities import ViolationDetail, ViolationFilter
from app.infrastructure.repositories import TradeViolationRepository


def list_violations(session: Session, violation_filter: ViolationFilter) -> list[ViolationDetail]:
    """Return violations in ``violation_filter``'s scope, newest first.

    Callers gate ``include_all`` listings to administrators.
    """

    return TradeViolationRepository(session).list(violation_filter)


__all__ = ["list_violations"]
