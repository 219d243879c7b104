"""Use case for listing a user's trading rules."""

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import TradingRule
from app.infrastructure.repositories import TradingRuleRepository


def list_rules(session: Session, user_id: int) -> Sequence[TradingRule]:
    """Return every trading rule configured for ``user_id``."""

    return TradingRuleRepository(session).list_for_user(user_id)


__all__ = ["list_rules"]
