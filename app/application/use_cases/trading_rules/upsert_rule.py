"""Use case for creating or replacing a trading rule."""

import logging
from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import RuleKind, TradingRule
from app.domain.exceptions import NotFoundError
from app.infrastructure.repositories import TradingRuleRepository, UserRepository
from .validators import ensure_allowed_values, ensure_rule_kind

logger = logging.getLogger(__name__)

USER_NOT_FOUND = "User not found"


def upsert_rule(
    session: Session,
    *,
    user_id: int,
    rule_kind: str | RuleKind,
    allowed_values: Sequence[str],
) -> TradingRule:
    """Save ``allowed_values`` as the user's only rule of ``rule_kind``.

    An existing rule of the same kind is updated in place. Unknown users raise
    :class:`NotFoundError`.
    """

    kind = ensure_rule_kind(rule_kind)
    values = ensure_allowed_values(kind, allowed_values)
    if UserRepository(session).get(user_id) is None:
        raise NotFoundError(USER_NOT_FOUND)

    rule = TradingRuleRepository(session).upsert(
        user_id=user_id, rule_type=kind.value, allowed_values=values
    )
    logger.info(
        "Saved '%s' trading rule %s for user %s with %d value(s)",
        kind.value,
        rule.id,
        user_id,
        len(values),
    )
    return rule


__all__ = ["USER_NOT_FOUND", "upsert_rule"]
