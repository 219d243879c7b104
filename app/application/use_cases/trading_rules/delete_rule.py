"""Use case for deleting trading rules."""

import logging

from sqlalchemy.orm import Session

from app.domain.entities import User
from app.domain.exceptions import PermissionDeniedError
from app.infrastructure.repositories import TradingRuleRepository

logger = logging.getLogger(__name__)


def delete_rule(session: Session, rule_id: int, *, acting_user: User | None = None) -> None:
    """Delete the rule identified by ``rule_id``.

    Deleting an unknown id succeeds silently. When ``acting_user`` is given it
    must own the rule or be an administrator. Violations recorded while the
    rule existed are left untouched.
    """

    repository = TradingRuleRepository(session)
    rule = repository.get(rule_id)
    if rule is None:
        logger.debug("Trading rule %s already absent", rule_id)
        return
    if acting_user is not None and not acting_user.can_act_for(rule.user_id):
        raise PermissionDeniedError("Not allowed to delete another user's trading rule")

    repository.delete(rule_id)
    logger.info("Deleted '%s' trading rule %s of user %s", rule.rule_type, rule_id, rule.user_id)


__all__ = ["delete_rule"]
