"""Persistence layer for per-user trading rules."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.domain.entities import TradingRule
from app.infrastructure.models import TradingRuleModel
from app.utils import ensure_app_timezone, now_in_app_naive_datetime

from .storage_errors import storage_errors


class TradingRuleRepository:
    """Provide the rule store operations: list, upsert and delete."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_user(self, user_id: int) -> Sequence[TradingRule]:
        query = (
            self.session.query(TradingRuleModel)
            .filter(TradingRuleModel.user_id == user_id)
            .order_by(TradingRuleModel.id)
        )
        return [self._to_entity(model) for model in query.all()]

    def get(self, rule_id: int) -> TradingRule | None:
        model = self.session.get(TradingRuleModel, rule_id)
        return self._to_entity(model) if model else None

    def get_by_type(self, user_id: int, rule_type: str) -> TradingRule | None:
        model = self._get_model(user_id=user_id, rule_type=rule_type)
        return self._to_entity(model) if model else None

    def upsert(
        self, *, user_id: int, rule_type: str, allowed_values: Sequence[str]
    ) -> TradingRule:
        """Insert the rule or replace the allowed values of the existing one.

        The unique constraint on ``(user_id, rule_type)`` decides concurrent
        inserts; the losing request re-reads the winner and overwrites it.
        """

        values = list(allowed_values)
        now = now_in_app_naive_datetime()
        with storage_errors(self.session, f"save '{rule_type}' rule for user {user_id}"):
            try:
                model = self._write(user_id, rule_type, values, now)
            except IntegrityError:
                self.session.rollback()
                model = self._write(user_id, rule_type, values, now)
            self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, rule_id: int) -> bool:
        """Remove the rule; return ``False`` when it did not exist."""

        with storage_errors(self.session, f"delete rule {rule_id}"):
            deleted = (
                self.session.query(TradingRuleModel)
                .filter(TradingRuleModel.id == rule_id)
                .delete(synchronize_session=False)
            )
            self.session.commit()
        return bool(deleted)

    def _write(self, user_id: int, rule_type: str, values: list[str], now) -> TradingRuleModel:
        model = self._get_model(user_id=user_id, rule_type=rule_type)
        if model is None:
            model = TradingRuleModel(
                user_id=user_id,
                rule_type=rule_type,
                created_at=now,
            )
        model.allowed_values = values
        model.updated_at = now
        self.session.add(model)
        self.session.commit()
        return model

    def _get_model(self, **filters) -> TradingRuleModel | None:
        return self.session.query(TradingRuleModel).filter_by(**filters).first()

    @staticmethod
    def _to_entity(model: TradingRuleModel) -> TradingRule:
        return TradingRule(
            id=model.id,
            user_id=model.user_id,
            rule_type=model.rule_type,
            allowed_values=list(model.allowed_values or []),
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["TradingRuleRepository"]
