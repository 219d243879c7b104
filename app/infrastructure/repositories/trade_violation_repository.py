"""Persistence layer for recorded trading rule violations."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime

from sqlalchemy import func
from sqlalchemy.orm import Query, Session

from app.domain.entities import (
    TradeViolation,
    UserViolationCount,
    ViolationDetail,
    ViolationFilter,
)
from app.infrastructure.models import TradeModel, TradeViolationModel, UserModel
from app.utils import (
    end_of_day,
    ensure_app_timezone,
    now_in_app_naive_datetime,
    start_of_day,
)

from .storage_errors import storage_errors
from .trade_repository import TradeRepository
from .user_repository import UserRepository


class TradeViolationRepository:
    """Store violations and answer the listings built on top of them."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create_many(self, violations: Sequence[TradeViolation]) -> list[TradeViolation]:
        """Insert every violation in a single transaction.

        Either all rows are committed or none are: a failure rolls the whole
        batch back and surfaces as :class:`StorageError`.
        """

        if not violations:
            return []
        now = now_in_app_naive_datetime()
        models = [self._to_new_model(violation, now) for violation in violations]
        with storage_errors(self.session, f"record {len(models)} violation(s)"):
            self.session.add_all(models)
            self.session.commit()
            for model in models:
                self.session.refresh(model)
        return [self._to_entity(model) for model in models]

    def get(self, violation_id: int) -> TradeViolation | None:
        model = self.session.get(TradeViolationModel, violation_id)
        return self._to_entity(model) if model else None

    def mark_acknowledged(self, violation_id: int) -> TradeViolation | None:
        """Flip ``acknowledged`` to ``True``; return ``None`` for unknown ids."""

        model = self.session.get(TradeViolationModel, violation_id)
        if model is None:
            return None
        if not model.acknowledged:
            with storage_errors(self.session, f"acknowledge violation {violation_id}"):
                model.acknowledged = True
                self.session.add(model)
                self.session.commit()
                self.session.refresh(model)
        return self._to_entity(model)

    def list(self, violation_filter: ViolationFilter) -> list[ViolationDetail]:
        query = (
            self.session.query(TradeViolationModel, TradeModel, UserModel)
            .outerjoin(TradeModel, TradeModel.id == TradeViolationModel.trade_id)
            .outerjoin(UserModel, UserModel.id == TradeViolationModel.user_id)
        )
        query = self._apply_filter(query, violation_filter)
        query = query.order_by(
            TradeViolationModel.created_at.desc(), TradeViolationModel.id.desc()
        )
        return [
            ViolationDetail(
                violation=self._to_entity(violation),
                trade=TradeRepository.to_summary(trade) if trade is not None else None,
                user=UserRepository.to_summary(user) if user is not None else None,
            )
            for violation, trade, user in query.all()
        ]

    def count_for_trade(self, trade_id: int, *, acknowledged: bool | None = None) -> int:
        query = self.session.query(func.count(TradeViolationModel.id)).filter(
            TradeViolationModel.trade_id == trade_id
        )
        if acknowledged is not None:
            query = query.filter(TradeViolationModel.acknowledged == acknowledged)
        return int(query.scalar() or 0)

    def count_by_user(
        self, *, start_date: date | None = None, end_date: date | None = None
    ) -> list[UserViolationCount]:
        """Return how many violations each user has, most violations first."""

        query = (
            self.session.query(
                TradeViolationModel.user_id,
                func.count(TradeViolationModel.id).label("violation_count"),
            )
            .group_by(TradeViolationModel.user_id)
        )
        query = self._apply_date_range(query, start_date, end_date)
        counts = query.all()

        summaries = UserRepository(self.session).get_summaries(
            user_id for user_id, _ in counts
        )
        results = [
            UserViolationCount(
                user_id=user_id,
                user=summaries.get(user_id),
                violation_count=int(count),
            )
            for user_id, count in counts
        ]
        return sorted(results, key=lambda item: (-item.violation_count, item.user_id))

    @classmethod
    def _apply_filter(cls, query: Query, violation_filter: ViolationFilter) -> Query:
        if violation_filter.user_id is not None:
            query = query.filter(TradeViolationModel.user_id == violation_filter.user_id)
        elif violation_filter.trade_id is not None:
            query = query.filter(TradeViolationModel.trade_id == violation_filter.trade_id)
        return cls._apply_date_range(
            query, violation_filter.start_date, violation_filter.end_date
        )

    @staticmethod
    def _apply_date_range(
        query: Query, start_date: date | None, end_date: date | None
    ) -> Query:
        if start_date is not None:
            query = query.filter(
                TradeViolationModel.created_at >= start_of_day(start_date)
            )
        if end_date is not None:
            query = query.filter(
                TradeViolationModel.created_at <= end_of_day(end_date)
            )
        return query

    @staticmethod
    def _to_new_model(violation: TradeViolation, now: datetime) -> TradeViolationModel:
        return TradeViolationModel(
            trade_id=violation.trade_id,
            user_id=violation.user_id,
            rule_type=violation.rule_type,
            violated_value=violation.violated_value,
            allowed_values=list(violation.allowed_values),
            acknowledged=violation.acknowledged,
            created_at=now,
        )

    @staticmethod
    def _to_entity(model: TradeViolationModel) -> TradeViolation:
        return TradeViolation(
            id=model.id,
            trade_id=model.trade_id,
            user_id=model.user_id,
            rule_type=model.rule_type,
            violated_value=model.violated_value,
            allowed_values=tuple(model.allowed_values or ()),
            acknowledged=bool(model.acknowledged),
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["TradeViolationRepository"]
