"""Weekly check-in service."""

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Protocol
from uuid import UUID

from macro_coach.domain.check_ins import (
    CheckInContext,
    CheckInRecord,
    CheckInStatus,
    DiaryEntry,
    WeightEntry,
    average_daily_calories,
)
from macro_coach.domain.coaching import (
    days_until_check_in,
    is_check_in_available,
    perform_weekly_check_in,
)
from macro_coach.domain.errors import CheckInUnavailableError, GoalNotFoundError
from macro_coach.domain.models import CheckInObservation, CheckInResult, GoalSpec
from macro_coach.domain.plans import GoalRecord
from macro_coach.domain.policy import DEFAULT_POLICY, CoachingPolicy
from macro_coach.services.plans import GoalsRepository, WeightRepository

_logger = logging.getLogger(__name__)


class DiaryRepository(Protocol):
    """Read interface for logged food calories."""

    def list_entries(self, user_id: UUID, start: date) -> list[DiaryEntry]:
        """Return diary entries logged on or after start."""


class CheckInRepository(Protocol):
    """Persistence interface for check-in audit records."""

    def create_check_in(self, record: CheckInRecord) -> None:
        """Store a completed check-in."""


@dataclass
class CheckInService:
    """Service that gathers weekly data and applies coached adjustments."""

    goals: GoalsRepository
    diary: DiaryRepository
    weights: WeightRepository
    check_ins: CheckInRepository
    policy: CoachingPolicy = DEFAULT_POLICY

    def get_status(self, user_id: UUID, today: date) -> CheckInStatus:
        """Return whether a check-in is open and how long until the next one."""
        goal = self._require_goal(user_id)
        return CheckInStatus(
            available=is_check_in_available(goal.last_check_in, today, self.policy),
            days_until=days_until_check_in(goal.last_check_in, today, self.policy),
            last_check_in=goal.last_check_in,
        )

    def prepare(self, user_id: UUID, today: date) -> CheckInContext:
        """Collect average intake and weights for the current check-in window."""
        goal = self._require_goal(user_id)
        return self._context(goal, today)

    def preview(
        self, user_id: UUID, current_weight: float, today: date
    ) -> CheckInResult:
        """Run the check-in calculation without storing anything."""
        goal = self._require_goal(user_id)
        context = self._context(goal, today)
        return self._calculate(goal, context, current_weight, today)

    def submit(
        self, user_id: UUID, current_weight: float, today: date
    ) -> CheckInRecord:
        """Run the check-in and persist the record, targets and weigh-in."""
        goal = self._require_goal(user_id)
        if not is_check_in_available(goal.last_check_in, today, self.policy):
            raise CheckInUnavailableError(
                "Next check-in opens in "
                f"{days_until_check_in(goal.last_check_in, today, self.policy)} days"
            )
        context = self._context(goal, today)
        result = self._calculate(goal, context, current_weight, today)
        record = CheckInRecord(
            user_id=user_id,
            check_in_date=today,
            weight=current_weight,
            previous_weight=context.previous_weight,
            avg_daily_calories=context.avg_daily_calories,
            old_daily_calories=goal.daily_calories,
            result=result,
        )
        self.check_ins.create_check_in(record)
        self.goals.apply_check_in(user_id, current_weight, result, today)
        self.weights.upsert(
            user_id, WeightEntry(logged_date=today, weight=current_weight)
        )
        _logger.info(
            "Check-in stored: user_id=%s old=%s new=%s tdee=%s",
            user_id,
            goal.daily_calories,
            result.new_daily_calories,
            result.calculated_true_tdee,
        )
        return record

    def _require_goal(self, user_id: UUID) -> GoalRecord:
        goal = self.goals.get_goal(user_id)
        if goal is None:
            raise GoalNotFoundError(f"No goal stored for user {user_id}")
        return goal

    def _context(self, goal: GoalRecord, today: date) -> CheckInContext:
        window_start = today - timedelta(days=self.policy.check_in_interval_days)
        entries = self.diary.list_entries(goal.user_id, window_start)
        avg_calories, days_logged = average_daily_calories(entries)
        if days_logged == 0:
            avg_calories = goal.daily_calories
        latest = self.weights.get_latest(goal.user_id)
        previous = self.weights.get_latest_before(goal.user_id, window_start)
        return CheckInContext(
            avg_daily_calories=avg_calories,
            days_logged=days_logged,
            latest_weight=latest.weight if latest else goal.current_weight,
            previous_weight=previous.weight if previous else goal.current_weight,
        )

    def _calculate(
        self,
        goal: GoalRecord,
        context: CheckInContext,
        current_weight: float,
        today: date,
    ) -> CheckInResult:
        result = perform_weekly_check_in(
            CheckInObservation(
                previous_weight_lbs=context.previous_weight,
                current_weight_lbs=current_weight,
                avg_daily_calories=context.avg_daily_calories,
                period_days=self.policy.check_in_interval_days,
            ),
            GoalSpec(
                current_weight_lbs=goal.current_weight,
                target_weight_lbs=goal.target_weight,
                target_date=goal.target_date,
            ),
            goal.daily_calories,
            goal.ratios,
            today,
            gender=goal.gender,
            policy=self.policy,
        )
        if result.floor_applied:
            _logger.warning(
                "Check-in target raised to floor: user_id=%s calories=%s",
                goal.user_id,
                result.new_daily_calories,
            )
        return result
