"""Onboarding plan service."""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from macro_coach.domain.check_ins import WeightEntry
from macro_coach.domain.energy import calculate_tdee
from macro_coach.domain.errors import InvalidInputError
from macro_coach.domain.models import (
    BodyProfile,
    CheckInResult,
    GoalSafety,
    GoalSpec,
    GoalType,
)
from macro_coach.domain.plans import GoalRecord, NutritionPlan, OnboardingAnswers
from macro_coach.domain.policy import DEFAULT_POLICY, CoachingPolicy
from macro_coach.domain.targets import (
    calculate_daily_calorie_target,
    calculate_macro_grams,
    required_weekly_change,
    resolve_ratios,
    validate_goal_safety,
)
from macro_coach.domain.units import age_in_years, feet_inches_to_cm, pounds_to_kg

_logger = logging.getLogger(__name__)


class GoalsRepository(Protocol):
    """Persistence interface for user goals."""

    def get_goal(self, user_id: UUID) -> GoalRecord | None:
        """Return the stored goal for a user, if any."""

    def save_goal(self, goal: GoalRecord) -> None:
        """Insert or replace the goal for goal.user_id."""

    def apply_check_in(
        self,
        user_id: UUID,
        current_weight: float,
        result: CheckInResult,
        check_in_date: date,
    ) -> None:
        """Store new targets and the check-in date on the goal."""


class WeightRepository(Protocol):
    """Persistence interface for weigh-ins."""

    def get_latest(self, user_id: UUID) -> WeightEntry | None:
        """Return the most recent weigh-in."""

    def get_latest_before(self, user_id: UUID, before: date) -> WeightEntry | None:
        """Return the most recent weigh-in strictly before a date."""

    def upsert(self, user_id: UUID, entry: WeightEntry) -> None:
        """Store a weigh-in, replacing any entry for the same day."""


@dataclass
class PlanService:
    """Service for turning onboarding answers into stored targets."""

    repository: GoalsRepository
    weights: WeightRepository
    policy: CoachingPolicy = DEFAULT_POLICY

    def validate_timeline(self, answers: OnboardingAnswers, today: date) -> GoalSafety:
        """Return the safety verdict for the goal's weekly rate."""
        weekly_change = required_weekly_change(
            answers.current_weight_lbs,
            answers.target_weight_lbs,
            answers.target_date,
            today,
        )
        return validate_goal_safety(weekly_change, self.policy)

    def build_plan(self, answers: OnboardingAnswers, today: date) -> NutritionPlan:
        """Compute TDEE, calorie and macro targets without persisting."""
        goal_type = _goal_type(answers.current_weight_lbs, answers.target_weight_lbs)
        if goal_type is not GoalType.MAINTAIN and answers.target_date <= today:
            raise InvalidInputError("Target date must be in the future")

        height_cm = feet_inches_to_cm(answers.height_feet, answers.height_inches)
        age_years = age_in_years(answers.date_of_birth, today)
        profile = BodyProfile(
            gender=answers.gender,
            weight_kg=pounds_to_kg(answers.current_weight_lbs),
            height_cm=height_cm,
            age_years=age_years,
        )
        tdee = calculate_tdee(profile, answers.activity_level, self.policy)
        goal = GoalSpec(
            current_weight_lbs=answers.current_weight_lbs,
            target_weight_lbs=answers.target_weight_lbs,
            target_date=answers.target_date,
        )
        calorie_target = calculate_daily_calorie_target(
            tdee, goal, profile.gender, today, self.policy
        )
        if calorie_target.floor_applied:
            _logger.warning(
                "Calorie target raised to floor: tdee=%s weekly_change=%.2f floor=%s",
                tdee,
                calorie_target.weekly_change,
                calorie_target.daily_calories,
            )
        ratios = resolve_ratios(
            answers.macro_preference, answers.custom_ratios, self.policy
        )
        macros = calculate_macro_grams(
            calorie_target.daily_calories, ratios, self.policy
        )
        return NutritionPlan(
            tdee=tdee,
            height_cm=height_cm,
            age_years=age_years,
            goal_type=goal_type,
            calorie_target=calorie_target,
            macros=macros,
            ratios=ratios,
            safety=validate_goal_safety(calorie_target.weekly_change, self.policy),
        )

    def create_plan(
        self, user_id: UUID, answers: OnboardingAnswers, today: date
    ) -> NutritionPlan:
        """Build a plan, store it as the goal and log the starting weigh-in."""
        plan = self.build_plan(answers, today)
        if not plan.safety.is_realistic:
            raise InvalidInputError(plan.safety.message)

        self.repository.save_goal(
            GoalRecord(
                user_id=user_id,
                gender=answers.gender,
                height_cm=plan.height_cm,
                date_of_birth=answers.date_of_birth,
                activity_level=answers.activity_level,
                starting_weight=answers.current_weight_lbs,
                current_weight=answers.current_weight_lbs,
                target_weight=answers.target_weight_lbs,
                target_date=answers.target_date,
                goal_type=plan.goal_type,
                macro_preference=answers.macro_preference,
                ratios=plan.ratios,
                tdee=plan.tdee,
                daily_calories=plan.macros.daily_calories,
                protein_grams=plan.macros.protein_grams,
                carbs_grams=plan.macros.carbs_grams,
                fat_grams=plan.macros.fat_grams,
            )
        )
        self.weights.upsert(
            user_id,
            WeightEntry(logged_date=today, weight=answers.current_weight_lbs),
        )
        _logger.info(
            "Plan created: user_id=%s goal=%s calories=%s",
            user_id,
            plan.goal_type.value,
            plan.macros.daily_calories,
        )
        return plan


def _goal_type(current_lbs: float, target_lbs: float) -> GoalType:
    if target_lbs < current_lbs:
        return GoalType.LOSE
    if target_lbs > current_lbs:
        return GoalType.GAIN
    return GoalType.MAINTAIN
