"""Domain models for onboarding plans and stored goals."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from macro_coach.domain.models import (
    ActivityLevel,
    CalorieTarget,
    Gender,
    GoalSafety,
    GoalType,
    MacroPreference,
    MacroRatioSet,
    MacroTargets,
)


@dataclass(frozen=True)
class OnboardingAnswers:
    """Raw onboarding answers in imperial units."""

    gender: Gender
    height_feet: int
    height_inches: float
    date_of_birth: date
    activity_level: ActivityLevel
    current_weight_lbs: float
    target_weight_lbs: float
    target_date: date
    macro_preference: MacroPreference = MacroPreference.BALANCED
    custom_ratios: MacroRatioSet | None = None


@dataclass(frozen=True)
class NutritionPlan:
    """Targets computed from onboarding answers."""

    tdee: int
    height_cm: float
    age_years: int
    goal_type: GoalType
    calorie_target: CalorieTarget
    macros: MacroTargets
    ratios: MacroRatioSet
    safety: GoalSafety


@dataclass(frozen=True)
class GoalRecord:
    """Stored goal row for a user."""

    user_id: UUID
    gender: Gender
    height_cm: float
    date_of_birth: date
    activity_level: ActivityLevel
    starting_weight: float
    current_weight: float
    target_weight: float
    target_date: date
    goal_type: GoalType
    macro_preference: MacroPreference
    ratios: MacroRatioSet
    tdee: float
    daily_calories: float
    protein_grams: float
    carbs_grams: float
    fat_grams: float
    last_check_in: date | None = None
