"""Pydantic request and response models for the coaching API."""

from datetime import date

from pydantic import BaseModel, Field

from macro_coach.domain.check_ins import CheckInContext, CheckInRecord, CheckInStatus
from macro_coach.domain.models import (
    ActivityLevel,
    CheckInResult,
    Gender,
    GoalType,
    MacroPreference,
    MacroRatioSet,
)
from macro_coach.domain.plans import NutritionPlan, OnboardingAnswers


class RatioPayload(BaseModel):
    """Macro ratio triple."""

    protein: float = Field(ge=0)
    carbs: float = Field(ge=0)
    fat: float = Field(ge=0)


class OnboardingRequest(BaseModel):
    """Onboarding answers in imperial units."""

    gender: Gender
    height_feet: int = Field(ge=0)
    height_inches: float = Field(ge=0)
    date_of_birth: date
    activity_level: ActivityLevel = ActivityLevel.MODERATE
    current_weight_lbs: float = Field(gt=0)
    target_weight_lbs: float = Field(gt=0)
    target_date: date
    macro_preference: MacroPreference = MacroPreference.BALANCED
    custom_ratios: RatioPayload | None = None

    def to_answers(self) -> OnboardingAnswers:
        custom = None
        if self.custom_ratios is not None:
            custom = MacroRatioSet(
                protein=self.custom_ratios.protein,
                carbs=self.custom_ratios.carbs,
                fat=self.custom_ratios.fat,
            )
        return OnboardingAnswers(
            gender=self.gender,
            height_feet=self.height_feet,
            height_inches=self.height_inches,
            date_of_birth=self.date_of_birth,
            activity_level=self.activity_level,
            current_weight_lbs=self.current_weight_lbs,
            target_weight_lbs=self.target_weight_lbs,
            target_date=self.target_date,
            macro_preference=self.macro_preference,
            custom_ratios=custom,
        )


class SafetyResponse(BaseModel):
    is_safe: bool
    is_realistic: bool
    message: str


class PlanResponse(BaseModel):
    """Computed onboarding targets."""

    tdee: int
    height_cm: float
    age_years: int
    goal_type: GoalType
    weekly_change: float
    daily_deficit_surplus: float
    daily_calories: float
    floor_applied: bool
    protein_grams: int
    carbs_grams: int
    fat_grams: int
    ratios: RatioPayload
    safety: SafetyResponse

    @classmethod
    def from_plan(cls, plan: NutritionPlan) -> "PlanResponse":
        target = plan.calorie_target
        return cls(
            tdee=plan.tdee,
            height_cm=plan.height_cm,
            age_years=plan.age_years,
            goal_type=plan.goal_type,
            weekly_change=target.weekly_change,
            daily_deficit_surplus=target.daily_deficit_surplus,
            daily_calories=plan.macros.daily_calories,
            floor_applied=target.floor_applied,
            protein_grams=plan.macros.protein_grams,
            carbs_grams=plan.macros.carbs_grams,
            fat_grams=plan.macros.fat_grams,
            ratios=RatioPayload(
                protein=plan.ratios.protein,
                carbs=plan.ratios.carbs,
                fat=plan.ratios.fat,
            ),
            safety=SafetyResponse(
                is_safe=plan.safety.is_safe,
                is_realistic=plan.safety.is_realistic,
                message=plan.safety.message,
            ),
        )


class CheckInRequest(BaseModel):
    """Weigh-in submitted with a check-in."""

    current_weight: float = Field(gt=0)


class CheckInStatusResponse(BaseModel):
    """Check-in availability and the data gathered for it."""

    available: bool
    days_until: int
    last_check_in: date | None
    avg_daily_calories: float
    days_logged: int
    latest_weight: float
    previous_weight: float

    @classmethod
    def build(
        cls, status: CheckInStatus, context: CheckInContext
    ) -> "CheckInStatusResponse":
        return cls(
            available=status.available,
            days_until=status.days_until,
            last_check_in=status.last_check_in,
            avg_daily_calories=context.avg_daily_calories,
            days_logged=context.days_logged,
            latest_weight=context.latest_weight,
            previous_weight=context.previous_weight,
        )


class CheckInResultResponse(BaseModel):
    """Outcome of a check-in calculation."""

    calculated_true_tdee: int
    expected_weekly_change: float
    actual_weekly_change: float
    new_daily_calories: float
    adjustment_reason: str
    new_protein_grams: int
    new_carbs_grams: int
    new_fat_grams: int
    floor_applied: bool
    floor_reapplied_policy: bool
    old_daily_calories: float | None = None
    check_in_date: date | None = None

    @classmethod
    def from_result(cls, result: CheckInResult) -> "CheckInResultResponse":
        return cls(
            calculated_true_tdee=result.calculated_true_tdee,
            expected_weekly_change=result.expected_weekly_change,
            actual_weekly_change=result.actual_weekly_change,
            new_daily_calories=result.new_daily_calories,
            adjustment_reason=result.adjustment_reason,
            new_protein_grams=result.new_protein_grams,
            new_carbs_grams=result.new_carbs_grams,
            new_fat_grams=result.new_fat_grams,
            floor_applied=result.floor_applied,
            floor_reapplied_policy=result.floor_reapplied_policy,
        )

    @classmethod
    def from_record(cls, record: CheckInRecord) -> "CheckInResultResponse":
        response = cls.from_result(record.result)
        response.old_daily_calories = record.old_daily_calories
        response.check_in_date = record.check_in_date
        return response
