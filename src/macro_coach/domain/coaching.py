"""Weekly check-in coaching engine."""

from dataclasses import dataclass
from datetime import date

from macro_coach.domain.errors import InvalidInputError
from macro_coach.domain.models import (
    DEFAULT_PERIOD_DAYS,
    CheckInObservation,
    CheckInResult,
    Gender,
    GoalSpec,
    MacroRatioSet,
    parse_enum,
    require_positive,
)
from macro_coach.domain.policy import DEFAULT_POLICY, CoachingPolicy
from macro_coach.domain.targets import calculate_macro_grams, required_weekly_change
from macro_coach.domain.units import days_between, round_half_up

LOST_LESS_TEMPLATE = "Lost less than expected. Reducing daily calories by {step}."
LOST_MORE_TEMPLATE = (
    "Lost more than expected. Increasing daily calories by {step} "
    "to prevent too rapid loss."
)
GAINED_LESS_TEMPLATE = "Gained less than expected. Increasing daily calories by {step}."
GAINED_MORE_TEMPLATE = "Gained more than expected. Reducing daily calories by {step}."
ON_TRACK_MESSAGE = "On track! No adjustment needed."
WEIGHT_UP_TEMPLATE = "Weight increased slightly. Reducing calories by {step}."
WEIGHT_DOWN_TEMPLATE = "Weight decreased slightly. Increasing calories by {step}."
MAINTAINING_MESSAGE = "Maintaining weight. No adjustment needed."
FLOOR_NOTE_TEMPLATE = " Raised to the {floor} kcal minimum."


@dataclass(frozen=True)
class _Adjustment:
    delta: int
    reason: str


def calculate_true_tdee(
    avg_daily_calories: float,
    weight_change_lbs: float,
    period_days: int = DEFAULT_PERIOD_DAYS,
    policy: CoachingPolicy = DEFAULT_POLICY,
) -> int:
    """Back out actual daily expenditure from intake and weight change.

    Eating 2000 kcal/day while losing 1 lb over 7 days means expenditure
    was 2000 + 3500 / 7 = 2500 kcal/day.
    """
    require_positive("avg_daily_calories", avg_daily_calories)
    require_positive("period_days", period_days)
    stored_per_day = weight_change_lbs * policy.kcal_per_pound / period_days
    return round_half_up(avg_daily_calories - stored_per_day)


def perform_weekly_check_in(  # noqa: PLR0913
    observation: CheckInObservation,
    goal: GoalSpec,
    current_daily_target: float,
    ratios: MacroRatioSet,
    now: date,
    gender: Gender | None = None,
    policy: CoachingPolicy = DEFAULT_POLICY,
) -> CheckInResult:
    """Compare actual against expected progress and adjust the daily target.

    The expected rate is measured from the previous weigh-in. gender is only
    needed when the policy reapplies the calorie floor.
    """
    require_positive("current_daily_target", current_daily_target)
    actual = observation.current_weight_lbs - observation.previous_weight_lbs
    expected = required_weekly_change(
        observation.previous_weight_lbs,
        goal.target_weight_lbs,
        goal.target_date,
        now,
    )
    true_tdee = calculate_true_tdee(
        observation.avg_daily_calories, actual, observation.period_days, policy
    )

    adjustment = _choose_adjustment(expected, actual, policy)
    new_daily_calories = current_daily_target + adjustment.delta
    reason = adjustment.reason

    floor_applied = False
    if policy.reapply_floor_on_check_in:
        if gender is None:
            raise InvalidInputError("gender is required to reapply the calorie floor")
        floor = policy.calorie_floor(parse_enum(Gender, gender))
        if new_daily_calories < floor:
            new_daily_calories = floor
            floor_applied = True
            reason += FLOOR_NOTE_TEMPLATE.format(floor=floor)

    macros = calculate_macro_grams(new_daily_calories, ratios, policy)
    return CheckInResult(
        calculated_true_tdee=true_tdee,
        expected_weekly_change=expected,
        actual_weekly_change=actual,
        new_daily_calories=new_daily_calories,
        adjustment_reason=reason,
        new_protein_grams=macros.protein_grams,
        new_carbs_grams=macros.carbs_grams,
        new_fat_grams=macros.fat_grams,
        floor_applied=floor_applied,
        floor_reapplied_policy=policy.reapply_floor_on_check_in,
    )


def _choose_adjustment(
    expected: float, actual: float, policy: CoachingPolicy
) -> _Adjustment:
    tolerance = policy.check_in_tolerance_lbs
    step = policy.goal_adjustment_kcal
    if expected < 0:
        if actual > expected + tolerance:
            return _Adjustment(-step, LOST_LESS_TEMPLATE.format(step=step))
        if actual < expected - tolerance:
            return _Adjustment(step, LOST_MORE_TEMPLATE.format(step=step))
        return _Adjustment(0, ON_TRACK_MESSAGE)
    if expected > 0:
        if actual < expected - tolerance:
            return _Adjustment(step, GAINED_LESS_TEMPLATE.format(step=step))
        if actual > expected + tolerance:
            return _Adjustment(-step, GAINED_MORE_TEMPLATE.format(step=step))
        return _Adjustment(0, ON_TRACK_MESSAGE)

    step = policy.maintenance_adjustment_kcal
    if abs(actual) <= tolerance:
        return _Adjustment(0, MAINTAINING_MESSAGE)
    if actual > 0:
        return _Adjustment(-step, WEIGHT_UP_TEMPLATE.format(step=step))
    return _Adjustment(step, WEIGHT_DOWN_TEMPLATE.format(step=step))


def is_check_in_available(
    last_check_in: date | None,
    now: date,
    policy: CoachingPolicy = DEFAULT_POLICY,
) -> bool:
    """Return True when no check-in exists or the interval has elapsed."""
    if last_check_in is None:
        return True
    return days_between(last_check_in, now) >= policy.check_in_interval_days


def days_until_check_in(
    last_check_in: date | None,
    now: date,
    policy: CoachingPolicy = DEFAULT_POLICY,
) -> int:
    """Return days remaining until the next check-in opens."""
    if last_check_in is None:
        return 0
    days_since = days_between(last_check_in, now)
    return max(0, policy.check_in_interval_days - days_since)
