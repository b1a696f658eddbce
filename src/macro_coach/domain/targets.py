"""Translate weight goals into calorie and macro targets."""

from datetime import date

from macro_coach.domain.errors import InvalidInputError
from macro_coach.domain.models import (
    CalorieTarget,
    Gender,
    GoalSafety,
    GoalSpec,
    MacroPreference,
    MacroRatioSet,
    MacroTargets,
    parse_enum,
    require_positive,
)
from macro_coach.domain.policy import DEFAULT_POLICY, CoachingPolicy
from macro_coach.domain.units import days_between, round_half_up

DAYS_PER_WEEK = 7

SAFE_GOAL_MESSAGE = "Your goal is realistic and safe."


def required_weekly_change(
    current_lbs: float, target_lbs: float, target_date: date, now: date
) -> float:
    """Return the lbs/week needed to reach target_lbs by target_date.

    Returns 0 when the target date is today or in the past. Callers should
    read that as "no defined rate" rather than a maintenance goal.
    """
    require_positive("current_lbs", current_lbs)
    require_positive("target_lbs", target_lbs)
    weeks = days_between(now, target_date) / DAYS_PER_WEEK
    if weeks <= 0:
        return 0.0
    return (target_lbs - current_lbs) / weeks


def validate_goal_safety(
    weekly_change: float, policy: CoachingPolicy = DEFAULT_POLICY
) -> GoalSafety:
    """Grade a weekly rate of change.

    Rates above the limit are aggressive but realistic. Losses at or beyond
    limit x factor are unrealistic, gains only once they exceed it.
    """
    magnitude = abs(weekly_change)
    if weekly_change < 0:
        limit = policy.max_weekly_loss_lbs
        if magnitude >= limit * policy.unrealistic_factor:
            return GoalSafety(
                is_safe=False,
                is_realistic=False,
                message=(
                    f"Losing {magnitude:.1f} lbs/week is extremely dangerous and "
                    f"unrealistic. Maximum recommended is {limit:g} lbs/week."
                ),
            )
        if magnitude > limit:
            return GoalSafety(
                is_safe=False,
                is_realistic=True,
                message=(
                    f"Losing {magnitude:.1f} lbs/week is aggressive and may not be "
                    "sustainable. Consider a more gradual approach."
                ),
            )
    elif weekly_change > 0:
        limit = policy.max_weekly_gain_lbs
        if magnitude > limit * policy.unrealistic_factor:
            return GoalSafety(
                is_safe=False,
                is_realistic=False,
                message=(
                    f"Gaining {magnitude:.1f} lbs/week will likely result in "
                    f"excessive fat gain. Maximum recommended is {limit:g} lb/week."
                ),
            )
        if magnitude > limit:
            return GoalSafety(
                is_safe=False,
                is_realistic=True,
                message=(
                    f"Gaining {magnitude:.1f} lbs/week is aggressive. Consider a "
                    "slower approach for lean gains."
                ),
            )
    return GoalSafety(is_safe=True, is_realistic=True, message=SAFE_GOAL_MESSAGE)


def calculate_daily_calorie_target(
    tdee: float,
    goal: GoalSpec,
    gender: Gender,
    now: date,
    policy: CoachingPolicy = DEFAULT_POLICY,
) -> CalorieTarget:
    """Return the daily calorie target for a goal, never below the floor."""
    require_positive("tdee", tdee)
    floor = policy.calorie_floor(parse_enum(Gender, gender))
    weekly_change = required_weekly_change(
        goal.current_weight_lbs, goal.target_weight_lbs, goal.target_date, now
    )
    daily_deficit_surplus = weekly_change * policy.kcal_per_pound / DAYS_PER_WEEK
    daily_calories = round_half_up(tdee + daily_deficit_surplus)
    floor_applied = daily_calories < floor
    if floor_applied:
        daily_calories = floor
    return CalorieTarget(
        daily_calories=daily_calories,
        weekly_change=weekly_change,
        daily_deficit_surplus=daily_deficit_surplus,
        floor_applied=floor_applied,
    )


def calculate_macro_grams(
    daily_calories: float,
    ratios: MacroRatioSet,
    policy: CoachingPolicy = DEFAULT_POLICY,
) -> MacroTargets:
    """Split daily calories into macro grams.

    Each gram amount is rounded on its own, so the grams may recombine to a
    few kcal off daily_calories.
    """
    if daily_calories < 0:
        raise InvalidInputError("daily_calories must be non-negative")
    normalized = ratios.normalized()
    return MacroTargets(
        daily_calories=daily_calories,
        protein_grams=round_half_up(
            daily_calories * normalized.protein / policy.protein_kcal_per_gram
        ),
        carbs_grams=round_half_up(
            daily_calories * normalized.carbs / policy.carbs_kcal_per_gram
        ),
        fat_grams=round_half_up(
            daily_calories * normalized.fat / policy.fat_kcal_per_gram
        ),
    )


def resolve_ratios(
    preference: MacroPreference,
    custom_ratios: MacroRatioSet | None = None,
    policy: CoachingPolicy = DEFAULT_POLICY,
) -> MacroRatioSet:
    """Return the ratio set for a preference; MANUAL needs custom_ratios."""
    preference = parse_enum(MacroPreference, preference)
    if preference is MacroPreference.MANUAL:
        if custom_ratios is None:
            raise InvalidInputError("Manual macro preference requires custom ratios")
        return custom_ratios
    return policy.macro_presets[preference]


def get_macro_targets(
    daily_calories: float,
    preference: MacroPreference,
    custom_ratios: MacroRatioSet | None = None,
    policy: CoachingPolicy = DEFAULT_POLICY,
) -> MacroTargets:
    """Return macro targets for a named preference."""
    ratios = resolve_ratios(preference, custom_ratios, policy)
    return calculate_macro_grams(daily_calories, ratios, policy)
