"""Tests for goal-to-target translation."""

from datetime import date, timedelta

import pytest

from macro_coach.domain.errors import InvalidInputError
from macro_coach.domain.models import (
    Gender,
    GoalSpec,
    MacroPreference,
    MacroRatioSet,
)
from macro_coach.domain.policy import DEFAULT_POLICY
from macro_coach.domain.targets import (
    SAFE_GOAL_MESSAGE,
    calculate_daily_calorie_target,
    calculate_macro_grams,
    get_macro_targets,
    required_weekly_change,
    validate_goal_safety,
)

NOW = date(2026, 1, 1)


def test_required_weekly_change_for_loss() -> None:
    assert required_weekly_change(200, 190, NOW + timedelta(days=70), NOW) == -1.0


def test_required_weekly_change_is_zero_without_future_date() -> None:
    assert required_weekly_change(200, 190, NOW, NOW) == 0
    assert required_weekly_change(200, 190, NOW - timedelta(days=5), NOW) == 0


def test_required_weekly_change_rejects_bad_weights() -> None:
    with pytest.raises(InvalidInputError):
        required_weekly_change(-5, 190, NOW + timedelta(days=70), NOW)


def test_goal_safety_tiers_for_loss() -> None:
    dangerous = validate_goal_safety(-3)
    aggressive = validate_goal_safety(-2.5)
    moderate = validate_goal_safety(-1.5)

    assert not dangerous.is_safe
    assert not dangerous.is_realistic
    assert "dangerous" in dangerous.message
    assert "3.0 lbs/week" in dangerous.message
    assert not aggressive.is_safe
    assert aggressive.is_realistic
    assert "aggressive" in aggressive.message
    assert moderate.is_safe
    assert moderate.is_realistic


def test_goal_safety_tiers_for_gain() -> None:
    assert not validate_goal_safety(2).is_realistic
    assert "excessive fat gain" in validate_goal_safety(2).message
    aggressive = validate_goal_safety(1.2)
    assert not aggressive.is_safe
    assert aggressive.is_realistic
    assert validate_goal_safety(1).is_safe


def test_gain_at_upper_bound_is_aggressive_but_realistic() -> None:
    verdict = validate_goal_safety(1.5)

    assert verdict.is_realistic
    assert not verdict.is_safe
    assert "aggressive" in verdict.message
    assert not validate_goal_safety(1.51).is_realistic


def test_zero_change_is_safe() -> None:
    verdict = validate_goal_safety(0)

    assert verdict.is_safe
    assert verdict.is_realistic
    assert verdict.message == SAFE_GOAL_MESSAGE


def test_daily_calorie_target_applies_deficit() -> None:
    goal = GoalSpec(
        current_weight_lbs=200,
        target_weight_lbs=190,
        target_date=NOW + timedelta(days=70),
    )

    target = calculate_daily_calorie_target(2500, goal, Gender.MALE, NOW)

    assert target.daily_calories == 2000
    assert target.weekly_change == pytest.approx(-1)
    assert target.daily_deficit_surplus == pytest.approx(-500)
    assert not target.floor_applied


def test_daily_calorie_target_applies_surplus() -> None:
    goal = GoalSpec(
        current_weight_lbs=150,
        target_weight_lbs=155,
        target_date=NOW + timedelta(days=70),
    )

    target = calculate_daily_calorie_target(2500, goal, Gender.FEMALE, NOW)

    assert target.daily_calories == 2750


def test_daily_calorie_target_clamps_to_floor() -> None:
    goal = GoalSpec(
        current_weight_lbs=200,
        target_weight_lbs=180,
        target_date=NOW + timedelta(days=14),
    )

    female = calculate_daily_calorie_target(1800, goal, Gender.FEMALE, NOW)
    other = calculate_daily_calorie_target(1800, goal, "other", NOW)
    male = calculate_daily_calorie_target(1800, goal, Gender.MALE, NOW)

    assert female.daily_calories == 1200
    assert female.floor_applied
    assert other.daily_calories == 1200
    assert male.daily_calories == 1500


def test_daily_calorie_target_is_repeatable() -> None:
    goal = GoalSpec(
        current_weight_lbs=180,
        target_weight_lbs=170,
        target_date=NOW + timedelta(days=90),
    )

    first = calculate_daily_calorie_target(2300, goal, Gender.OTHER, NOW)
    second = calculate_daily_calorie_target(2300, goal, Gender.OTHER, NOW)

    assert first == second


def test_macro_presets_match_reference_values() -> None:
    high_protein = get_macro_targets(2000, MacroPreference.HIGH_PROTEIN)
    balanced = get_macro_targets(2000, "balanced")

    assert (high_protein.protein_grams, high_protein.carbs_grams) == (200, 150)
    assert high_protein.fat_grams == 67
    assert (balanced.protein_grams, balanced.carbs_grams) == (150, 175)
    assert balanced.fat_grams == 78
    assert balanced.daily_calories == 2000


def test_manual_preference_uses_custom_ratios() -> None:
    macros = get_macro_targets(
        2000,
        MacroPreference.MANUAL,
        MacroRatioSet(protein=0.45, carbs=0.25, fat=0.30),
    )

    assert macros.protein_grams == 225
    assert macros.carbs_grams == 125
    assert macros.fat_grams == 67


def test_manual_preference_requires_ratios() -> None:
    with pytest.raises(InvalidInputError):
        get_macro_targets(2000, MacroPreference.MANUAL)


def test_unknown_preference_rejected() -> None:
    with pytest.raises(InvalidInputError):
        get_macro_targets(2000, "carnivore")


def test_macro_grams_normalize_ratios() -> None:
    scaled = calculate_macro_grams(2000, MacroRatioSet(protein=3, carbs=3.5, fat=3.5))

    assert scaled == get_macro_targets(2000, MacroPreference.BALANCED)


def test_macro_ratio_validation() -> None:
    with pytest.raises(InvalidInputError):
        MacroRatioSet(protein=0, carbs=0, fat=0)
    with pytest.raises(InvalidInputError):
        MacroRatioSet(protein=-0.1, carbs=0.6, fat=0.5)
    with pytest.raises(InvalidInputError):
        calculate_macro_grams(-1, MacroRatioSet(protein=1, carbs=1, fat=1))


def test_presets_sum_to_one() -> None:
    assert set(DEFAULT_POLICY.macro_presets) == set(MacroPreference)
    for ratios in DEFAULT_POLICY.macro_presets.values():
        assert ratios.total == pytest.approx(1, abs=0.01)
    keto = DEFAULT_POLICY.macro_presets[MacroPreference.KETO]
    assert (keto.carbs, keto.fat) == (0.05, 0.65)


def test_macro_grams_recombine_within_rounding_slack() -> None:
    # Each gram amount is off by at most half a gram.
    max_slack = 0.5 * (4 + 4 + 9)
    for ratios in DEFAULT_POLICY.macro_presets.values():
        for calories in range(1200, 4001, 37):
            macros = calculate_macro_grams(calories, ratios)
            recombined = (
                macros.protein_grams * 4 + macros.carbs_grams * 4 + macros.fat_grams * 9
            )
            assert abs(recombined - calories) <= max_slack
