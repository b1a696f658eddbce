"""Coaching constants grouped into one injectable policy."""

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType

from macro_coach.domain.models import (
    ActivityLevel,
    Gender,
    MacroPreference,
    MacroRatioSet,
)

_ACTIVITY_MULTIPLIERS = MappingProxyType(
    {
        ActivityLevel.SEDENTARY: 1.2,
        ActivityLevel.LIGHT: 1.375,
        ActivityLevel.MODERATE: 1.55,
        ActivityLevel.ACTIVE: 1.725,
        ActivityLevel.VERY_ACTIVE: 1.9,
    }
)

# MANUAL maps to the balanced split as the starting point before the user
# edits the ratios.
_MACRO_PRESETS = MappingProxyType(
    {
        MacroPreference.BALANCED: MacroRatioSet(protein=0.30, carbs=0.35, fat=0.35),
        MacroPreference.HIGH_PROTEIN: MacroRatioSet(
            protein=0.40, carbs=0.30, fat=0.30
        ),
        MacroPreference.LOW_CARB: MacroRatioSet(protein=0.35, carbs=0.20, fat=0.45),
        MacroPreference.KETO: MacroRatioSet(protein=0.30, carbs=0.05, fat=0.65),
        MacroPreference.MANUAL: MacroRatioSet(protein=0.30, carbs=0.35, fat=0.35),
    }
)

_CALORIE_FLOORS = MappingProxyType(
    {
        Gender.MALE: 1500,
        Gender.FEMALE: 1200,
        Gender.OTHER: 1200,
    }
)


@dataclass(frozen=True)
class CoachingPolicy:
    """Immutable table of constants used by the calculation engine."""

    activity_multipliers: Mapping[ActivityLevel, float] = field(
        default_factory=lambda: _ACTIVITY_MULTIPLIERS
    )
    macro_presets: Mapping[MacroPreference, MacroRatioSet] = field(
        default_factory=lambda: _MACRO_PRESETS
    )
    calorie_floors: Mapping[Gender, int] = field(
        default_factory=lambda: _CALORIE_FLOORS
    )
    protein_kcal_per_gram: float = 4
    carbs_kcal_per_gram: float = 4
    fat_kcal_per_gram: float = 9
    kcal_per_pound: float = 3500
    max_weekly_loss_lbs: float = 2
    max_weekly_gain_lbs: float = 1
    unrealistic_factor: float = 1.5
    check_in_tolerance_lbs: float = 0.2
    goal_adjustment_kcal: int = 100
    maintenance_adjustment_kcal: int = 50
    check_in_interval_days: int = 7
    reapply_floor_on_check_in: bool = False

    def calorie_floor(self, gender: Gender) -> int:
        """Return the minimum daily calories for a gender."""
        return self.calorie_floors[gender]

    def with_overrides(self, **changes: object) -> "CoachingPolicy":
        """Return a copy of the policy with selected fields replaced."""
        return replace(self, **changes)


DEFAULT_POLICY = CoachingPolicy()
