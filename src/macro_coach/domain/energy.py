"""Energy expenditure estimates (Mifflin-St Jeor)."""

from macro_coach.domain.models import ActivityLevel, BodyProfile, Gender, parse_enum
from macro_coach.domain.policy import DEFAULT_POLICY, CoachingPolicy
from macro_coach.domain.units import round_half_up

# "other" uses the midpoint of the male (+5) and female (-161) offsets.
_BMR_OFFSETS = {
    Gender.MALE: 5,
    Gender.FEMALE: -161,
    Gender.OTHER: -78,
}


def calculate_bmr(profile: BodyProfile) -> float:
    """Return basal metabolic rate in kcal/day."""
    base = 10 * profile.weight_kg + 6.25 * profile.height_cm - 5 * profile.age_years
    return base + _BMR_OFFSETS[profile.gender]


def calculate_tdee(
    profile: BodyProfile,
    activity_level: ActivityLevel,
    policy: CoachingPolicy = DEFAULT_POLICY,
) -> int:
    """Return total daily energy expenditure, rounded to whole kcal."""
    level = parse_enum(ActivityLevel, activity_level)
    return round_half_up(calculate_bmr(profile) * policy.activity_multipliers[level])
