"""Value types for the energy-balance engine."""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import TypeVar

from macro_coach.domain.errors import InvalidInputError

DEFAULT_PERIOD_DAYS = 7


class Gender(str, Enum):
    """Gender used to pick the BMR offset and calorie floor."""

    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class ActivityLevel(str, Enum):
    """Activity level with a fixed TDEE multiplier."""

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY_ACTIVE = "very_active"


class MacroPreference(str, Enum):
    """Named macro split; MANUAL uses caller-supplied ratios."""

    BALANCED = "balanced"
    HIGH_PROTEIN = "high_protein"
    LOW_CARB = "low_carb"
    KETO = "keto"
    MANUAL = "manual"


class GoalType(str, Enum):
    """Direction of the weight goal."""

    LOSE = "lose"
    MAINTAIN = "maintain"
    GAIN = "gain"


_E = TypeVar("_E", bound=Enum)


def parse_enum(enum_type: type[_E], value: object) -> _E:
    """Coerce a raw value into an enum member or raise InvalidInputError."""
    if isinstance(value, enum_type):
        return value
    try:
        return enum_type(value)
    except ValueError as exc:
        raise InvalidInputError(
            f"Unknown {enum_type.__name__} value: {value!r}"
        ) from exc


def require_positive(name: str, value: float) -> None:
    """Raise InvalidInputError unless value is strictly positive."""
    if not value > 0:
        raise InvalidInputError(f"{name} must be positive, got {value!r}")


@dataclass(frozen=True)
class BodyProfile:
    """Body stats used as BMR input."""

    gender: Gender
    weight_kg: float
    height_cm: float
    age_years: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "gender", parse_enum(Gender, self.gender))
        require_positive("weight_kg", self.weight_kg)
        require_positive("height_cm", self.height_cm)
        if self.age_years < 0:
            raise InvalidInputError(
                f"age_years must be non-negative, got {self.age_years!r}"
            )


@dataclass(frozen=True)
class MacroRatioSet:
    """Protein/carbs/fat fractions of daily calories."""

    protein: float
    carbs: float
    fat: float

    def __post_init__(self) -> None:
        for name in ("protein", "carbs", "fat"):
            if getattr(self, name) < 0:
                raise InvalidInputError(f"{name} ratio must be non-negative")
        if self.total <= 0:
            raise InvalidInputError("Macro ratios must not sum to zero")

    @property
    def total(self) -> float:
        return self.protein + self.carbs + self.fat

    def normalized(self) -> "MacroRatioSet":
        """Return the ratios scaled to sum to 1."""
        total = self.total
        return MacroRatioSet(
            protein=self.protein / total,
            carbs=self.carbs / total,
            fat=self.fat / total,
        )


@dataclass(frozen=True)
class GoalSpec:
    """Weight goal with a target date."""

    current_weight_lbs: float
    target_weight_lbs: float
    target_date: date

    def __post_init__(self) -> None:
        require_positive("current_weight_lbs", self.current_weight_lbs)
        require_positive("target_weight_lbs", self.target_weight_lbs)


@dataclass(frozen=True)
class GoalSafety:
    """Safety verdict for a weekly rate of change."""

    is_safe: bool
    is_realistic: bool
    message: str


@dataclass(frozen=True)
class CalorieTarget:
    """Daily calorie target derived from a goal."""

    daily_calories: int
    weekly_change: float
    daily_deficit_surplus: float
    floor_applied: bool = False


@dataclass(frozen=True)
class MacroTargets:
    """Daily calories split into macro grams."""

    daily_calories: float
    protein_grams: int
    carbs_grams: int
    fat_grams: int


@dataclass(frozen=True)
class CheckInObservation:
    """Observed progress over the last check-in period."""

    previous_weight_lbs: float
    current_weight_lbs: float
    avg_daily_calories: float
    period_days: int = DEFAULT_PERIOD_DAYS

    def __post_init__(self) -> None:
        require_positive("previous_weight_lbs", self.previous_weight_lbs)
        require_positive("current_weight_lbs", self.current_weight_lbs)
        require_positive("avg_daily_calories", self.avg_daily_calories)
        require_positive("period_days", self.period_days)


@dataclass(frozen=True)
class CheckInResult:
    """Outcome of a weekly check-in."""

    calculated_true_tdee: int
    expected_weekly_change: float
    actual_weekly_change: float
    new_daily_calories: float
    adjustment_reason: str
    new_protein_grams: int
    new_carbs_grams: int
    new_fat_grams: int
    floor_applied: bool = False
    floor_reapplied_policy: bool = False
