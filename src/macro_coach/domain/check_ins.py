"""Domain models for diary intake, weigh-ins and check-in records."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from macro_coach.domain.models import CheckInResult


@dataclass(frozen=True)
class DiaryEntry:
    """Calories from one logged food entry."""

    log_date: date
    calories: float


@dataclass(frozen=True)
class WeightEntry:
    """A weigh-in in pounds."""

    logged_date: date
    weight: float


@dataclass(frozen=True)
class CheckInContext:
    """Inputs gathered for a check-in."""

    avg_daily_calories: float
    days_logged: int
    latest_weight: float
    previous_weight: float


@dataclass(frozen=True)
class CheckInStatus:
    """Whether a check-in can be submitted now."""

    available: bool
    days_until: int
    last_check_in: date | None


@dataclass(frozen=True)
class CheckInRecord:
    """Audit row stored for a completed check-in."""

    user_id: UUID
    check_in_date: date
    weight: float
    previous_weight: float
    avg_daily_calories: float
    old_daily_calories: float
    result: CheckInResult

    @property
    def weight_change(self) -> float:
        return self.result.actual_weekly_change


def average_daily_calories(entries: list[DiaryEntry]) -> tuple[float, int]:
    """Return the mean calories per logged day and the number of days logged."""
    per_day: dict[date, float] = {}
    for entry in entries:
        per_day[entry.log_date] = per_day.get(entry.log_date, 0.0) + entry.calories
    if not per_day:
        return 0.0, 0
    return sum(per_day.values()) / len(per_day), len(per_day)
