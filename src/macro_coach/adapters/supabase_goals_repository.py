"""Supabase repository for user goals."""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from uuid import UUID

from supabase import Client

from macro_coach.domain.models import (
    ActivityLevel,
    CheckInResult,
    Gender,
    GoalType,
    MacroPreference,
    MacroRatioSet,
)
from macro_coach.domain.plans import GoalRecord
from macro_coach.services.plans import GoalsRepository

_GOAL_COLUMNS = (
    "user_id, gender, height_cm, date_of_birth, activity_level, starting_weight, "
    "current_weight, target_weight, target_date, goal_type, macro_preference, "
    "protein_ratio, carbs_ratio, fat_ratio, tdee, daily_calories, protein_grams, "
    "carbs_grams, fat_grams, last_check_in"
)


@dataclass
class SupabaseGoalsRepository(GoalsRepository):
    """Supabase implementation for the goals table."""

    client: Client

    def get_goal(self, user_id: UUID) -> GoalRecord | None:
        """Return the goal row for a user."""
        response = (
            self.client.table("goals")
            .select(_GOAL_COLUMNS)
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_goal(response.data[0])

    def save_goal(self, goal: GoalRecord) -> None:
        """Insert or replace the user's goal row."""
        payload = {
            "user_id": str(goal.user_id),
            "gender": goal.gender.value,
            "height_cm": goal.height_cm,
            "date_of_birth": goal.date_of_birth.isoformat(),
            "activity_level": goal.activity_level.value,
            "starting_weight": goal.starting_weight,
            "current_weight": goal.current_weight,
            "target_weight": goal.target_weight,
            "target_date": goal.target_date.isoformat(),
            "goal_type": goal.goal_type.value,
            "macro_preference": goal.macro_preference.value,
            "protein_ratio": goal.ratios.protein,
            "carbs_ratio": goal.ratios.carbs,
            "fat_ratio": goal.ratios.fat,
            "tdee": goal.tdee,
            "daily_calories": goal.daily_calories,
            "protein_grams": goal.protein_grams,
            "carbs_grams": goal.carbs_grams,
            "fat_grams": goal.fat_grams,
            "onboarding_completed": True,
        }
        response = (
            self.client.table("goals").upsert(payload, on_conflict="user_id").execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save goal")

    def apply_check_in(
        self,
        user_id: UUID,
        current_weight: float,
        result: CheckInResult,
        check_in_date: date,
    ) -> None:
        """Update targets after a check-in."""
        self.client.table("goals").update(
            {
                "current_weight": current_weight,
                "daily_calories": result.new_daily_calories,
                "protein_grams": result.new_protein_grams,
                "carbs_grams": result.new_carbs_grams,
                "fat_grams": result.new_fat_grams,
                "last_check_in": check_in_date.isoformat(),
                "updated_at": datetime.now(tz=UTC).isoformat(),
            }
        ).eq("user_id", str(user_id)).execute()


def _parse_goal(row: dict[str, object]) -> GoalRecord:
    last_check_in_raw = row.get("last_check_in")
    return GoalRecord(
        user_id=UUID(str(row["user_id"])),
        gender=Gender(row["gender"]),
        height_cm=float(row["height_cm"]),
        date_of_birth=date.fromisoformat(str(row["date_of_birth"])),
        activity_level=ActivityLevel(row.get("activity_level", "moderate")),
        starting_weight=float(row["starting_weight"]),
        current_weight=float(row["current_weight"]),
        target_weight=float(row["target_weight"]),
        target_date=date.fromisoformat(str(row["target_date"])),
        goal_type=GoalType(row["goal_type"]),
        macro_preference=MacroPreference(row.get("macro_preference", "balanced")),
        ratios=MacroRatioSet(
            protein=float(row.get("protein_ratio", 0.30)),
            carbs=float(row.get("carbs_ratio", 0.35)),
            fat=float(row.get("fat_ratio", 0.35)),
        ),
        tdee=float(row["tdee"]),
        daily_calories=float(row["daily_calories"]),
        protein_grams=float(row["protein_grams"]),
        carbs_grams=float(row["carbs_grams"]),
        fat_grams=float(row["fat_grams"]),
        last_check_in=(
            date.fromisoformat(last_check_in_raw)
            if isinstance(last_check_in_raw, str) and last_check_in_raw
            else None
        ),
    )
