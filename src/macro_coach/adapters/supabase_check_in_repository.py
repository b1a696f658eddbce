"""Supabase repository for check-in audit records."""

from dataclasses import dataclass

from supabase import Client

from macro_coach.domain.check_ins import CheckInRecord
from macro_coach.services.check_ins import CheckInRepository


@dataclass
class SupabaseCheckInRepository(CheckInRepository):
    """Supabase implementation for the check_ins table."""

    client: Client

    def create_check_in(self, record: CheckInRecord) -> None:
        """Insert a check-in row."""
        result = record.result
        response = (
            self.client.table("check_ins")
            .insert(
                {
                    "user_id": str(record.user_id),
                    "check_in_date": record.check_in_date.isoformat(),
                    "weight": record.weight,
                    "previous_weight": record.previous_weight,
                    "weight_change": record.weight_change,
                    "avg_daily_calories": record.avg_daily_calories,
                    "calculated_tdee": result.calculated_true_tdee,
                    "expected_weekly_change": result.expected_weekly_change,
                    "actual_weekly_change": result.actual_weekly_change,
                    "old_daily_calories": record.old_daily_calories,
                    "new_daily_calories": result.new_daily_calories,
                    "adjustment_reason": result.adjustment_reason,
                    "new_protein_grams": result.new_protein_grams,
                    "new_carbs_grams": result.new_carbs_grams,
                    "new_fat_grams": result.new_fat_grams,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create check-in")
