"""Supabase repository for diary calories."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from macro_coach.domain.check_ins import DiaryEntry
from macro_coach.services.check_ins import DiaryRepository


@dataclass
class SupabaseDiaryRepository(DiaryRepository):
    """Supabase implementation reading the logs table."""

    client: Client

    def list_entries(self, user_id: UUID, start: date) -> list[DiaryEntry]:
        """Return log calories on or after start."""
        response = (
            self.client.table("logs")
            .select("calories, log_date")
            .eq("user_id", str(user_id))
            .gte("log_date", start.isoformat())
            .execute()
        )
        return [
            DiaryEntry(
                log_date=date.fromisoformat(str(row["log_date"])),
                calories=float(row.get("calories", 0.0)),
            )
            for row in response.data or []
        ]
