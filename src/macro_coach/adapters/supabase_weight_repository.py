"""Supabase repository for weigh-ins."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from macro_coach.domain.check_ins import WeightEntry
from macro_coach.services.plans import WeightRepository


@dataclass
class SupabaseWeightRepository(WeightRepository):
    """Supabase implementation for the weight_history table."""

    client: Client

    def get_latest(self, user_id: UUID) -> WeightEntry | None:
        """Return the most recent weigh-in."""
        response = (
            self.client.table("weight_history")
            .select("weight, logged_date")
            .eq("user_id", str(user_id))
            .order("logged_date", desc=True)
            .limit(1)
            .execute()
        )
        return _first_entry(response.data)

    def get_latest_before(self, user_id: UUID, before: date) -> WeightEntry | None:
        """Return the most recent weigh-in before a date."""
        response = (
            self.client.table("weight_history")
            .select("weight, logged_date")
            .eq("user_id", str(user_id))
            .lt("logged_date", before.isoformat())
            .order("logged_date", desc=True)
            .limit(1)
            .execute()
        )
        return _first_entry(response.data)

    def upsert(self, user_id: UUID, entry: WeightEntry) -> None:
        """Store a weigh-in keyed by user and day."""
        self.client.table("weight_history").upsert(
            {
                "user_id": str(user_id),
                "weight": entry.weight,
                "logged_date": entry.logged_date.isoformat(),
            },
            on_conflict="user_id,logged_date",
        ).execute()


def _first_entry(rows: list[dict[str, object]] | None) -> WeightEntry | None:
    if not rows:
        return None
    row = rows[0]
    return WeightEntry(
        logged_date=date.fromisoformat(str(row["logged_date"])),
        weight=float(row["weight"]),
    )
