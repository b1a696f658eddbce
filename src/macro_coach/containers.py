"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from macro_coach.adapters.supabase_check_in_repository import (
    SupabaseCheckInRepository,
)
from macro_coach.adapters.supabase_diary_repository import SupabaseDiaryRepository
from macro_coach.adapters.supabase_goals_repository import SupabaseGoalsRepository
from macro_coach.adapters.supabase_weight_repository import SupabaseWeightRepository
from macro_coach.config import Settings, build_policy
from macro_coach.services.check_ins import CheckInService
from macro_coach.services.plans import PlanService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    plan_service: PlanService
    check_in_service: CheckInService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    policy = build_policy(resolved_settings)
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    goals_repository = SupabaseGoalsRepository(supabase_client)
    weight_repository = SupabaseWeightRepository(supabase_client)
    plan_service = PlanService(
        repository=goals_repository, weights=weight_repository, policy=policy
    )
    check_in_service = CheckInService(
        goals=goals_repository,
        diary=SupabaseDiaryRepository(supabase_client),
        weights=weight_repository,
        check_ins=SupabaseCheckInRepository(supabase_client),
        policy=policy,
    )
    return AppContainer(
        settings=resolved_settings,
        plan_service=plan_service,
        check_in_service=check_in_service,
    )
