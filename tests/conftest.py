"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import date, timedelta
from uuid import UUID, uuid4

import pytest

from macro_coach.config import Settings
from macro_coach.containers import AppContainer
from macro_coach.domain.check_ins import CheckInRecord, DiaryEntry, WeightEntry
from macro_coach.domain.models import (
    ActivityLevel,
    CheckInResult,
    Gender,
    GoalType,
    MacroPreference,
    MacroRatioSet,
)
from macro_coach.domain.plans import GoalRecord
from macro_coach.services.check_ins import (
    CheckInRepository,
    CheckInService,
    DiaryRepository,
)
from macro_coach.services.plans import (
    GoalsRepository,
    PlanService,
    WeightRepository,
)

SERVICE_TOKEN = "service-token"


@dataclass
class InMemoryGoalsRepository(GoalsRepository):
    """In-memory goals repository for tests."""

    goals: dict[UUID, GoalRecord] = field(default_factory=dict)

    def get_goal(self, user_id: UUID) -> GoalRecord | None:
        return self.goals.get(user_id)

    def save_goal(self, goal: GoalRecord) -> None:
        self.goals[goal.user_id] = goal

    def apply_check_in(
        self,
        user_id: UUID,
        current_weight: float,
        result: CheckInResult,
        check_in_date: date,
    ) -> None:
        self.goals[user_id] = replace(
            self.goals[user_id],
            current_weight=current_weight,
            daily_calories=result.new_daily_calories,
            protein_grams=result.new_protein_grams,
            carbs_grams=result.new_carbs_grams,
            fat_grams=result.new_fat_grams,
            last_check_in=check_in_date,
        )


@dataclass
class InMemoryDiaryRepository(DiaryRepository):
    """In-memory diary repository for tests."""

    entries: dict[UUID, list[DiaryEntry]] = field(default_factory=dict)

    def list_entries(self, user_id: UUID, start: date) -> list[DiaryEntry]:
        return [
            entry for entry in self.entries.get(user_id, []) if entry.log_date >= start
        ]


@dataclass
class InMemoryWeightRepository(WeightRepository):
    """In-memory weigh-in repository for tests."""

    entries: dict[UUID, list[WeightEntry]] = field(default_factory=dict)

    def get_latest(self, user_id: UUID) -> WeightEntry | None:
        entries = sorted(
            self.entries.get(user_id, []), key=lambda entry: entry.logged_date
        )
        return entries[-1] if entries else None

    def get_latest_before(self, user_id: UUID, before: date) -> WeightEntry | None:
        entries = sorted(
            (
                entry
                for entry in self.entries.get(user_id, [])
                if entry.logged_date < before
            ),
            key=lambda entry: entry.logged_date,
        )
        return entries[-1] if entries else None

    def upsert(self, user_id: UUID, entry: WeightEntry) -> None:
        kept = [
            existing
            for existing in self.entries.get(user_id, [])
            if existing.logged_date != entry.logged_date
        ]
        self.entries[user_id] = [*kept, entry]


@dataclass
class InMemoryCheckInRepository(CheckInRepository):
    """In-memory check-in repository for tests."""

    records: list[CheckInRecord] = field(default_factory=list)

    def create_check_in(self, record: CheckInRecord) -> None:
        self.records.append(record)


def make_goal(  # noqa: PLR0913
    user_id: UUID | None = None,
    *,
    today: date,
    current_weight: float = 200,
    target_weight: float = 190,
    weeks: int = 10,
    daily_calories: float = 2000,
    gender: Gender = Gender.MALE,
    last_check_in: date | None = None,
) -> GoalRecord:
    """Build a stored goal with balanced macros."""
    return GoalRecord(
        user_id=user_id or uuid4(),
        gender=gender,
        height_cm=177.8,
        date_of_birth=date(1990, 1, 1),
        activity_level=ActivityLevel.MODERATE,
        starting_weight=current_weight,
        current_weight=current_weight,
        target_weight=target_weight,
        target_date=today + timedelta(weeks=weeks),
        goal_type=GoalType.LOSE,
        macro_preference=MacroPreference.BALANCED,
        ratios=MacroRatioSet(protein=0.30, carbs=0.35, fat=0.35),
        tdee=2500,
        daily_calories=daily_calories,
        protein_grams=150,
        carbs_grams=175,
        fat_grams=78,
        last_check_in=last_check_in,
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        service_token=SERVICE_TOKEN,
    )


@pytest.fixture
def goals_repository() -> InMemoryGoalsRepository:
    return InMemoryGoalsRepository()


@pytest.fixture
def diary_repository() -> InMemoryDiaryRepository:
    return InMemoryDiaryRepository()


@pytest.fixture
def weight_repository() -> InMemoryWeightRepository:
    return InMemoryWeightRepository()


@pytest.fixture
def check_in_repository() -> InMemoryCheckInRepository:
    return InMemoryCheckInRepository()


@pytest.fixture
def check_in_service(
    goals_repository: InMemoryGoalsRepository,
    diary_repository: InMemoryDiaryRepository,
    weight_repository: InMemoryWeightRepository,
    check_in_repository: InMemoryCheckInRepository,
) -> CheckInService:
    return CheckInService(
        goals=goals_repository,
        diary=diary_repository,
        weights=weight_repository,
        check_ins=check_in_repository,
    )


@pytest.fixture
def container(
    settings: Settings,
    goals_repository: InMemoryGoalsRepository,
    weight_repository: InMemoryWeightRepository,
    check_in_service: CheckInService,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        plan_service=PlanService(goals_repository, weight_repository),
        check_in_service=check_in_service,
    )
