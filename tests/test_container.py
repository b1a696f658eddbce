"""Tests for container wiring and settings."""

from macro_coach.config import Settings, build_policy
from macro_coach.containers import build_container


def test_build_container_creates_services(settings: Settings) -> None:
    container = build_container(settings)

    assert container.plan_service is not None
    assert container.check_in_service.policy.reapply_floor_on_check_in is False


def test_build_policy_honors_floor_setting(settings: Settings) -> None:
    enabled = settings.model_copy(update={"reapply_floor_on_check_in": True})

    policy = build_policy(enabled)

    assert policy.reapply_floor_on_check_in is True
    assert policy.check_in_tolerance_lbs == 0.2
