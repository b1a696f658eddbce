"""Plan and check-in endpoints with shared service-token auth."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from macro_coach.api.models import (
    CheckInRequest,
    CheckInResultResponse,
    CheckInStatusResponse,
    OnboardingRequest,
    PlanResponse,
)

if TYPE_CHECKING:
    from macro_coach.containers import AppContainer


def _get_service_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.service_token


async def require_service_token(
    x_service_token: str | None = Header(default=None),
    service_token: str = Depends(_get_service_token),
) -> None:
    """Ensure requests include the shared service token."""
    if not x_service_token or x_service_token != service_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


router = APIRouter(tags=["coaching"], dependencies=[Depends(require_service_token)])


@router.post("/plans/preview")
async def preview_plan(payload: OnboardingRequest, request: Request) -> PlanResponse:
    """Compute targets from onboarding answers without storing them."""
    container: AppContainer = request.app.state.container
    plan = container.plan_service.build_plan(payload.to_answers(), date.today())
    return PlanResponse.from_plan(plan)


@router.post("/users/{user_id}/plan", status_code=status.HTTP_201_CREATED)
async def create_plan(
    user_id: UUID, payload: OnboardingRequest, request: Request
) -> PlanResponse:
    """Compute targets and store them as the user's goal."""
    container: AppContainer = request.app.state.container
    plan = container.plan_service.create_plan(
        user_id, payload.to_answers(), date.today()
    )
    return PlanResponse.from_plan(plan)


@router.get("/users/{user_id}/check-in")
async def check_in_status(user_id: UUID, request: Request) -> CheckInStatusResponse:
    """Return check-in availability and the week's gathered data."""
    container: AppContainer = request.app.state.container
    service = container.check_in_service
    today = date.today()
    return CheckInStatusResponse.build(
        service.get_status(user_id, today), service.prepare(user_id, today)
    )


@router.post("/users/{user_id}/check-in/preview")
async def preview_check_in(
    user_id: UUID, payload: CheckInRequest, request: Request
) -> CheckInResultResponse:
    """Return the adjustment a check-in would make."""
    container: AppContainer = request.app.state.container
    result = container.check_in_service.preview(
        user_id, payload.current_weight, date.today()
    )
    return CheckInResultResponse.from_result(result)


@router.post("/users/{user_id}/check-in", status_code=status.HTTP_201_CREATED)
async def submit_check_in(
    user_id: UUID, payload: CheckInRequest, request: Request
) -> CheckInResultResponse:
    """Store a check-in and apply the new targets."""
    container: AppContainer = request.app.state.container
    record = container.check_in_service.submit(
        user_id, payload.current_weight, date.today()
    )
    return CheckInResultResponse.from_record(record)
