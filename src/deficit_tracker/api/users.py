"""Per-user API endpoints guarded by a service token."""

from __future__ import annotations

from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request, status
from pydantic import BaseModel

from deficit_tracker.domain.commands import ParsedCommand  # noqa: TC001
from deficit_tracker.domain.logs import MutationResult
from deficit_tracker.domain.progress import CalendarDay, Dashboard, GamificationState

if TYPE_CHECKING:
    from deficit_tracker.containers import AppContainer

router = APIRouter(prefix="/users/{user_id}", tags=["users"])


class CommandRequest(BaseModel):
    """A parsed command plus the day it applies to."""

    command: ParsedCommand
    log_date: date | None = None
    raw_input: str | None = None


def _get_api_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.api_token


async def require_token(
    x_api_token: str | None = Header(default=None),
    api_token: str = Depends(_get_api_token),
) -> None:
    """Ensure requests include a valid service token."""
    if not x_api_token or x_api_token != api_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.post("/commands", dependencies=[Depends(require_token)])
def apply_command(
    user_id: UUID, payload: CommandRequest, request: Request
) -> MutationResult:
    """Apply a parsed command to the user's ledger."""
    container: AppContainer = request.app.state.container
    log_date = payload.log_date or container.progress_service.today(user_id)
    return container.command_dispatcher.apply(
        user_id, log_date, payload.command, raw_input=payload.raw_input
    )


@router.get("/dashboard", dependencies=[Depends(require_token)])
def dashboard(user_id: UUID, request: Request) -> Dashboard:
    """Return today's summary, week, goal and gamification."""
    container: AppContainer = request.app.state.container
    return container.progress_service.dashboard(user_id)


@router.get("/calendar", dependencies=[Depends(require_token)])
def calendar(
    user_id: UUID,
    request: Request,
    year: int | None = Query(default=None, ge=1),
    month: int | None = Query(default=None, ge=1, le=12),
) -> list[CalendarDay]:
    """Return the classified days of a month."""
    container: AppContainer = request.app.state.container
    return container.progress_service.calendar(user_id, year, month)


@router.get("/gamification", dependencies=[Depends(require_token)])
def gamification(user_id: UUID, request: Request) -> GamificationState:
    """Return XP, level, streaks and badges."""
    container: AppContainer = request.app.state.container
    return container.progress_service.gamification(user_id)


@router.delete("/history", dependencies=[Depends(require_token)])
def reset_history(user_id: UUID, request: Request) -> MutationResult:
    """Delete every daily log of the user."""
    container: AppContainer = request.app.state.container
    return container.ledger_service.reset_history(user_id)
