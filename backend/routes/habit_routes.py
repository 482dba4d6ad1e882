from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from models.habit import HabitDraft, HABIT_COLORS, HABIT_ICONS
from services.habit_service import (
    DashboardState,
    HabitService,
    calculate_streak,
    dashboard_summary,
    date_key,
    is_completed,
    week_grid,
)
from services.living_apps_service import LivingAppsService

router = APIRouter(prefix="/api/v1", tags=["Habits"])

# One dashboard per process
_service: LivingAppsService | None = None
_state = DashboardState()


def get_service() -> LivingAppsService:
    global _service
    if _service is None:
        _service = LivingAppsService()
    return _service


async def get_state(service: LivingAppsService = Depends(get_service)) -> DashboardState:
    """FastAPI dependency — the shared dashboard state, loaded on first use."""
    if _state.loading:
        await HabitService.load(_state, service)
    return _state


@router.get("/habits")
async def list_habits(day: Optional[date] = None, state: DashboardState = Depends(get_state)):
    d = day or state.selected_date
    return [
        {
            "habit": h,
            "completed": is_completed(state, h.id, d),
            "streak": calculate_streak(state, h.id),
        }
        for h in state.habits
    ]


@router.post("/habits")
async def create_habit(
    draft: HabitDraft,
    state: DashboardState = Depends(get_state),
    service: LivingAppsService = Depends(get_service),
):
    if not draft.name.strip():
        raise HTTPException(status_code=400, detail="Habit name is required")
    if not await HabitService.add_habit(state, service, draft):
        raise HTTPException(status_code=502, detail="Failed to add habit")
    return {"status": "success", "habits": state.habits}


@router.get("/habits/options")
async def habit_options():
    return {"colors": HABIT_COLORS, "icons": HABIT_ICONS}


@router.post("/habits/{habit_id}/toggle")
async def toggle_habit(
    habit_id: str,
    day: Optional[date] = None,
    state: DashboardState = Depends(get_state),
    service: LivingAppsService = Depends(get_service),
):
    if not any(h.id == habit_id for h in state.habits):
        raise HTTPException(status_code=404, detail="Habit not found")

    d = day or state.selected_date
    if not await HabitService.toggle_completion(state, service, habit_id, d):
        raise HTTPException(status_code=502, detail="Failed to toggle habit")
    return {
        "status": "success",
        "date": date_key(d),
        "completed": is_completed(state, habit_id, d),
        "streak": calculate_streak(state, habit_id),
    }


@router.get("/dashboard")
async def get_dashboard(day: Optional[date] = None, state: DashboardState = Depends(get_state)):
    return dashboard_summary(state, day)


@router.post("/selected-date")
async def select_date(day: date, state: DashboardState = Depends(get_state)):
    HabitService.select_date(state, day)
    return {"status": "success", "date": date_key(day)}


@router.get("/week")
async def get_week(anchor: Optional[date] = None, state: DashboardState = Depends(get_state)):
    a = anchor or state.selected_date
    return [{"date": date_key(d), "completion_rate": rate} for d, rate in week_grid(state, a)]


@router.post("/reload")
async def reload(
    state: DashboardState = Depends(get_state),
    service: LivingAppsService = Depends(get_service),
):
    if not await HabitService.load(state, service):
        raise HTTPException(status_code=502, detail="Failed to reload data")
    return {"status": "success", "habits": len(state.habits), "logs": len(state.logs)}
