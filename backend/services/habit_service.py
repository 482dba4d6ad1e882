"""
habit_service.py — Habit dashboard view-model
Holds the loaded habits and logs, answers completion / streak / week queries
for any date, and applies add & toggle mutations through the record store.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import date, timedelta

from living_apps_rest import create_record_url
from models.habit import Habit, HabitDraft
from models.habit_log import HabitLog
from services.living_apps_service import LivingAppsService

logger = logging.getLogger(__name__)

STREAK_WINDOW_DAYS = 365


@dataclass
class DashboardState:
    habits: list[Habit] = field(default_factory=list)
    logs: list[HabitLog] = field(default_factory=list)
    selected_date: date = field(default_factory=date.today)
    loading: bool = True  # until the first load finishes


def date_key(day: date | str) -> str:
    """Canonical YYYY-MM-DD form used for every same-day comparison."""
    return day if isinstance(day, str) else day.isoformat()


# ------------------------------------------------------------------
# Queries
# ------------------------------------------------------------------

def logs_for_date(state: DashboardState, day: date | str) -> list[HabitLog]:
    key = date_key(day)
    return [log for log in state.logs if log.date == key]


def find_log(state: DashboardState, habit_id: str, day: date | str) -> HabitLog | None:
    """First log for (habit, day) in as-loaded order; duplicates are ignored."""
    for log in logs_for_date(state, day):
        if log.habit_id == habit_id:
            return log
    return None


def is_completed(state: DashboardState, habit_id: str, day: date | str) -> bool:
    log = find_log(state, habit_id, day)
    return log.completed if log else False


def calculate_streak(state: DashboardState, habit_id: str, reference_date: date | None = None) -> int:
    """Count backward consecutive completed days. Today's gap is forgiven."""
    done_days = {
        log.date for log in state.logs
        if log.habit_id == habit_id and log.completed
    }
    if not done_days:
        return 0

    start = reference_date or date.today()
    streak = 0
    for i in range(STREAK_WINDOW_DAYS):
        if date_key(start - timedelta(days=i)) in done_days:
            streak += 1
        elif i > 0:
            break
    return streak


def completed_count(state: DashboardState, day: date | str) -> int:
    """Loaded habits completed on day; orphaned logs don't count."""
    return sum(1 for h in state.habits if is_completed(state, h.id, day))


def completion_rate(state: DashboardState, day: date | str) -> int:
    total = len(state.habits)
    if total == 0:
        return 0
    # half up, integer math so 1/8 gives 13
    return (completed_count(state, day) * 200 + total) // (2 * total)


def longest_streak(state: DashboardState, reference_date: date | None = None) -> int:
    return max((calculate_streak(state, h.id, reference_date) for h in state.habits), default=0)


def week_days(anchor: date) -> list[date]:
    """Monday..Sunday of the ISO week containing anchor."""
    monday = anchor - timedelta(days=anchor.weekday())
    return [monday + timedelta(days=i) for i in range(7)]


def week_grid(state: DashboardState, anchor: date) -> list[tuple[date, int]]:
    return [(d, completion_rate(state, d)) for d in week_days(anchor)]


def dashboard_summary(state: DashboardState, day: date | None = None) -> dict:
    d = day or state.selected_date
    return {
        "date": date_key(d),
        "is_today": d == date.today(),
        "completed": completed_count(state, d),
        "total": len(state.habits),
        "completion_rate": completion_rate(state, d),
        "best_streak": longest_streak(state),
        "habits": [
            {
                "habit": h,
                "completed": is_completed(state, h.id, d),
                "streak": calculate_streak(state, h.id),
            }
            for h in state.habits
        ],
        "week": [
            {"date": date_key(wd), "weekday": wd.strftime("%a"), "completion_rate": rate}
            for wd, rate in week_grid(state, d)
        ],
    }


# ------------------------------------------------------------------
# Mutations
# ------------------------------------------------------------------

class HabitService:
    @staticmethod
    async def load(state: DashboardState, service: LivingAppsService) -> bool:
        """Fetch habits and logs concurrently. Keeps what it had on failure."""
        try:
            habits, logs = await asyncio.gather(
                service.get_habits(),
                service.get_habit_logs(),
            )
            state.habits = habits
            state.logs = logs
            logger.info(f"Loaded {len(habits)} habits and {len(logs)} logs")
            return True
        except Exception as e:
            logger.error(f"Failed to load data: {e}")
            return False
        finally:
            state.loading = False

    @staticmethod
    async def reload_habits(state: DashboardState, service: LivingAppsService) -> None:
        state.habits = await service.get_habits()

    @staticmethod
    async def reload_logs(state: DashboardState, service: LivingAppsService) -> None:
        state.logs = await service.get_habit_logs()

    @staticmethod
    def select_date(state: DashboardState, day: date) -> None:
        state.selected_date = day

    @staticmethod
    async def toggle_completion(
        state: DashboardState,
        service: LivingAppsService,
        habit_id: str,
        day: date | None = None,
    ) -> bool:
        """
        Flip completion of habit_id on day (default: selected date).
        An existing log is flipped locally right away and then patched; the
        flip stays even if the patch fails. Without a log a completed one is
        created and the log collection re-fetched to learn its id; if only the
        re-fetch fails the log is kept locally when the store returned its id.
        """
        if state.loading:
            logger.warning("Toggle ignored: data still loading")
            return False

        d = day or state.selected_date
        existing = find_log(state, habit_id, d)
        try:
            if existing:
                existing.completed = not existing.completed
                await service.update_habit_log(existing.id, {"completed": existing.completed})
            else:
                result = await service.create_habit_log({
                    "habit_id": create_record_url(service.habits_app_id, habit_id, service.client.base_url),
                    "date": date_key(d),
                    "completed": True,
                    "notes": "",
                })
        except Exception as e:
            logger.error(f"Failed to toggle habit {habit_id}: {e}")
            return False

        if existing:
            return True
        try:
            await HabitService.reload_logs(state, service)
        except Exception as e:
            logger.warning(f"Log for habit {habit_id} created but reload failed: {e}")
            if isinstance(result, dict) and result.get("id"):
                state.logs.append(HabitLog(id=result["id"], habit_id=habit_id, date=date_key(d), completed=True, notes=""))
        return True

    @staticmethod
    async def add_habit(state: DashboardState, service: LivingAppsService, draft: HabitDraft) -> bool:
        if state.loading:
            logger.warning("Add habit ignored: data still loading")
            return False
        if not draft.name.strip():
            return False

        try:
            await service.create_habit({
                "name": draft.name,
                "description": draft.description,
                "frequency": "daily",
                "target_count": 1,
                "color": draft.color,
                "icon": draft.icon,
                "created_at": date.today().isoformat(),
            })
            await HabitService.reload_habits(state, service)
            return True
        except Exception as e:
            logger.error(f"Failed to add habit: {e}")
            return False
