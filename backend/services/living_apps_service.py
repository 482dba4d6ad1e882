"""
living_apps_service.py — Typed access to the Habits and HabitLogs collections.
Translates store records into Habit / HabitLog models and back.
"""

import logging

from pydantic import ValidationError

from config import HABITS_APP_ID, HABIT_LOGS_APP_ID
from living_apps_rest import LivingAppsClient
from models.habit import Habit
from models.habit_log import HabitLog

logger = logging.getLogger(__name__)


def _parse_all(model, records: list[dict]) -> list:
    """Convert records, skipping the ones that fail validation."""
    parsed = []
    for record in records:
        try:
            parsed.append(model.from_record(record))
        except (ValidationError, KeyError) as e:
            logger.warning(f"Skipping malformed {model.__name__} record {record.get('id')}: {e}")
    return parsed


class LivingAppsService:
    def __init__(
        self,
        client: LivingAppsClient | None = None,
        habits_app_id: str = HABITS_APP_ID,
        habit_logs_app_id: str = HABIT_LOGS_APP_ID,
    ):
        self.client = client or LivingAppsClient()
        self.habits_app_id = habits_app_id
        self.habit_logs_app_id = habit_logs_app_id

    # --- HABITS ---
    async def get_habits(self) -> list[Habit]:
        records = await self.client.list_records(self.habits_app_id)
        return _parse_all(Habit, records)

    async def get_habit(self, habit_id: str) -> Habit:
        record = await self.client.get_record(self.habits_app_id, habit_id)
        return Habit.from_record(record)

    async def create_habit(self, fields: dict):
        return await self.client.create_record(self.habits_app_id, fields)

    async def update_habit(self, habit_id: str, fields: dict):
        return await self.client.update_record(self.habits_app_id, habit_id, fields)

    async def delete_habit(self, habit_id: str) -> bool:
        return await self.client.delete_record(self.habits_app_id, habit_id)

    # --- HABIT_LOGS ---
    async def get_habit_logs(self) -> list[HabitLog]:
        records = await self.client.list_records(self.habit_logs_app_id)
        return _parse_all(HabitLog, records)

    async def get_habit_log(self, log_id: str) -> HabitLog:
        record = await self.client.get_record(self.habit_logs_app_id, log_id)
        return HabitLog.from_record(record)

    async def create_habit_log(self, fields: dict):
        return await self.client.create_record(self.habit_logs_app_id, fields)

    async def update_habit_log(self, log_id: str, fields: dict):
        return await self.client.update_record(self.habit_logs_app_id, log_id, fields)

    async def delete_habit_log(self, log_id: str) -> bool:
        return await self.client.delete_record(self.habit_logs_app_id, log_id)
