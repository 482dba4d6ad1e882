from typing import Optional

from pydantic import BaseModel

from living_apps_rest import extract_record_id


class HabitLog(BaseModel):
    id: str
    habit_id: Optional[str] = None  # decoded id of the owning habit
    date: Optional[str] = None  # YYYY-MM-DD, the day the log applies to
    completed: bool = False
    notes: Optional[str] = None

    @classmethod
    def from_record(cls, record: dict) -> "HabitLog":
        """Build from a flattened store record; the habit reference arrives as a URL."""
        fields = record.get("fields") or {}
        return cls(
            id=record["id"],
            habit_id=extract_record_id(fields.get("habit_id")),
            date=fields.get("date"),
            completed=bool(fields.get("completed")),
            notes=fields.get("notes"),
        )

