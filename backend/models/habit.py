from typing import Literal, Optional, get_args

from pydantic import BaseModel, field_validator


HABIT_COLORS = [
    {"value": "#8B5CF6", "label": "Purple"},
    {"value": "#10B981", "label": "Green"},
    {"value": "#F59E0B", "label": "Amber"},
    {"value": "#3B82F6", "label": "Blue"},
    {"value": "#EC4899", "label": "Pink"},
    {"value": "#EF4444", "label": "Red"},
    {"value": "#06B6D4", "label": "Cyan"},
]

HABIT_ICONS = ["🧘", "💪", "📚", "💧", "✍️", "🎯", "🏃", "🎨", "🎵", "💤", "🥗", "💊"]

Frequency = Literal["daily", "weekly", "monthly"]


class Habit(BaseModel):
    id: str
    name: str = ""
    description: Optional[str] = None
    frequency: Optional[Frequency] = None  # only "daily" drives streaks
    target_count: Optional[int] = None
    color: Optional[str] = None
    icon: Optional[str] = None
    created_at: Optional[str] = None  # YYYY-MM-DD

    @field_validator("name", mode="before")
    @classmethod
    def _name_or_blank(cls, v):
        return "" if v is None else v

    @field_validator("frequency", mode="before")
    @classmethod
    def _known_frequency(cls, v):
        # anything else is kept as "not interpreted"
        return v if v in get_args(Frequency) else None

    @field_validator("target_count", mode="before")
    @classmethod
    def _int_or_none(cls, v):
        try:
            return int(v)
        except (TypeError, ValueError):
            return None

    @classmethod
    def from_record(cls, record: dict) -> "Habit":
        """Build from a flattened store record {"id", "createdat", "fields"}."""
        fields = record.get("fields") or {}
        return cls(id=record["id"], **{k: v for k, v in fields.items() if k in cls.model_fields and k != "id"})


class HabitDraft(BaseModel):
    """User input for a new habit."""
    name: str = ""
    description: str = ""
    color: str = HABIT_COLORS[0]["value"]
    icon: str = "🎯"
