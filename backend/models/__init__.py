# Record models for the two Living Apps collections

from models.habit import Habit, HabitDraft, HABIT_COLORS, HABIT_ICONS
from models.habit_log import HabitLog

__all__ = [
    "Habit",
    "HabitDraft",
    "HabitLog",
    "HABIT_COLORS",
    "HABIT_ICONS",
]
