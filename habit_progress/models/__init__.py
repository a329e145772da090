from .habit import Habit
from .checkin import CheckIn

__all__ = [
    "Habit",
    "CheckIn",
]
