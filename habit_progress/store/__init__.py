from typing import Iterator

from fastapi import Depends
from sqlalchemy.orm import Session

from habit_progress.core.config import settings
from habit_progress.db.base import get_db
from habit_progress.store.base import CheckInRecord, HabitRecord, HabitStore
from habit_progress.store.memory import InMemoryStore
from habit_progress.store.sql import SqlAlchemyStore

_memory_store = InMemoryStore()


def get_store(db: Session = Depends(get_db)) -> Iterator[HabitStore]:
    """FastAPI dependency: the store selected by settings.DATA_STORE."""
    if settings.use_memory_store:
        yield _memory_store
    else:
        yield SqlAlchemyStore(db)


__all__ = [
    "CheckInRecord",
    "HabitRecord",
    "HabitStore",
    "InMemoryStore",
    "SqlAlchemyStore",
    "get_store",
]
