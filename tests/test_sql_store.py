"""
Tests for the SQLAlchemy store: constraint mapping and cascade delete.
"""
from datetime import date

import pytest
from sqlalchemy.exc import OperationalError

from habit_progress.core.errors import DuplicateCheckInError, StoreUnavailableError
from habit_progress.models import CheckIn
from habit_progress.services.ledger import record_check_in
from habit_progress.store import SqlAlchemyStore


@pytest.fixture()
def sql_store(db):
    return SqlAlchemyStore(db)


class TestHabits:
    def test_create_get_list(self, sql_store, user_id):
        first = sql_store.create_habit(user_id, "Run", 3, "UTC")
        second = sql_store.create_habit(user_id, "Read", 5, "Europe/Madrid")
        assert sql_store.get_habit(user_id, first.id).name == "Run"
        assert [h.id for h in sql_store.list_habits(user_id)] == [first.id, second.id]

    def test_get_scoped_to_user(self, sql_store, user_id):
        habit = sql_store.create_habit(user_id, "Run", 3, "UTC")
        assert sql_store.get_habit("not-" + user_id, habit.id) is None

    def test_update_missing(self, sql_store, user_id):
        assert sql_store.update_habit(user_id, "missing", name="x") is None

    def test_delete_cascades(self, sql_store, db, user_id):
        habit = sql_store.create_habit(user_id, "Run", 3, "UTC")
        sql_store.insert_checkin(user_id, habit.id, date(2026, 3, 3))
        sql_store.insert_checkin(user_id, habit.id, date(2026, 3, 4))

        assert sql_store.delete_habit(user_id, habit.id) is True
        assert db.query(CheckIn).filter(CheckIn.habit_id == habit.id).count() == 0
        assert sql_store.count_all_checkins(user_id) == 0
        assert sql_store.delete_habit(user_id, habit.id) is False


class TestCheckIns:
    def test_unique_constraint_maps_to_duplicate(self, sql_store, user_id):
        habit = sql_store.create_habit(user_id, "Run", 3, "UTC")
        sql_store.insert_checkin(user_id, habit.id, date(2026, 3, 4))
        with pytest.raises(DuplicateCheckInError):
            sql_store.insert_checkin(user_id, habit.id, date(2026, 3, 4))
        # session is usable after the rollback
        assert sql_store.count_all_checkins(user_id) == 1

    def test_record_check_in_against_database(self, sql_store, user_id):
        habit = sql_store.create_habit(user_id, "Run", 3, "UTC")
        record_check_in(sql_store, user_id, habit.id, date(2026, 3, 4))
        with pytest.raises(DuplicateCheckInError):
            record_check_in(sql_store, user_id, habit.id, date(2026, 3, 4))

    def test_list_checkins_filters_and_order(self, sql_store, user_id):
        run = sql_store.create_habit(user_id, "Run", 3, "UTC")
        read = sql_store.create_habit(user_id, "Read", 3, "UTC")
        for d in (date(2026, 3, 1), date(2026, 3, 4), date(2026, 3, 2)):
            sql_store.insert_checkin(user_id, run.id, d)
        sql_store.insert_checkin(user_id, read.id, date(2026, 3, 3))

        rows = sql_store.list_checkins(user_id, habit_ids=[run.id], start=date(2026, 3, 2), end=date(2026, 3, 4))
        assert [r.checkin_date for r in rows] == [date(2026, 3, 4), date(2026, 3, 2)]
        assert len(sql_store.list_checkins(user_id)) == 4


class TestFailures:
    def test_backend_error_maps_to_store_unavailable(self, sql_store, user_id, monkeypatch):
        def boom(*args, **kwargs):
            raise OperationalError("SELECT", {}, Exception("database is locked"))

        monkeypatch.setattr(sql_store.db, "query", boom)
        with pytest.raises(StoreUnavailableError) as exc_info:
            sql_store.list_habits(user_id)
        assert exc_info.value.details["reason"] == "OperationalError"

    def test_ping(self, sql_store):
        assert sql_store.ping() is True
