"""
Tests for habit management: validation happens before the store is touched.
"""
from datetime import date

import pytest

from habit_progress.core.errors import HabitNotFoundError, HabitValidationError
from habit_progress.services import habits as habit_service


class TestValidation:
    @pytest.mark.parametrize("name", ["", "   ", "\t\n", None])
    def test_empty_name_rejected(self, store, name):
        with pytest.raises(HabitValidationError) as exc_info:
            habit_service.create_habit(store, "u1", name, 3)
        assert exc_info.value.field == "name"
        assert store.list_habits("u1") == []

    @pytest.mark.parametrize("target", [0, 8, -1, 100])
    def test_target_out_of_range_rejected(self, store, target):
        with pytest.raises(HabitValidationError) as exc_info:
            habit_service.create_habit(store, "u1", "Run", target)
        assert exc_info.value.field == "target_per_week"
        assert store.list_habits("u1") == []

    @pytest.mark.parametrize("target", [True, 3.0, "3"])
    def test_target_must_be_int(self, store, target):
        with pytest.raises(HabitValidationError):
            habit_service.create_habit(store, "u1", "Run", target)

    @pytest.mark.parametrize("target", [1, 7])
    def test_target_bounds_inclusive(self, store, target):
        habit = habit_service.create_habit(store, "u1", "Run", target)
        assert habit.target_per_week == target


class TestCreate:
    def test_name_is_trimmed(self, store):
        habit = habit_service.create_habit(store, "u1", "  Morning run  ", 3)
        assert habit.name == "Morning run"
        assert habit.schedule == "daily"

    def test_timezone_normalized(self, store):
        assert habit_service.create_habit(store, "u1", "Run", 3, "Europe/Madrid").timezone == "Europe/Madrid"
        assert habit_service.create_habit(store, "u1", "Read", 3, "Not/AZone").timezone == "UTC"
        assert habit_service.create_habit(store, "u1", "Write", 3).timezone == "UTC"

    def test_creation_order_kept(self, store):
        names = ["c", "a", "b"]
        for n in names:
            habit_service.create_habit(store, "u1", n, 1)
        assert [h.name for h in store.list_habits("u1")] == names


class TestUpdate:
    def test_partial_update(self, store):
        habit = habit_service.create_habit(store, "u1", "Run", 3)
        updated = habit_service.update_habit(store, "u1", habit.id, target_per_week=5)
        assert updated.target_per_week == 5
        assert updated.name == "Run"

    def test_rename_trimmed(self, store):
        habit = habit_service.create_habit(store, "u1", "Run", 3)
        assert habit_service.update_habit(store, "u1", habit.id, name=" Jog ").name == "Jog"

    def test_invalid_update_leaves_habit_unchanged(self, store):
        habit = habit_service.create_habit(store, "u1", "Run", 3)
        with pytest.raises(HabitValidationError):
            habit_service.update_habit(store, "u1", habit.id, target_per_week=9)
        assert store.get_habit("u1", habit.id).target_per_week == 3

    def test_other_users_habit_not_found(self, store):
        habit = habit_service.create_habit(store, "u1", "Run", 3)
        with pytest.raises(HabitNotFoundError):
            habit_service.update_habit(store, "u2", habit.id, name="Mine now")


class TestDelete:
    def test_delete_cascades_checkins(self, store):
        habit = habit_service.create_habit(store, "u1", "Run", 3)
        store.insert_checkin("u1", habit.id, date(2026, 3, 4))
        habit_service.delete_habit(store, "u1", habit.id)
        assert store.list_habits("u1") == []
        assert store.list_checkins("u1") == []

    def test_delete_missing(self, store):
        with pytest.raises(HabitNotFoundError):
            habit_service.delete_habit(store, "u1", "nope")
