# tests/test_sql_store.py

from __future__ import annotations

from datetime import date, timedelta

import pytest
from sqlmodel import Session

from task_tracker.models import (
    Category,
    CategoryCreate,
    DEFAULT_CATEGORIES,
    Priority,
    Task,
    TaskBase,
)
from task_tracker.repositories import SQLTaskStore, TaskFilter
from task_tracker.utils.dates import utcnow
from task_tracker.utils.errors import (
    CategoryNotFoundException,
    StoreError,
    TaskNotFoundException,
    ValidationError,
)


def _draft(title: str = "Task", **fields) -> TaskBase:
    return TaskBase(title=title, **fields)


def test_create_then_list_round_trip(store: SQLTaskStore) -> None:
    store.seed_default_categories()
    health = next(c for c in store.list_categories() if c.name == "Health")

    created = store.create_task(
        _draft(
            "Dentist",
            category_id=health.id,
            priority=Priority.HIGH,
            due_date=date(2024, 5, 1),
            due_time="14:30",
        )
    )

    assert created.id is not None
    assert created.created_at == created.updated_at
    assert created.category_name == "Health"
    assert created.category_color == "#dc2626"

    listed = store.list_tasks()
    assert len(listed) == 1
    stored = listed[0]
    assert stored.id == created.id
    assert stored.title == "Dentist"
    assert stored.completed is False
    assert stored.priority == Priority.HIGH
    assert stored.due_date == date(2024, 5, 1)
    assert stored.due_time == "14:30"
    assert stored.category_id == health.id
    assert stored.category_name == "Health"


def test_create_with_unknown_category_uses_sentinel(store: SQLTaskStore) -> None:
    created = store.create_task(_draft(category_id=404))

    assert created.category_id == 404
    assert created.category_name == "No Category"
    assert created.category_color == "#9ca3af"


def test_update_merges_fields_and_keeps_id(store: SQLTaskStore, monkeypatch: pytest.MonkeyPatch) -> None:
    created = store.create_task(_draft("Original"))
    later = created.updated_at + timedelta(minutes=5)
    monkeypatch.setattr("task_tracker.repositories.sql_store.utcnow", lambda: later)

    updated = store.update_task(created.id, {"completed": True, "title": "Renamed"})

    assert updated.id == created.id
    assert updated.title == "Renamed"
    assert updated.completed is True
    assert updated.created_at == created.created_at
    assert updated.updated_at == later
    assert updated.updated_at > created.updated_at


def test_timestamps_are_stored_as_naive_utc(store: SQLTaskStore) -> None:
    before = utcnow()
    created = store.create_task(_draft("Stamped"))

    [stored] = store.list_tasks()

    assert stored.created_at.tzinfo is None
    assert stored.updated_at.tzinfo is None
    assert stored.created_at == created.created_at
    assert before <= stored.created_at <= utcnow()
    same_day = store.list_tasks(TaskFilter(date_field="created_at", on_date=stored.created_at.date()))
    assert [t.id for t in same_day] == [stored.id]


def test_update_ignores_non_mutable_fields(store: SQLTaskStore) -> None:
    created = store.create_task(_draft("Keep"))

    updated = store.update_task(
        created.id,
        {"id": 999, "created_at": utcnow() - timedelta(days=5), "category_name": "Hacked", "completed": True},
    )

    assert updated.id == created.id
    assert updated.created_at == created.created_at
    assert updated.category_name == "No Category"
    assert updated.completed is True


def test_update_category_refreshes_display_fields(store: SQLTaskStore) -> None:
    store.seed_default_categories()
    work = next(c for c in store.list_categories() if c.name == "Work")
    created = store.create_task(_draft())

    moved = store.update_task(created.id, {"category_id": work.id})
    assert (moved.category_name, moved.category_color) == ("Work", "#4f46e5")

    cleared = store.update_task(created.id, {"category_id": None})
    assert (cleared.category_name, cleared.category_color) == ("No Category", "#9ca3af")


def test_update_unknown_task_raises(store: SQLTaskStore) -> None:
    with pytest.raises(TaskNotFoundException):
        store.update_task(12345, {"completed": True})


def test_delete_removes_task_permanently(store: SQLTaskStore) -> None:
    created = store.create_task(_draft("Temporary"))

    store.delete_task(created.id)

    assert store.list_tasks() == []
    with pytest.raises(TaskNotFoundException):
        store.update_task(created.id, {"completed": True})
    with pytest.raises(TaskNotFoundException):
        store.get_task(created.id)
    with pytest.raises(TaskNotFoundException):
        store.delete_task(created.id)


def test_filters_by_category_and_completion(store: SQLTaskStore) -> None:
    store.create_task(_draft("a", category_id=1))
    b = store.create_task(_draft("b", category_id=1))
    store.create_task(_draft("c", category_id=2))
    store.update_task(b.id, {"completed": True})

    in_category = store.list_tasks(TaskFilter(category_id=1))
    done_in_category = store.list_tasks(TaskFilter(category_id=1, completed=True))
    open_tasks = store.list_tasks(TaskFilter(completed=False))

    assert sorted(t.title for t in in_category) == ["a", "b"]
    assert [t.title for t in done_in_category] == ["b"]
    assert sorted(t.title for t in open_tasks) == ["a", "c"]


def test_filters_by_due_date_day_and_range(store: SQLTaskStore) -> None:
    for day in (1, 5, 10):
        store.create_task(_draft(f"day {day}", due_date=date(2024, 4, day)))
    store.create_task(_draft("undated"))

    on_day = store.list_tasks(TaskFilter(on_date=date(2024, 4, 5)))
    in_range = store.list_tasks(TaskFilter(start_date=date(2024, 4, 5), end_date=date(2024, 4, 10)))
    from_start = store.list_tasks(TaskFilter(start_date=date(2024, 4, 2)))

    assert [t.title for t in on_day] == ["day 5"]
    assert sorted(t.title for t in in_range) == ["day 10", "day 5"]
    assert sorted(t.title for t in from_start) == ["day 10", "day 5"]


def test_filters_by_created_day(store: SQLTaskStore) -> None:
    created = store.create_task(_draft("fresh", due_date=date(2000, 1, 1)))
    created_day = created.created_at.date()

    same_day = store.list_tasks(TaskFilter(on_date=created_day, date_field="created_at"))
    day_before = store.list_tasks(
        TaskFilter(on_date=created_day - timedelta(days=1), date_field="created_at")
    )

    assert [t.id for t in same_day] == [created.id]
    assert day_before == []


def test_filter_rejects_inverted_range() -> None:
    with pytest.raises(ValueError):
        TaskFilter(start_date=date(2024, 5, 2), end_date=date(2024, 5, 1))


def test_seed_default_categories_is_idempotent(store: SQLTaskStore) -> None:
    assert store.seed_default_categories() == len(DEFAULT_CATEGORIES)
    assert store.seed_default_categories() == 0

    names = [c.name for c in store.list_categories()]
    assert sorted(names) == sorted(c["name"] for c in DEFAULT_CATEGORIES)
    assert names == sorted(names)


def test_seed_skips_when_any_category_exists(store: SQLTaskStore) -> None:
    store.create_category(CategoryCreate(name="Garden", color="#22c55e"))

    assert store.seed_default_categories() == 0
    assert [c.name for c in store.list_categories()] == ["Garden"]


def test_create_category_rejects_duplicate_name(store: SQLTaskStore) -> None:
    store.create_category(CategoryCreate(name="Errands", color="#000000"))

    with pytest.raises(ValidationError, match="already exists"):
        store.create_category(CategoryCreate(name="Errands", color="#ffffff"))


def test_delete_category(store: SQLTaskStore) -> None:
    category = store.create_category(CategoryCreate(name="Temp", color="#123456"))

    store.delete_category(category.id)

    with pytest.raises(CategoryNotFoundException):
        store.get_category(category.id)
    with pytest.raises(CategoryNotFoundException):
        store.delete_category(category.id)


def test_repair_recomputes_stale_display_fields(store: SQLTaskStore, engine) -> None:
    store.seed_default_categories()
    work = next(c for c in store.list_categories() if c.name == "Work")
    shopping = next(c for c in store.list_categories() if c.name == "Shopping")
    stale = store.create_task(_draft("stale", category_id=work.id))
    orphan = store.create_task(_draft("orphan", category_id=shopping.id))
    fine = store.create_task(_draft("fine"))

    with Session(engine) as session:
        row = session.get(Task, stale.id)
        row.category_name = "Old Name"
        row.category_color = "#000000"
        session.add(row)
        session.commit()
    store.delete_category(shopping.id)

    assert store.repair_category_fields() == 2
    assert store.repair_category_fields() == 0

    by_id = {t.id: t for t in store.list_tasks()}
    assert (by_id[stale.id].category_name, by_id[stale.id].category_color) == ("Work", "#4f46e5")
    assert by_id[orphan.id].category_name == "No Category"
    assert by_id[fine.id].category_name == "No Category"


def test_database_failure_becomes_store_error(engine) -> None:
    store = SQLTaskStore(engine)
    Category.__table__.drop(engine)

    with pytest.raises(StoreError):
        store.list_categories()
