# tests/test_task_store.py
from __future__ import annotations

import pytest

from conftest import StepClock, make_task, sequential_ids
from taskpad.models.entities import RemovedBatch, RemovedTask
from taskpad.models.types import PRIORITIES, cycle_priority
from taskpad.services.task_store import TaskStore


def ids(store: TaskStore) -> list[str]:
    return [t.id for t in store.tasks]


# --- add ---------------------------------------------------------------------

def test_add_to_empty_store_uses_defaults(store: TaskStore):
    task = store.add("Buy milk")
    assert task is not None
    assert len(store) == 1
    only = store.tasks[0]
    assert only == task
    assert only.completed is False
    assert only.priority == "low"
    assert only.due_date is None
    assert only.notes == ""


def test_add_trims_title_and_prepends(store: TaskStore):
    a = store.add("  first  ")
    b = store.add("second", "some notes", "high", 123)
    assert a.title == "first"
    assert ids(store) == [b.id, a.id]
    assert (b.notes, b.priority, b.due_date) == ("some notes", "high", 123)
    assert b.created_at > a.created_at


@pytest.mark.parametrize("title", ["", "   ", "\t\n", None])
def test_add_rejects_blank_title(store: TaskStore, title):
    assert store.add(title) is None
    assert len(store) == 0


def test_add_rejects_unknown_priority(store: TaskStore):
    with pytest.raises(ValueError):
        store.add("x", priority="urgent")


def test_ids_are_unique_even_when_factory_repeats():
    factory_values = iter(["dup", "dup", "dup", "other"])
    store = TaskStore(clock=StepClock(), id_factory=lambda: next(factory_values))
    first = store.add("one")
    second = store.add("two")
    assert (first.id, second.id) == ("dup", "other")


def test_many_adds_yield_distinct_ids():
    store = TaskStore()  # real random ids
    for n in range(300):
        store.add(f"task {n}")
    assert len(set(ids(store))) == 300


def test_new_id_does_not_reuse_id_held_for_undo():
    factory_values = iter(["a", "a", "b"])
    store = TaskStore(clock=StepClock(), id_factory=lambda: next(factory_values))
    store.add("one")
    store.remove("a")
    again = store.add("two")
    assert again.id == "b"
    store.undo()
    assert sorted(ids(store)) == ["a", "b"]


# --- update ------------------------------------------------------------------

def test_update_applies_patch_in_place(store: TaskStore):
    a = store.add("a")
    b = store.add("b")
    assert store.update(a.id, title="  renamed ", notes="n", priority="medium", due_date=5) is True
    updated = store.get(a.id)
    assert (updated.title, updated.notes, updated.priority, updated.due_date) == ("renamed", "n", "medium", 5)
    assert updated.created_at == a.created_at
    assert ids(store) == [b.id, a.id]


def test_update_unknown_id_is_noop(store: TaskStore):
    store.add("a")
    before = store.tasks
    assert store.update("nope", title="x") is False
    assert store.tasks == before


def test_update_rejects_blank_title(store: TaskStore):
    a = store.add("keep me")
    assert store.update(a.id, title="   ") is False
    assert store.get(a.id).title == "keep me"


@pytest.mark.parametrize("field", ["id", "created_at"])
def test_update_refuses_immutable_fields(store: TaskStore, field):
    a = store.add("a")
    with pytest.raises(ValueError):
        store.update(a.id, **{field: 1})
    assert store.get(a.id) == a


def test_update_refuses_unknown_fields(store: TaskStore):
    a = store.add("a")
    with pytest.raises(ValueError):
        store.update(a.id, colour="red")


def test_update_can_clear_due_date(store: TaskStore):
    a = store.add("a", due_date=10)
    store.update(a.id, due_date=None)
    assert store.get(a.id).due_date is None


def test_toggle_completed_flips(store: TaskStore):
    a = store.add("a")
    assert store.toggle_completed(a.id)
    assert store.get(a.id).completed is True
    store.toggle_completed(a.id)
    assert store.get(a.id).completed is False
    assert store.toggle_completed("missing") is False


# --- priority ----------------------------------------------------------------

def test_cycle_priority_order():
    assert cycle_priority("low") == "medium"
    assert cycle_priority("medium") == "high"
    assert cycle_priority("high") == "low"


@pytest.mark.parametrize("start", PRIORITIES)
def test_cycle_priority_closes_after_three(start):
    assert cycle_priority(cycle_priority(cycle_priority(start))) == start


def test_store_cycle_priority(store: TaskStore):
    a = store.add("a")
    for expected in ("medium", "high", "low"):
        store.cycle_priority(a.id)
        assert store.get(a.id).priority == expected


# --- remove / undo -----------------------------------------------------------

def test_remove_then_undo_moves_task_to_front(store: TaskStore):
    c = store.add("c")
    b = store.add("b")
    a = store.add("a")
    assert ids(store) == [a.id, b.id, c.id]

    assert store.remove(c.id) is True
    assert ids(store) == [a.id, b.id]
    assert store.undo_buffer == RemovedTask(c)

    assert store.undo() == [c]
    assert ids(store) == [c.id, a.id, b.id]
    assert store.undo_buffer is None
    assert store.get(c.id) == c


def test_second_remove_overwrites_undo_buffer(store: TaskStore):
    x = store.add("x")
    y = store.add("y")
    store.add("z")
    store.remove(x.id)
    store.remove(y.id)
    store.undo()
    assert store.get(y.id) == y
    assert store.get(x.id) is None
    assert len(store) == 2


def test_remove_unknown_id_leaves_buffer_alone(store: TaskStore):
    a = store.add("a")
    store.remove(a.id)
    assert store.remove("missing") is False
    assert store.undo_buffer == RemovedTask(a)


def test_undo_with_empty_buffer_is_noop(store: TaskStore):
    store.add("a")
    before = store.tasks
    assert store.undo() == []
    assert store.tasks == before


def test_dismiss_drops_buffer_without_restoring(store: TaskStore):
    a = store.add("a")
    store.remove(a.id)
    store.dismiss()
    assert store.can_undo is False
    assert store.undo() == []
    assert len(store) == 0


# --- clear completed ---------------------------------------------------------

def test_clear_completed_then_undo_restores_batch_at_front():
    tasks = [
        make_task("a", created_at=5),
        make_task("b", created_at=4, completed=True),
        make_task("c", created_at=3),
        make_task("d", created_at=2, completed=True),
        make_task("e", created_at=1),
    ]
    store = TaskStore(tasks)
    assert store.clear_completed() is True
    assert ids(store) == ["a", "c", "e"]
    assert isinstance(store.undo_buffer, RemovedBatch)
    assert [t.id for t in store.undo_buffer.tasks] == ["b", "d"]

    restored = store.undo()
    assert [t.id for t in restored] == ["b", "d"]
    assert ids(store) == ["b", "d", "a", "c", "e"]
    assert store.undo_buffer is None


def test_clear_completed_without_completed_tasks_is_noop(store: TaskStore):
    a = store.add("a")
    store.add("b")
    store.remove(a.id)
    buffered = store.undo_buffer
    before = store.tasks
    seen = []
    store.subscribe(seen.append)

    assert store.clear_completed() is False
    assert store.tasks == before
    assert store.undo_buffer is buffered
    assert seen == []


# --- change notification -----------------------------------------------------

def test_subscribers_see_every_collection_change(store: TaskStore):
    seen = []
    store.subscribe(seen.append)
    a = store.add("a")
    store.update(a.id, notes="n")
    store.remove(a.id)
    store.undo()
    assert len(seen) == 4
    assert seen[-1] == store.tasks


def test_buffer_only_operations_do_not_notify(store: TaskStore):
    a = store.add("a")
    store.remove(a.id)
    seen = []
    store.subscribe(seen.append)
    store.dismiss()
    store.undo()
    store.update("missing", title="x")
    assert seen == []


def test_failing_listener_does_not_block_others_or_roll_back(store: TaskStore):
    def broken(_tasks):
        raise RuntimeError("boom")

    seen = []
    store.subscribe(broken)
    store.subscribe(seen.append)
    a = store.add("a")
    assert store.get(a.id) == a
    assert len(seen) == 1


def test_unsubscribe_stops_notifications(store: TaskStore):
    seen = []
    unsubscribe = store.subscribe(seen.append)
    store.add("a")
    unsubscribe()
    store.add("b")
    assert len(seen) == 1


def test_title_invariant_holds_across_operations():
    store = TaskStore(id_factory=sequential_ids())
    for title in ["a", " ", "b", "", "c"]:
        store.add(title)
    for t in store.tasks:
        store.update(t.id, title="")
    assert all(t.title.strip() for t in store.tasks)
    assert len(store) == 3
