# tests/test_list_derivation.py
from __future__ import annotations

import pytest

from conftest import make_task
from taskpad.services.list_derivation import count_by_filter, derive_visible


@pytest.fixture()
def tasks():
    return [
        make_task("a", "Buy milk", created_at=100, notes="2 litres"),
        make_task("b", "call Mom", created_at=300, completed=True),
        make_task("c", "Water plants", created_at=200, notes="Balcony and MILK thistle"),
    ]


def ids(rows) -> list[str]:
    return [t.id for t in rows]


def test_oldest_sorts_ascending_by_created_at(tasks):
    assert [t.created_at for t in derive_visible(tasks, "", "all", "oldest")] == [100, 200, 300]


def test_newest_sorts_descending_by_created_at(tasks):
    assert [t.created_at for t in derive_visible(tasks, "", "all", "newest")] == [300, 200, 100]


def test_alphabetical_ignores_case(tasks):
    assert ids(derive_visible(tasks, sort="alphabetical")) == ["a", "b", "c"]


def test_alphabetical_puts_lowercase_first_on_case_ties():
    rows = [make_task("1", "Apple"), make_task("2", "apple"), make_task("3", "banana")]
    assert ids(derive_visible(rows, sort="alphabetical")) == ["2", "1", "3"]


@pytest.mark.parametrize(
    "task_filter,expected",
    [("all", {"a", "b", "c"}), ("active", {"a", "c"}), ("completed", {"b"})],
)
def test_completion_filter(tasks, task_filter, expected):
    assert set(ids(derive_visible(tasks, task_filter=task_filter))) == expected


def test_search_matches_title_or_notes_case_insensitively(tasks):
    assert ids(derive_visible(tasks, "milk", sort="oldest")) == ["a", "c"]
    assert ids(derive_visible(tasks, "MOM")) == ["b"]


def test_blank_query_does_not_filter(tasks):
    assert len(derive_visible(tasks, "   ")) == 3


def test_search_and_filter_compose(tasks):
    assert ids(derive_visible(tasks, "milk", "active", "newest")) == ["c", "a"]
    assert derive_visible(tasks, "milk", "completed") == []


def test_input_is_not_mutated(tasks):
    before = list(tasks)
    derive_visible(tasks, "m", "active", "alphabetical")
    assert tasks == before


def test_same_inputs_same_output(tasks):
    first = derive_visible(tasks, "a", "all", "alphabetical")
    second = derive_visible(tasks, "a", "all", "alphabetical")
    assert first == second


def test_equal_timestamps_keep_collection_order():
    rows = [make_task("x", created_at=1), make_task("y", created_at=1), make_task("z", created_at=1)]
    assert ids(derive_visible(rows, sort="newest")) == ["x", "y", "z"]
    assert ids(derive_visible(rows, sort="oldest")) == ["x", "y", "z"]


@pytest.mark.parametrize("kwargs", [{"task_filter": "done"}, {"sort": "alpha"}])
def test_unknown_selection_values_raise(tasks, kwargs):
    with pytest.raises(ValueError):
        derive_visible(tasks, **kwargs)


def test_count_by_filter(tasks):
    assert count_by_filter(tasks) == {"all": 3, "active": 2, "completed": 1}
    assert count_by_filter([]) == {"all": 0, "active": 0, "completed": 0}


def test_alphabetical_sorts_accented_titles_with_base_letter():
    rows = [make_task("z", "zebra"), make_task("e", "éclair"), make_task("a", "apple")]
    assert ids(derive_visible(rows, sort="alphabetical")) == ["a", "e", "z"]
