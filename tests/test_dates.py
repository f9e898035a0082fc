# tests/test_dates.py
from __future__ import annotations

from datetime import datetime

import pytest

from taskpad.utils.dates import due_date_text, human_date, parse_due_date


def test_parse_date_only_is_local_midnight():
    ts = parse_due_date("2024-03-07")
    assert ts == int(datetime(2024, 3, 7).timestamp() * 1000)


def test_due_date_text_round_trips():
    assert due_date_text(parse_due_date("2024-12-31")) == "2024-12-31"


def test_human_date_format():
    assert human_date(parse_due_date("2024-03-07")) == "Mar 7, 2024"


def test_parse_full_iso_datetime():
    ts = parse_due_date("2024-03-07T00:00:00Z")
    assert ts == 1709769600000


@pytest.mark.parametrize("text", ["", "   ", None])
def test_blank_input_parses_to_none(text):
    assert parse_due_date(text) is None


@pytest.mark.parametrize("text", ["2024-02-30", "07/03/2024", "soon", "2024-13-01"])
def test_bad_input_parses_to_none(text):
    assert parse_due_date(text) is None


@pytest.mark.parametrize("ts", [None, 0, 10**20])
def test_unrenderable_timestamps_give_none(ts):
    assert human_date(ts) is None
    assert due_date_text(ts) == ""
