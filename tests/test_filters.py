import datetime

import pytest

from fintrack.engine.errors import InvalidDateRange
from fintrack.engine.filters import ALL_TIME, DateRange, TransactionFilter, build_filter, parse_date
from fintrack.engine.records import TransactionRecord
from fintrack.models import Transaction

D = datetime.date


def make_record(owner_id=1, day=D(2025, 3, 15)):
    return TransactionRecord(
        id=1, owner_id=owner_id, category_id=1, category_owner_id=owner_id,
        category_name="Food", category_kind="expense", category_color="#fff",
        amount=10, date=day,
    )


@pytest.mark.parametrize("value", [None, "", "   "])
def test_parse_date_absent(value):
    assert parse_date(value) is None


def test_parse_date_accepts_iso_and_date_objects():
    assert parse_date("2025-03-01") == D(2025, 3, 1)
    assert parse_date(D(2025, 3, 1)) == D(2025, 3, 1)
    assert parse_date(datetime.datetime(2025, 3, 1, 23, 59)) == D(2025, 3, 1)


@pytest.mark.parametrize("value", ["2025/03/01", "20250301", "2025-3-1", "2025-13-01", "2025-02-30", "yesterday",
                                   "2025-03-01T10:00"])
def test_parse_date_rejects_malformed(value):
    with pytest.raises(InvalidDateRange):
        parse_date(value, "startDate")


def test_date_range_rejects_start_after_end():
    with pytest.raises(InvalidDateRange):
        DateRange(D(2025, 3, 2), D(2025, 3, 1))


def test_date_range_is_inclusive_and_open_ended():
    rng = DateRange(D(2025, 3, 1), D(2025, 3, 31))
    assert rng.contains(D(2025, 3, 1))
    assert rng.contains(D(2025, 3, 31))
    assert not rng.contains(D(2025, 2, 28))
    assert not rng.contains(D(2025, 4, 1))

    assert DateRange(start=D(2025, 3, 1)).contains(D(2099, 1, 1))
    assert DateRange(end=D(2025, 3, 1)).contains(D(1999, 1, 1))
    assert ALL_TIME.is_all_time


def test_build_filter_inverted_range_fails():
    with pytest.raises(InvalidDateRange):
        build_filter(1, "2025-04-01", "2025-03-01")


def test_build_filter_same_day_is_valid():
    f = build_filter(1, "2025-03-15", "2025-03-15")
    assert f.matches(make_record(day=D(2025, 3, 15)))


def test_filter_matches_owner_and_dates():
    f = build_filter(1, "2025-03-01", None)
    assert f.matches(make_record(owner_id=1, day=D(2025, 3, 1)))
    assert not f.matches(make_record(owner_id=2, day=D(2025, 3, 1)))
    assert not f.matches(make_record(owner_id=1, day=D(2025, 2, 28)))


def test_filter_clauses_select_same_rows(session, store, alice):
    food = next(c for c in store.list_categories(alice.id) if c.name == "Groceries")
    for day in (D(2025, 2, 28), D(2025, 3, 1), D(2025, 3, 31), D(2025, 4, 1)):
        store.create_transaction(alice.id, food.id, 5, day)

    f = TransactionFilter(alice.id, DateRange(D(2025, 3, 1), D(2025, 3, 31)))
    rows = session.query(Transaction).filter(*f.clauses(Transaction)).all()
    assert sorted(t.date for t in rows) == [D(2025, 3, 1), D(2025, 3, 31)]

    assert len(f.clauses(Transaction)) == 3
    assert len(TransactionFilter(alice.id).clauses(Transaction)) == 1
