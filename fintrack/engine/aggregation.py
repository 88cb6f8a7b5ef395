"""
Pure reducers over a user's enriched transaction records.

Nothing here touches storage or holds state between calls; callers fetch
records through the store first and pass them in.
"""
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Iterable, List

from .errors import InvalidDateRange, InvalidGoal, ReferentialIntegrityViolation
from .records import (
    EXPENSE, INCOME, KINDS, ZERO,
    CategoryTotal, DailyTotal, GoalProgress, Summary, TransactionRecord, WeeklyRollup,
    quantize, to_decimal,
)

WEEK = timedelta(days=7)
HUNDRED = Decimal("100")

# Longest span daily_totals will expand, about three years
MAX_DAILY_DAYS = 3 * 365 + 1


def _checked(transactions: Iterable[TransactionRecord]):
    for tx in transactions:
        if tx.category_kind not in KINDS:
            raise ReferentialIntegrityViolation(
                f"transaction {tx.id} references category {tx.category_id} with unknown kind "
                f"'{tx.category_kind}'"
            )
        if tx.category_owner_id != tx.owner_id:
            raise ReferentialIntegrityViolation(
                f"transaction {tx.id} of user {tx.owner_id} references category "
                f"{tx.category_id} owned by {tx.category_owner_id}"
            )
        yield tx


def _as_day(value) -> date:
    return value.date() if isinstance(value, datetime) else value


def summarize(transactions: Iterable[TransactionRecord]) -> Summary:
    income = ZERO
    expense = ZERO
    for tx in _checked(transactions):
        if tx.is_income:
            income += tx.amount
        else:
            expense += tx.amount
    return Summary(income=income, expense=expense)


def breakdown_by_category(transactions: Iterable[TransactionRecord]) -> List[CategoryTotal]:
    """
    Expense totals per category, largest first; equal totals fall back to
    category id order. Income categories never appear.
    """
    groups = {}
    for tx in _checked(transactions):
        if tx.category_kind != EXPENSE:
            continue
        entry = groups.get(tx.category_id)
        if entry is None:
            groups[tx.category_id] = [tx.category_name, tx.category_color, tx.amount]
        else:
            entry[2] += tx.amount

    grand_total = sum((entry[2] for entry in groups.values()), ZERO)
    ordered = sorted(groups.items(), key=lambda item: (-item[1][2], item[0]))
    return [
        CategoryTotal(
            category_id=category_id,
            name=name,
            color=color,
            total=total,
            percent=quantize(total / grand_total * HUNDRED) if grand_total else ZERO,
        )
        for category_id, (name, color, total) in ordered
    ]


def weekly_rollup(transactions: Iterable[TransactionRecord], now) -> WeeklyRollup:
    """Totals over [now - 7 days, now], ignoring any range the caller filtered by."""
    today = _as_day(now)
    window_start = today - WEEK
    in_window = [tx for tx in _checked(transactions) if window_start <= tx.date <= today]
    return WeeklyRollup(summary=summarize(in_window), count=len(in_window))


def daily_totals(transactions: Iterable[TransactionRecord], start, end) -> List[DailyTotal]:
    """One entry per day in [start, end], days without activity included as zeros."""
    start, end = _as_day(start), _as_day(end)
    if start is None or end is None:
        raise InvalidDateRange("daily totals need both startDate and endDate")
    if start > end:
        raise InvalidDateRange(f"startDate {start.isoformat()} is after endDate {end.isoformat()}")

    span = (end - start).days + 1
    if span > MAX_DAILY_DAYS:
        raise InvalidDateRange(f"daily totals cover at most {MAX_DAILY_DAYS} days, got {span}")

    days = {
        start + timedelta(days=offset): {INCOME: ZERO, EXPENSE: ZERO}
        for offset in range(span)
    }
    for tx in _checked(transactions):
        if tx.date in days:
            days[tx.date][tx.category_kind] += tx.amount
    return [DailyTotal(day=d, income=v[INCOME], expense=v[EXPENSE]) for d, v in days.items()]


def goal_progress(goal) -> GoalProgress:
    """
    Progress of anything with ``target_amount`` and ``current_amount``.
    """
    target = to_decimal(goal.target_amount)
    current = to_decimal(goal.current_amount if goal.current_amount is not None else ZERO)
    if target <= 0:
        raise InvalidGoal(f"target amount must be positive, got {target}")
    if current < 0:
        raise InvalidGoal(f"current amount must not be negative, got {current}")

    percent = quantize(current / target * HUNDRED)
    return GoalProgress(
        percent=percent,
        display_percent=min(percent, HUNDRED),
        remaining=quantize(max(target - current, ZERO)),
    )
