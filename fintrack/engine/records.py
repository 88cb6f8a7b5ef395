"""
Plain values the aggregation engine reads and returns.

``TransactionRecord`` is a transaction already joined with its category's
name, kind and color. The result types convert to JSON-ready dicts with
``to_dict()``; money is carried as ``Decimal`` and rendered as a float
with two decimals.
"""
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

INCOME = "income"
EXPENSE = "expense"
KINDS = (INCOME, EXPENSE)

CENT = Decimal("0.01")
ZERO = Decimal("0")


def to_decimal(value) -> Decimal:
    """Convert an amount to Decimal without picking up float noise."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(value)


def quantize(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def as_number(value: Decimal) -> float:
    return float(quantize(value))


@dataclass(frozen=True)
class TransactionRecord:
    id: int
    owner_id: int
    category_id: int
    category_owner_id: Optional[int]
    category_name: str
    category_kind: str
    category_color: str
    amount: Decimal
    date: date
    description: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "amount", to_decimal(self.amount))

    @property
    def is_income(self) -> bool:
        return self.category_kind == INCOME

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "category_id": self.category_id,
            "category_name": self.category_name,
            "category_type": self.category_kind,
            "category_color": self.category_color,
            "amount": as_number(self.amount),
            "description": self.description,
            "date": self.date.isoformat(),
        }


@dataclass(frozen=True)
class Summary:
    income: Decimal = ZERO
    expense: Decimal = ZERO

    @property
    def balance(self) -> Decimal:
        return self.income - self.expense

    def to_dict(self) -> dict:
        return {
            "income": as_number(self.income),
            "expense": as_number(self.expense),
            "balance": as_number(self.balance),
        }


@dataclass(frozen=True)
class CategoryTotal:
    category_id: int
    name: str
    color: str
    total: Decimal
    percent: Decimal = ZERO  # share of all expense in the breakdown

    def to_dict(self) -> dict:
        return {
            "category_id": self.category_id,
            "name": self.name,
            "color": self.color,
            "total": as_number(self.total),
            "percent": as_number(self.percent),
        }


@dataclass(frozen=True)
class WeeklyRollup:
    summary: Summary
    count: int

    @property
    def income(self) -> Decimal:
        return self.summary.income

    @property
    def expense(self) -> Decimal:
        return self.summary.expense

    @property
    def balance(self) -> Decimal:
        return self.summary.balance

    def to_dict(self) -> dict:
        return dict(self.summary.to_dict(), count=self.count)


@dataclass(frozen=True)
class DailyTotal:
    day: date
    income: Decimal = ZERO
    expense: Decimal = ZERO

    def to_dict(self) -> dict:
        return {
            "date": self.day.isoformat(),
            "income": as_number(self.income),
            "expense": as_number(self.expense),
        }


@dataclass(frozen=True)
class GoalProgress:
    """
    ``percent`` is the raw ratio and may exceed 100; ``display_percent`` is
    the same value capped at 100 for progress bars. Both are reported.
    """
    percent: Decimal
    display_percent: Decimal
    remaining: Decimal

    def to_dict(self) -> dict:
        return {
            "percent": as_number(self.percent),
            "display_percent": as_number(self.display_percent),
            "remaining": as_number(self.remaining),
        }
