"""
Owner-scoped persistence for users, categories, transactions and savings goals.

Every read and write takes the owner id and only ever touches rows that
owner holds. Transaction reads come back as ``TransactionRecord`` values
already joined with their category, ready for the aggregation engine.
"""
import logging
from decimal import Decimal, InvalidOperation
from typing import List, Optional

from sqlalchemy.orm import Session

from fintrack.engine.errors import (
    InvalidCategory,
    InvalidGoal,
    InvalidTransaction,
    RecordNotFound,
    ReferentialIntegrityViolation,
)
from fintrack.engine.filters import TransactionFilter, parse_date
from fintrack.engine.records import KINDS, TransactionRecord, quantize, to_decimal
from fintrack.models.category import Category, DEFAULT_COLOR
from fintrack.models.savings_goal import SavingsGoal
from fintrack.models.transaction import Transaction
from fintrack.models.user import User

logger = logging.getLogger(__name__)

# (name, kind, color) created for every newly registered user
DEFAULT_CATEGORIES = [
    ("Salary", "income", "#10b981"),
    ("Groceries", "expense", "#ef4444"),
    ("Transportation", "expense", "#f59e0b"),
    ("Entertainment", "expense", "#8b5cf6"),
]


def _money(value, error_cls, field: str) -> Decimal:
    try:
        amount = to_decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise error_cls(f"{field} must be a number, got {value!r}") from None
    if not amount.is_finite():
        raise error_cls(f"{field} must be a finite number, got {value!r}")
    return quantize(amount)


class RecordStore:
    """Wraps one SQLAlchemy session; the caller owns its lifetime."""

    def __init__(self, session: Session):
        self.session = session

    # --- Users ---

    def create_user(self, username: str, password_hash: str, email: Optional[str] = None,
                    with_defaults: bool = True) -> User:
        user = User(username=username, password_hash=password_hash, email=email)
        self.session.add(user)
        self.session.flush()  # to get user.id
        if with_defaults:
            for name, kind, color in DEFAULT_CATEGORIES:
                self.session.add(Category(name=name, type=kind, color=color, is_default=True, user_id=user.id))
        self.session.commit()
        logger.info("User %s created (id=%s)", username, user.id)
        return user

    def get_user(self, owner_id: int) -> User:
        user = self.session.query(User).filter(User.id == owner_id).first()
        if not user:
            raise RecordNotFound(f"user {owner_id} not found")
        return user

    def find_user(self, username: str) -> Optional[User]:
        return self.session.query(User).filter(User.username == username).first()

    # --- Categories ---

    def list_categories(self, owner_id: int) -> List[Category]:
        return (
            self.session.query(Category)
            .filter(Category.user_id == owner_id)
            .order_by(Category.name, Category.id)
            .all()
        )

    def get_category(self, owner_id: int, category_id: int) -> Category:
        category = self.session.query(Category).filter(
            Category.id == category_id,
            Category.user_id == owner_id
        ).first()
        if not category:
            raise RecordNotFound(f"category {category_id} not found")
        return category

    def create_category(self, owner_id: int, name: str, kind: str, color: Optional[str] = None) -> Category:
        if kind not in KINDS:
            raise InvalidCategory(f"category type must be 'income' or 'expense', got '{kind}'")
        category = Category(name=name, type=kind, color=color or DEFAULT_COLOR, is_default=False, user_id=owner_id)
        self.session.add(category)
        self.session.commit()
        logger.info("Category %s '%s' (%s) created for user %s", category.id, name, kind, owner_id)
        return category

    def delete_category(self, owner_id: int, category_id: int) -> None:
        category = self.get_category(owner_id, category_id)
        self.session.delete(category)
        self.session.commit()
        logger.info("Category %s deleted for user %s", category_id, owner_id)

    # --- Transactions ---

    def create_transaction(self, owner_id: int, category_id: int, amount, txn_date,
                           description: Optional[str] = None) -> Transaction:
        value = _money(amount, InvalidTransaction, "amount")
        if value <= 0:
            raise InvalidTransaction(f"amount must be positive, got {value}")
        day = parse_date(txn_date, "date")
        if day is None:
            raise InvalidTransaction("date is required")

        category = self.session.query(Category).filter(Category.id == category_id).first()
        if not category or category.user_id != owner_id:
            raise ReferentialIntegrityViolation(
                f"category {category_id} does not belong to user {owner_id}"
            )

        transaction = Transaction(
            amount=value,
            date=day,
            description=description,
            user_id=owner_id,
            category_id=category.id
        )
        self.session.add(transaction)
        self.session.commit()
        logger.info("Transaction %s created for user %s", transaction.id, owner_id)
        return transaction

    def list_transactions(self, txn_filter: TransactionFilter) -> List[TransactionRecord]:
        rows = (
            self.session.query(Transaction, Category)
            .join(Category, Transaction.category_id == Category.id)
            .filter(*txn_filter.clauses(Transaction))
            .order_by(Transaction.date.desc(), Transaction.created_at.desc(), Transaction.id.desc())
            .all()
        )
        return [
            TransactionRecord(
                id=t.id,
                owner_id=t.user_id,
                category_id=c.id,
                category_owner_id=c.user_id,
                category_name=c.name,
                category_kind=c.type,
                category_color=c.color,
                amount=t.amount,
                date=t.date,
                description=t.description,
            )
            for t, c in rows
        ]

    def delete_transaction(self, owner_id: int, transaction_id: int) -> None:
        transaction = self.session.query(Transaction).filter(
            Transaction.id == transaction_id,
            Transaction.user_id == owner_id
        ).first()
        if not transaction:
            raise RecordNotFound(f"transaction {transaction_id} not found")
        self.session.delete(transaction)
        self.session.commit()
        logger.info("Transaction %s deleted for user %s", transaction_id, owner_id)

    # --- Savings goals ---

    def list_goals(self, owner_id: int) -> List[SavingsGoal]:
        return (
            self.session.query(SavingsGoal)
            .filter(SavingsGoal.user_id == owner_id)
            .order_by(SavingsGoal.created_at.desc(), SavingsGoal.id.desc())
            .all()
        )

    def get_goal(self, owner_id: int, goal_id: int) -> SavingsGoal:
        goal = self.session.query(SavingsGoal).filter(
            SavingsGoal.id == goal_id,
            SavingsGoal.user_id == owner_id
        ).first()
        if not goal:
            raise RecordNotFound(f"savings goal {goal_id} not found")
        return goal

    def create_goal(self, owner_id: int, name: str, target_amount, current_amount=0,
                    deadline=None) -> SavingsGoal:
        target = _money(target_amount, InvalidGoal, "target_amount")
        current = _money(current_amount if current_amount is not None else 0, InvalidGoal, "current_amount")
        if target <= 0:
            raise InvalidGoal(f"target amount must be positive, got {target}")
        if current < 0:
            raise InvalidGoal(f"current amount must not be negative, got {current}")

        goal = SavingsGoal(
            name=name,
            target_amount=target,
            current_amount=current,
            deadline=parse_date(deadline, "deadline"),
            user_id=owner_id
        )
        self.session.add(goal)
        self.session.commit()
        logger.info("Savings goal %s '%s' created for user %s", goal.id, name, owner_id)
        return goal

    def update_goal_amount(self, owner_id: int, goal_id: int, current_amount) -> SavingsGoal:
        current = _money(current_amount, InvalidGoal, "current_amount")
        if current < 0:
            raise InvalidGoal(f"current amount must not be negative, got {current}")
        goal = self.get_goal(owner_id, goal_id)
        goal.current_amount = current
        self.session.commit()
        logger.info("Savings goal %s set to %s for user %s", goal_id, current, owner_id)
        return goal

    def delete_goal(self, owner_id: int, goal_id: int) -> None:
        goal = self.get_goal(owner_id, goal_id)
        self.session.delete(goal)
        self.session.commit()
        logger.info("Savings goal %s deleted for user %s", goal_id, owner_id)
