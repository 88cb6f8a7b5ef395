import datetime
import logging

from dateutil.relativedelta import relativedelta
from sqlalchemy.orm import Session

from fintrack.models import SessionLocal, init_db
from fintrack.models.category import Category
from fintrack.models.savings_goal import SavingsGoal
from fintrack.models.transaction import Transaction
from fintrack.models.user import User
from fintrack.utils.config import DATABASE_URL, DEMO_PASSWORD_HASH

logger = logging.getLogger(__name__)

DEMO_USERNAME = "demo"

DEMO_CATEGORIES = [
    ("Salary", "income", "#10b981"),
    ("Groceries", "expense", "#ef4444"),
    ("Transportation", "expense", "#f59e0b"),
    ("Entertainment", "expense", "#8b5cf6"),
    ("Utilities", "expense", "#06b6d4"),
    ("Healthcare", "expense", "#ec4899"),
]

# (category name, amount, description) dated on the seed day
DEMO_TRANSACTIONS = [
    ("Salary", 3000, "Monthly Salary"),
    ("Groceries", 150, "Weekly groceries"),
    ("Transportation", 50, "Gas"),
]


def seed_demo(session: Session, today: datetime.date = None, password_hash: str = DEMO_PASSWORD_HASH):
    """
    Create the demo user with sample categories, transactions and a goal.
    Returns the demo user, or None when it already exists.
    """
    today = today or datetime.date.today()
    if session.query(User).filter(User.username == DEMO_USERNAME).first():
        logger.info("Demo user already exists. Skipping seed.")
        return None

    user = User(username=DEMO_USERNAME, password_hash=password_hash, email="demo@example.com")
    session.add(user)
    session.flush()

    by_name = {}
    for name, kind, color in DEMO_CATEGORIES:
        category = Category(name=name, type=kind, color=color, is_default=True, user_id=user.id)
        session.add(category)
        by_name[name] = category
    session.flush()  # so every category has its id

    for name, amount, description in DEMO_TRANSACTIONS:
        session.add(Transaction(
            amount=amount,
            date=today,
            description=description,
            user_id=user.id,
            category_id=by_name[name].id
        ))

    session.add(SavingsGoal(
        name="Emergency Fund",
        target_amount=10000,
        current_amount=2500,
        deadline=today + relativedelta(years=1),
        user_id=user.id
    ))
    session.commit()
    logger.info("Demo user created (id=%s)", user.id)
    return user


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_db(DATABASE_URL)
    db = SessionLocal()
    try:
        seed_demo(db)
    finally:
        db.close()
