from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from fintrack.utils.config import DATABASE_URL

# Base class for all ORM models
Base = declarative_base()

# Import all models so that SQLAlchemy knows about them when creating tables
from .user import User
from .category import Category
from .transaction import Transaction
from .savings_goal import SavingsGoal


def _connect_args(database_url: str) -> dict:
    return {"check_same_thread": False} if database_url.startswith("sqlite") else {}


def init_db(database_url: str = DATABASE_URL):
    """
    Initialize the database connection and create tables for all registered ORM models.
    """
    engine = create_engine(database_url, connect_args=_connect_args(database_url))
    # Create all tables defined by subclasses of Base
    Base.metadata.create_all(engine)
    return engine

# SQLAlchemy session factory
engine = create_engine(DATABASE_URL, connect_args=_connect_args(DATABASE_URL))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
