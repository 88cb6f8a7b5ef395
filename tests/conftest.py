import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from fintrack.main import app
from fintrack.models import Base
from fintrack.store import RecordStore
from fintrack.web_app import get_db


@pytest.fixture(scope="module")
def engine():
    """
    In-memory SQLite engine with the schema created. One shared connection,
    so the API test client can reach it from its worker thread.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture(scope="function")
def session(engine):
    """
    Opens a transaction before the test and rolls it back afterwards.
    """
    connection = engine.connect()
    trans = connection.begin()
    Session = sessionmaker(bind=connection)
    session = Session()
    yield session
    session.close()
    trans.rollback()
    connection.close()


@pytest.fixture()
def store(session):
    return RecordStore(session)


@pytest.fixture()
def alice(store):
    return store.create_user("alice", "hash")


@pytest.fixture()
def client(session):
    def override_get_db():
        yield session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
