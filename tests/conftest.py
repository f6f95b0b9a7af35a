import os

# Configure the app for tests BEFORE importing it
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["PASSWORD_BREACH_CHECK_ENABLED"] = "false"
os.environ["DB_LOG_SLOW_QUERIES"] = "false"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from shuvodin.database import Base, get_db  # noqa: E402
from shuvodin.main import app  # noqa: E402
from shuvodin.seed import seed_database  # noqa: E402
from tests.helpers import create_vendor, signup  # noqa: E402


@pytest.fixture(scope="session")
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    """Fresh seeded schema for every test"""
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    seed_database(session)
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def user_headers(client):
    return signup(client, "rahim")


@pytest.fixture
def vendor_headers(client):
    return signup(client, "karim")


@pytest.fixture
def vendor(client, db, vendor_headers):
    return create_vendor(client, db, vendor_headers)
