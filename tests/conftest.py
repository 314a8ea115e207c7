"""
Test configuration and fixtures
"""
import os

# Set testing environment
os.environ["SECRET_KEY"] = "test-secret-key-for-testing-only"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ.pop("SEED_ADMIN_EMAIL", None)
os.environ.pop("SEED_ADMIN_PASSWORD", None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from evalhub.database import Base, get_db
from evalhub.main import app
from evalhub.models.user import ROLE_ADMIN
from tests.helpers import auth_headers, create_department, create_user

# One in-memory database shared by every session of a test
test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture
def db():
    """Fresh schema and session for each test"""
    Base.metadata.create_all(bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def client(db):
    """Test client whose requests use the test database"""
    def override_get_db():
        session = TestSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def department(db):
    return create_department(db, "Engineering")


@pytest.fixture
def admin(db):
    return create_user(db, "admin@example.com", role=ROLE_ADMIN, first_name="Ada", last_name="Admin")


@pytest.fixture
def member(db, department):
    return create_user(db, "member@example.com", department=department, first_name="Mehmet", last_name="Aliyev")


@pytest.fixture
def other_member(db, department):
    return create_user(db, "other@example.com", department=department, first_name="Leyla", last_name="Hasanova")


@pytest.fixture
def admin_headers(admin):
    return auth_headers(admin)


@pytest.fixture
def member_headers(member):
    return auth_headers(member)
