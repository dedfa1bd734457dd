import os

# Configure before the app (and its engine) is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["REDIS_ENABLED"] = "false"
os.environ["DB_LOG_SLOW_QUERIES"] = "false"
os.environ["SECURITY_HEADERS_ENABLED"] = "true"
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.pop("GEMINI_API_KEY", None)
os.environ.pop("RESEND_API_KEY", None)
os.environ.pop("RAZORPAY_KEY_ID", None)
os.environ.pop("RAZORPAY_KEY_SECRET", None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from fitzone.database import Base, get_db
from fitzone.domain.auth.repository import UserRepository
from fitzone.main import app
from fitzone.models import GymClass, User
from fitzone.security_utils import create_access_token, hash_password

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

PASSWORD = "secret123"


@pytest.fixture(autouse=True)
def reset_tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    def override_get_db():
        session = TestingSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def _create_member(db, email="member@fitzone.in", full_name="Test Member") -> User:
    return UserRepository.create_member_account(
        db,
        full_name=full_name,
        email=email,
        phone="9876543210",
        password_hash=hash_password(PASSWORD),
        role="member",
    )


def _create_user(db, role: str, email: str) -> User:
    user = User(full_name=f"Test {role.title()}", email=email, password_hash=hash_password(PASSWORD), role=role)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def _headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.id, user.role)}"}


@pytest.fixture
def member(db):
    return _create_member(db)


@pytest.fixture
def admin(db):
    return _create_user(db, "admin", "admin@fitzone.in")


@pytest.fixture
def member_headers(member):
    return _headers(member)


@pytest.fixture
def admin_headers(admin):
    return _headers(admin)


@pytest.fixture
def gym_class(db):
    gym_class = GymClass(
        name="Morning Yoga",
        slug="morning-yoga",
        description="Gentle flow to start the day",
        type="Yoga",
        capacity=2,
        duration=60,
        schedules=[{"day": "Monday", "start_time": "07:00", "end_time": "08:00"}],
    )
    db.add(gym_class)
    db.commit()
    db.refresh(gym_class)
    return gym_class


@pytest.fixture
def make_member(db):
    """Factory for extra member accounts: make_member("other@fitzone.in")"""

    def factory(email: str, full_name: str = "Other Member") -> User:
        return _create_member(db, email=email, full_name=full_name)

    return factory


@pytest.fixture
def auth_headers():
    return _headers
