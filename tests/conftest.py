import os
from datetime import timedelta
from types import SimpleNamespace

TEST_DB_FILE = "test_admin_gateway.db"
os.environ["ADMIN_GATEWAY_DATABASE_URL"] = f"sqlite:///./{TEST_DB_FILE}"

import bcrypt  # noqa: E402
import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from admin_gateway.core.deps import get_db  # noqa: E402
from admin_gateway.db.base import Base  # noqa: E402
from admin_gateway.db.documents import utcnow  # noqa: E402
from admin_gateway.db.session import engine  # noqa: E402
from admin_gateway.main import app  # noqa: E402
from admin_gateway.models.auth_account import AuthAccount  # noqa: E402
from admin_gateway.models.course import Course  # noqa: E402
from admin_gateway.models.enrollment import Enrollment  # noqa: E402
from admin_gateway.models.user import User  # noqa: E402

ADMIN_UID = "admin-uid"
ADMIN_EMAIL = "admin@example.com"
STUDENT_UID = "student-uid"
STUDENT_EMAIL = "student1@example.com"
COURSE_ID = "course-ai"
COURSE_PRICE = 4999.0
PASSWORD = "password123"

# low-cost hash so per-test seeding and logins stay fast
SEED_HASH = bcrypt.hashpw(PASSWORD.encode("utf-8"), bcrypt.gensalt(rounds=4)).decode("utf-8")

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="session", autouse=True)
def setup_test_db():
    """Create a fresh schema once for the whole test session."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()
    if os.path.exists(TEST_DB_FILE):
        os.remove(TEST_DB_FILE)


@pytest.fixture(autouse=True)
def seeded():
    """Seed a clean minimal dataset for each test."""
    db = TestingSessionLocal()
    try:
        db.query(Enrollment).delete()
        db.query(Course).delete()
        db.query(User).delete()
        db.query(AuthAccount).delete()
        db.commit()

        now = utcnow()
        db.add_all(
            [
                AuthAccount(
                    uid=ADMIN_UID,
                    email=ADMIN_EMAIL,
                    hashed_password=SEED_HASH,
                    display_name="Admin One",
                    custom_claims={"isAdmin": True},
                ),
                AuthAccount(
                    uid=STUDENT_UID,
                    email=STUDENT_EMAIL,
                    hashed_password=SEED_HASH,
                    display_name="Student One",
                    custom_claims={},
                ),
                User(
                    uid=ADMIN_UID,
                    email=ADMIN_EMAIL,
                    display_name="Admin One",
                    is_admin=True,
                    created_at=now - timedelta(days=2),
                    updated_at=now - timedelta(days=2),
                ),
                User(
                    uid=STUDENT_UID,
                    email=STUDENT_EMAIL,
                    display_name="Student One",
                    is_admin=False,
                    created_at=now - timedelta(days=1),
                    updated_at=now - timedelta(days=1),
                ),
                Course(
                    id=COURSE_ID,
                    title="Intro to AI",
                    price=COURSE_PRICE,
                    created_at=now - timedelta(days=3),
                    updated_at=now - timedelta(days=3),
                ),
            ]
        )
        db.commit()

        yield SimpleNamespace(admin_uid=ADMIN_UID, student_uid=STUDENT_UID, course_id=COURSE_ID)
    finally:
        db.close()


@pytest.fixture()
def client():
    """Test client that uses the test DB session via dependency override."""
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def db():
    """Session for direct assertions; call expire_all() before re-reading."""
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


def login(client, email: str, password: str = PASSWORD) -> str:
    r = client.post("/auth/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    return r.json()["data"]["idToken"]


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def admin_headers(client):
    return auth_header(login(client, ADMIN_EMAIL))


@pytest.fixture()
def student_headers(client):
    return auth_header(login(client, STUDENT_EMAIL))
