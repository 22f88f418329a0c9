import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.main import create_app
from app.models import Question, Test, User
from app.utils.security import ADMIN_ROLE, DEFAULT_ROLE


@pytest.fixture
def test_settings():
    return Settings(
        DATABASE_URL="sqlite://",
        JWT_SECRET="test-secret",
        BCRYPT_ROUNDS=4,
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def app(test_settings):
    return create_app(test_settings)


@pytest.fixture
def client(app):
    # Entering the client runs startup, which creates a fresh in-memory schema
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db_session(client):
    session = client.app.state.database.session()
    yield session
    session.close()


@pytest.fixture
def auth_service(app):
    return app.state.auth_service


@pytest.fixture
def make_user(db_session, auth_service):
    """Create a persisted user and return (user_id, auth headers)"""

    def _make(email, role=DEFAULT_ROLE, password="password123"):
        user = User(
            email=email,
            password=auth_service.hash_password(password),
            name=email.split("@")[0],
            role=role,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        token = auth_service.issue_for_user(user)
        return user.id, {"Authorization": f"Bearer {token}"}

    return _make


@pytest.fixture
def student(make_user):
    return make_user("student@example.com")


@pytest.fixture
def other_student(make_user):
    return make_user("other@example.com")


@pytest.fixture
def admin_headers(make_user):
    _, headers = make_user("admin@example.com", role=ADMIN_ROLE)
    return headers


@pytest.fixture
def guest_headers(client):
    token = client.post("/api/auth/guest").json()["token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def sample_test(db_session):
    """A three-question quant test; returns its id and question ids"""
    test = Test(
        title="Quant Mock 1",
        section="QA",
        difficulty="medium",
        duration=40,
        total_marks=9,
        questions=[
            Question(
                position=i,
                question_text=f"Question {i + 1}",
                options=["A", "B", "C", "D"],
                correct_answer="B",
                marks=3,
                explanation="Because B",
            )
            for i in range(3)
        ],
    )
    db_session.add(test)
    db_session.commit()
    db_session.refresh(test)
    return {"id": test.id, "question_ids": [q.id for q in test.questions]}


class _EmptyQuery:
    """Query stand-in whose lookup finds nothing"""

    def filter(self, *criteria):
        return self

    def first(self):
        return None


class StaleFirstLookup:
    """
    Session wrapper whose first query sees no rows

    Lets a test commit the "winning" row from another session between the
    service's existence check and its insert.
    """

    def __init__(self, session):
        self._session = session
        self._stale = True

    def query(self, *entities):
        if self._stale:
            self._stale = False
            return _EmptyQuery()
        return self._session.query(*entities)

    def __getattr__(self, name):
        return getattr(self._session, name)


@pytest.fixture
def other_session(client):
    """A second session on the same database, as a concurrent request would use"""
    session = client.app.state.database.session()
    yield session
    session.close()


@pytest.fixture
def stale_first_lookup(db_session):
    return StaleFirstLookup(db_session)
