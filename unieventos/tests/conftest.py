import fakeredis
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import Engine, StaticPool, create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.orm.session import Session

from unieventos.core import config
from unieventos.core.security import create_access_token, hash_password
from unieventos.database.db import Base, get_db
from unieventos.main import app
from unieventos.models.users import Role, UserProfile
from unieventos.services import store
from unieventos.services.accounts import rotate_token_id

# Use an in-memory SQLite database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"
engine: Engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(autouse=True)
def setup_database():
    """Give every test an empty schema."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


# Override the database dependency
def override_get_db():
    db: Session = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture
def db_session():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def fake_redis():
    return fakeredis.FakeRedis(decode_responses=True)


@pytest.fixture
def redis_client(fake_redis, monkeypatch: pytest.MonkeyPatch):
    """Route the registration lock to fakeredis."""
    monkeypatch.setattr(
        "unieventos.services.registration.get_redis_client", lambda: fake_redis
    )
    return fake_redis


@pytest.fixture
def locking(redis_client, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(config, "REGISTRATION_LOCKING", True)
    return redis_client


@pytest.fixture
def store_writes(monkeypatch: pytest.MonkeyPatch) -> list:
    """Record every update_event call while still performing it."""
    calls = []
    original = store.update_event

    def recording_update(db, event_id, fields):
        calls.append((event_id, fields))
        return original(db, event_id, fields)

    monkeypatch.setattr(store, "update_event", recording_update)
    return calls


def make_profile(db: Session, email: str, role: Role, password: str = "secret123") -> UserProfile:
    profile = UserProfile(email=email, role=role.value, password_hash=hash_password(password))
    db.add(profile)
    db.commit()
    db.refresh(profile)
    return profile


def auth_headers(db: Session, profile: UserProfile) -> dict[str, str]:
    jti = rotate_token_id(db, profile)
    token = create_access_token(data={"sub": profile.uid}, jti=jti)
    return {"Authorization": f"Bearer {token}"}


def make_event(db: Session, organizer: UserProfile, **overrides):
    fields = {
        "title": "Taller de Python",
        "description": "Introducción práctica",
        "date": "2025-03-15T10:00",
        "location": "Aula 3",
        "organizer_id": organizer.uid,
        "capacity": 10,
        "participants": [],
        "participant_count": 0,
    }
    fields.update(overrides)
    return store.create_event(db, **fields)


@pytest.fixture
def organizer(db_session: Session) -> UserProfile:
    return make_profile(db_session, "organizer@uni.edu", Role.ORGANIZER)


@pytest.fixture
def participant(db_session: Session) -> UserProfile:
    return make_profile(db_session, "ana@uni.edu", Role.PARTICIPANT)


@pytest.fixture
def other_participant(db_session: Session) -> UserProfile:
    return make_profile(db_session, "luis@uni.edu", Role.PARTICIPANT)


@pytest.fixture
def organizer_headers(db_session: Session, organizer: UserProfile) -> dict[str, str]:
    return auth_headers(db_session, organizer)


@pytest.fixture
def participant_headers(db_session: Session, participant: UserProfile) -> dict[str, str]:
    return auth_headers(db_session, participant)


@pytest.fixture
def event_factory(db_session: Session, organizer: UserProfile):
    def factory(**overrides):
        return make_event(db_session, overrides.pop("organizer", organizer), **overrides)

    return factory


@pytest.fixture
def headers_for(db_session: Session):
    def factory(profile: UserProfile) -> dict[str, str]:
        return auth_headers(db_session, profile)

    return factory
