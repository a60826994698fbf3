import os
import sys
from datetime import datetime
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Pas de MySQL ni de create_all au démarrage pendant les tests
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ["INEVENT_SKIP_CREATE_ALL"] = "1"
os.environ.pop("SMTP_HOST", None)

from inevent.api.main import app
from inevent.database import Base, get_db
from inevent.models import models  # noqa: F401  (enregistre toutes les tables)
from inevent.models.event import Event
from inevent.models.registration import Registration


test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=test_engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def client(db):
    def _override():
        yield db

    app.dependency_overrides[get_db] = _override
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def event(db):
    ev = Event(
        name="Summit",
        slug="summit-2025",
        start_date=datetime(2025, 6, 12, 9, 0),
        start_time="09h00",
        location="Dakar",
        user_id=100,
    )
    db.add(ev)
    db.commit()
    db.refresh(ev)
    return ev


def _registration(db, event, user_id, first_name, last_name, type_="PARTICIPANT"):
    reg = Registration(
        event_id=event.id,
        user_id=user_id,
        first_name=first_name,
        last_name=last_name,
        email=f"{first_name.lower()}.{last_name.lower()}@example.com",
        company="ACME",
        type=type_,
    )
    db.add(reg)
    db.commit()
    db.refresh(reg)
    return reg


@pytest.fixture
def participants(db, event):
    """A (user 1), B (user 2), C (user 3, speaker)."""
    return (
        _registration(db, event, 1, "Alice", "Martin"),
        _registration(db, event, 2, "Bruno", "Diallo"),
        _registration(db, event, 3, "Chloe", "Ndiaye", type_="SPEAKER"),
    )


def headers(user_id=None, role="USER"):
    h = {}
    if user_id is not None:
        h["X-User-Id"] = str(user_id)
    if role:
        h["X-User-Role"] = role
    return h


ORGANIZER = headers(user_id=100, role="ORGANIZER")


@pytest.fixture(scope="session")
def base_url():
    url = os.getenv("BASE_URL")
    if not url:
        pytest.skip("BASE_URL non défini : tests contre un serveur déployé ignorés")
    return url.rstrip("/")
