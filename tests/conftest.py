# tests/conftest.py - Shared fixtures: in-memory database, seeded lookups and an API client
import os

# Must be set before household.core.config is imported
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["ENV"] = "test"
os.environ["HOUSEHOLD_PERSONS"] = "grant,shannon"
os.environ["SEED_LOOKUPS_ON_STARTUP"] = "false"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import select  # noqa: E402

from household.core.db import db_manager, get_engine  # noqa: E402
from household.main import app  # noqa: E402
from household.models import Base, FeeType, Frequency, ActivityType  # noqa: E402
from household.services.lookup_seeder import seed_lookups  # noqa: E402


@pytest.fixture
def engine():
    engine = get_engine()
    Base.metadata.create_all(bind=engine)
    with db_manager.transaction() as session:
        seed_lookups(session)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db(engine):
    session = db_manager.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(engine):
    return TestClient(app)


@pytest.fixture
def lookup_ids(db):
    """Name -> id for the seeded system lookups"""
    def ids(model):
        return {row.name: str(row.id) for row in db.execute(select(model)).scalars()}
    return {
        "fee_types": ids(FeeType),
        "frequencies": ids(Frequency),
        "activity_types": ids(ActivityType),
    }


@pytest.fixture
def child(client):
    resp = client.post("/api/family-members/", json={
        "name": "Olivia",
        "member_type": "child",
        "relationship": "child",
        "date_of_birth": "2015-03-10",
    })
    assert resp.status_code == 201
    return resp.json()


@pytest.fixture
def school(client):
    resp = client.post("/api/schools/", json={
        "name": "Brisbane State School",
        "school_type": "primary",
        "sector": "public",
        "suburb": "Paddington",
    })
    assert resp.status_code == 201
    return resp.json()


@pytest.fixture
def enrolment(client, child, school):
    resp = client.post("/api/enrolments/", json={
        "family_member_id": child["id"],
        "school_id": school["id"],
        "year_level": "Year 4",
        "enrolment_date": "2021-01-25",
    })
    assert resp.status_code == 201
    return resp.json()
