from collections.abc import Generator
from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from backend.database import Base, get_db
from backend.main import app
from backend.schemas.biomarker import BiomarkerObservation


@pytest.fixture()
def db_session() -> Generator:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def client(db_session) -> Generator[TestClient, None, None]:
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    # Not entered as a context manager: the lifespan migration check needs a real database.
    test_client = TestClient(app)
    yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def auth_headers() -> dict[str, str]:
    return {"X-User-Id": "patient-1"}


@pytest.fixture()
def make_history():
    """Build a most-recent-first history from values given oldest first."""

    def _make(biomarker_type: str, values: list[float], unit: str = "mg/dL") -> list[BiomarkerObservation]:
        start = datetime(2025, 1, 1)
        observations = [
            BiomarkerObservation(
                biomarker_type=biomarker_type,
                value=value,
                unit=unit,
                recorded_at=start + timedelta(days=30 * i),
            )
            for i, value in enumerate(values)
        ]
        return list(reversed(observations))

    return _make
