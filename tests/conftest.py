import os
import sys
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool


# Ensure `import backend.swipehire...` works regardless of where pytest is run from.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# Must be set before backend.swipehire.config is imported anywhere.
os.environ["DISABLE_DOTENV"] = "1"
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ["SEED_DEMO_DATA"] = "0"
os.environ["SWIPE_THRESHOLD"] = "100"


@pytest.fixture()
def engine():
    eng = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield eng
    eng.dispose()


@pytest.fixture()
def app(engine, monkeypatch: pytest.MonkeyPatch) -> FastAPI:
    """
    Create a FastAPI app wired to a private in-memory SQLite DB.
    """
    from backend.swipehire import database as db

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    # Patch the shared database module so router dependencies use the test DB.
    monkeypatch.setattr(db, "engine", engine)
    monkeypatch.setattr(db, "SessionLocal", TestingSessionLocal)

    db.init_db(bind=engine)

    from backend.swipehire.main import create_app

    return create_app(seed_demo_data_on_startup=False)


@pytest.fixture()
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


@pytest.fixture()
def db_session(app: FastAPI):
    """
    Direct SQLAlchemy session bound to the same in-memory DB used by the test app.
    """
    from backend.swipehire.database import SessionLocal

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def seeded(db_session):
    from backend.swipehire.services.demo_data import seed_demo_data

    assert seed_demo_data(db_session) is True
    return db_session

