import os
import sys

import pytest
from fastapi.testclient import TestClient

BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("ENV", "dev")
# seeding is exercised explicitly in test_seed.py
os.environ.setdefault("SEED_ENABLED", "false")

import org_registry.models  # noqa: E402,F401
from org_registry.db.base import Base  # noqa: E402
from org_registry.db.session import SessionLocal, engine  # noqa: E402
from org_registry.services.org_slugs import SlugGuardedOrgStore  # noqa: E402
from org_registry.services.org_store import OrgStore  # noqa: E402

from main import app  # noqa: E402


@pytest.fixture()
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def store(db):
    return OrgStore(db)


@pytest.fixture()
def orgs(store):
    return SlugGuardedOrgStore(store)


@pytest.fixture()
def client():
    Base.metadata.create_all(bind=engine)
    with TestClient(app) as test_client:
        yield test_client
    Base.metadata.drop_all(bind=engine)
