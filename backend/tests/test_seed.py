from sqlalchemy import func, select

from org_registry.core import seed
from org_registry.core.config import settings
from org_registry.models.organization import Organization


def _count(db) -> int:
    return db.execute(select(func.count()).select_from(Organization)).scalar_one()


def test_seed_disabled_does_nothing(db):
    seed.ensure_seed_data(db)
    assert _count(db) == 0


def test_seed_creates_org_once(db, monkeypatch):
    monkeypatch.setattr(settings, "SEED_ENABLED", True)
    monkeypatch.setattr(settings, "SEED_ORG_NAME", "Acme Inc")

    seed.ensure_seed_data(db)
    seed.ensure_seed_data(db)

    orgs = db.execute(select(Organization)).scalars().all()
    assert [org.slug for org in orgs] == ["acme-inc"]
    assert orgs[0].trial_end is not None
