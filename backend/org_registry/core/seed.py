from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import OperationalError, ProgrammingError
from sqlalchemy.orm import Session

from org_registry.core.config import settings
from org_registry.models.organization import Organization
from org_registry.schemas.organization import OrgCreate
from org_registry.services.org_slugs import SlugGuardedOrgStore
from org_registry.services.org_store import OrgStore
from org_registry.services.organizations import create_organization

logger = logging.getLogger(__name__)


def ensure_seed_data(db: Session) -> None:
    """
    Idempotent dev seed: one organization named SEED_ORG_NAME.
    """
    if not settings.SEED_ENABLED:
        return

    # Schema may not exist yet (fresh SQLite, migrations not run).
    try:
        existing = db.execute(
            select(Organization.id).where(Organization.name == settings.SEED_ORG_NAME).limit(1)
        ).first()
    except (OperationalError, ProgrammingError):
        db.rollback()
        logger.warning("seed skipped: orgs table not available")
        return

    if existing:
        return

    org = create_organization(
        SlugGuardedOrgStore(OrgStore(db)),
        OrgCreate(name=settings.SEED_ORG_NAME),
    )
    logger.info("seeded org slug=%s", org.slug)
