"""Persistence for organizations, backed by a SQLAlchemy session."""
from __future__ import annotations

import logging
from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from org_registry.db.base import utcnow
from org_registry.models.organization import Organization

logger = logging.getLogger(__name__)

# postgres reports the constraint name, sqlite the column
_SLUG_VIOLATION_MARKERS = ("ux_orgs_slug", "UNIQUE constraint failed: orgs.slug")
_ID_VIOLATION_MARKERS = ("orgs_pkey", "UNIQUE constraint failed: orgs.id")

WRITABLE_FIELDS = frozenset({"id", "name", "slug", "image_url", "trial_end"})


class OrgStoreError(Exception):
    """Base exception for organization persistence."""


class SlugTakenError(OrgStoreError):
    """Raised when the database rejects a write because the slug is already used."""

    def __init__(self, slug: str) -> None:
        super().__init__(f"Slug already in use: {slug!r}")
        self.slug = slug


class OrgIdTakenError(OrgStoreError):
    """Raised when an insert reuses the id of an existing organization."""

    def __init__(self, org_id: str) -> None:
        super().__init__(f"Organization id already in use: {org_id!r}")
        self.org_id = org_id


class OrgNotFoundError(OrgStoreError):
    """Raised when a write targets an organization id that does not exist."""

    def __init__(self, org_id: str) -> None:
        super().__init__(f"Organization {org_id} not found")
        self.org_id = org_id


def _violates(exc: IntegrityError, markers: tuple[str, ...]) -> bool:
    message = str(exc.orig)
    return any(marker in message for marker in markers)


class OrgStore:
    """
    Point reads and writes on ``orgs``. Writes commit on success and roll back
    the session before raising.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    # -------------------------- reads --------------------------
    def find_by_slug(self, slug: str, exclude_id: Optional[str] = None) -> Optional[Organization]:
        """Any organization holding ``slug``, deactivated ones included."""
        stmt = select(Organization).where(Organization.slug == slug)
        if exclude_id is not None:
            stmt = stmt.where(Organization.id != exclude_id)
        return self.db.execute(stmt.limit(1)).scalars().first()

    def get(self, org_id: str) -> Optional[Organization]:
        return self.db.get(Organization, org_id)

    def get_by_slug(self, slug: str) -> Optional[Organization]:
        stmt = select(Organization).where(
            Organization.slug == slug,
            Organization.deactivated_at.is_(None),
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def list_active(self, limit: int = 50, offset: int = 0) -> list[Organization]:
        stmt = (
            select(Organization)
            .where(Organization.deactivated_at.is_(None))
            .order_by(Organization.created_at.desc(), Organization.name)
            .offset(offset)
            .limit(limit)
        )
        return list(self.db.execute(stmt).scalars().all())

    # -------------------------- writes --------------------------
    def insert(self, data: dict[str, Any]) -> Organization:
        org = Organization(**_writable(data))
        self.db.add(org)
        self._commit(org)
        self.db.refresh(org)
        logger.debug("inserted org id=%s slug=%s", org.id, org.slug)
        return org

    def update(self, org_id: str, data: dict[str, Any]) -> Organization:
        org = self.get(org_id)
        if not org:
            raise OrgNotFoundError(org_id)
        values = _writable(data)
        values.pop("id", None)
        for key, value in values.items():
            setattr(org, key, value)
        self._commit(org)
        self.db.refresh(org)
        return org

    def deactivate(self, org_id: str) -> Organization:
        org = self.get(org_id)
        if not org:
            raise OrgNotFoundError(org_id)
        if org.deactivated_at is None:
            org.deactivated_at = utcnow()
            self._commit(org)
            self.db.refresh(org)
        return org

    def _commit(self, org: Organization) -> None:
        # read before rollback expires the instance
        org_id, slug = org.id, org.slug
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            if _violates(exc, _SLUG_VIOLATION_MARKERS):
                raise SlugTakenError(slug) from exc
            if _violates(exc, _ID_VIOLATION_MARKERS):
                raise OrgIdTakenError(org_id) from exc
            raise


def _writable(data: dict[str, Any]) -> dict[str, Any]:
    unknown = set(data) - WRITABLE_FIELDS
    if unknown:
        raise ValueError(f"Unknown organization fields: {', '.join(sorted(unknown))}")
    return dict(data)
