"""
Slug assignment and trial defaults for organization writes.

``SlugGuardedOrgStore`` wraps ``OrgStore`` so every create/update resolves the
slug (and, on create, the trial end) before the row is written. The probe and
the write share the store's session, so they run in one transaction; a
concurrent writer can still win the race, in which case the unique index on
``orgs.slug`` makes the write fail with ``SlugTakenError``.
"""
from __future__ import annotations

import logging
import secrets
import string
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from org_registry.core.config import settings
from org_registry.core.slugify import slugify
from org_registry.models.organization import Organization
from org_registry.services.org_store import OrgStore

logger = logging.getLogger(__name__)

# Static path segments under /organizations.
RESERVED_SLUGS = frozenset(
    {
        "new",
        "email-invite",
        "invite-link",
    }
)

_SUFFIX_ALPHABET = string.ascii_letters + string.digits


def generate_slug_suffix(length: Optional[int] = None) -> str:
    size = settings.SLUG_SUFFIX_LENGTH if length is None else length
    return "".join(secrets.choice(_SUFFIX_ALPHABET) for _ in range(size))


def resolve_slug(store: OrgStore, candidate: str, exclude_id: Optional[str] = None) -> str:
    """
    Return ``candidate`` when no other organization holds it and it is not
    reserved; otherwise append a random suffix once. The suffixed value is
    not probed again.
    """
    if store.find_by_slug(candidate, exclude_id=exclude_id) is not None:
        reason = "taken"
    elif candidate in RESERVED_SLUGS:
        reason = "reserved"
    else:
        return candidate

    resolved = f"{candidate}-{generate_slug_suffix()}".lower()
    logger.info("slug %r is %s, using %r", candidate, reason, resolved)
    return resolved


def default_trial_end(now: Optional[datetime] = None) -> datetime:
    now = now or datetime.now(timezone.utc)
    return now + timedelta(days=settings.TRIAL_PERIOD_DAYS)


def apply_default_trial_end(data: dict[str, Any], now: Optional[datetime] = None) -> dict[str, Any]:
    # An explicit None means "no trial" and is kept.
    if "trial_end" not in data:
        data["trial_end"] = default_trial_end(now)
    return data


class SlugGuardedOrgStore:
    """Organization writes with slug resolution and trial defaults applied."""

    def __init__(self, store: OrgStore) -> None:
        self.store = store

    def create(self, data: dict[str, Any]) -> Organization:
        payload = dict(data)
        candidate = payload.get("slug")
        if not isinstance(candidate, str):
            candidate = slugify(payload.get("name"))
        payload["slug"] = resolve_slug(self.store, candidate)
        apply_default_trial_end(payload)
        return self.store.insert(payload)

    def update(self, org_id: str, data: dict[str, Any]) -> Organization:
        payload = dict(data)
        if isinstance(payload.get("slug"), str):
            payload["slug"] = resolve_slug(self.store, payload["slug"], exclude_id=org_id)
        return self.store.update(org_id, payload)

    def deactivate(self, org_id: str) -> Organization:
        return self.store.deactivate(org_id)

    def get(self, org_id: str) -> Optional[Organization]:
        return self.store.get(org_id)

    def get_by_slug(self, slug: str) -> Optional[Organization]:
        return self.store.get_by_slug(slug)

    def list_active(self, limit: int = 50, offset: int = 0) -> list[Organization]:
        return self.store.list_active(limit=limit, offset=offset)
