from __future__ import annotations

from org_registry.core.audit import AuditEvent, record_audit_event
from org_registry.core.slugify import slugify
from org_registry.models.organization import Organization
from org_registry.schemas.organization import OrgCreate, OrgUpdate
from org_registry.services.org_slugs import SlugGuardedOrgStore


def create_organization(orgs: SlugGuardedOrgStore, payload: OrgCreate) -> Organization:
    """
    Create an organization whose slug is derived from its name, unless the
    caller supplied one. ``trial_end`` is forwarded only if it was sent.
    """
    data = payload.model_dump(exclude_unset=True)
    if data.get("id") is None:
        data.pop("id", None)
    data["slug"] = slugify(data.get("slug") or data["name"])

    org = orgs.create(data)
    record_audit_event(AuditEvent(action="org.created", org_id=org.id, slug=org.slug))
    return org


def update_organization_settings(
    orgs: SlugGuardedOrgStore, org: Organization, payload: OrgUpdate
) -> Organization:
    data = payload.model_dump(exclude_unset=True)
    updates: dict = {}

    name = data.get("name")
    if name and name != org.name:
        updates["name"] = name
        updates["slug"] = slugify(name)

    if data.get("slug") is not None:
        updates["slug"] = slugify(data["slug"])

    if "image_url" in data:
        updates["image_url"] = data["image_url"]

    if not updates:
        return org

    previous_slug = org.slug
    updated = orgs.update(org.id, updates)
    record_audit_event(
        AuditEvent(
            action="org.updated",
            org_id=updated.id,
            slug=updated.slug,
            previous_slug=previous_slug if previous_slug != updated.slug else None,
        )
    )
    return updated


def deactivate_organization(orgs: SlugGuardedOrgStore, org: Organization) -> Organization:
    deactivated = orgs.deactivate(org.id)
    record_audit_event(
        AuditEvent(action="org.deactivated", org_id=deactivated.id, slug=deactivated.slug)
    )
    return deactivated
