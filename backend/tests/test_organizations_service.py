import logging
import re

from org_registry.schemas.organization import OrgCreate, OrgUpdate
from org_registry.services.organizations import (
    create_organization,
    deactivate_organization,
    update_organization_settings,
)


def test_create_slugifies_name(orgs):
    org = create_organization(orgs, OrgCreate(name="  Crème Brûlée & Co. "))
    assert org.name == "Crème Brûlée & Co."
    assert org.slug == "creme-brulee--co."


def test_create_normalizes_supplied_slug(orgs):
    org = create_organization(orgs, OrgCreate(name="Acme Inc", slug="ACME HQ"))
    assert org.slug == "acme-hq"


def test_create_with_client_generated_id(orgs):
    org = create_organization(orgs, OrgCreate(id="org-123", name="Acme"))
    assert org.id == "org-123"


def test_create_sets_trial_only_when_not_sent(orgs):
    defaulted = create_organization(orgs, OrgCreate(name="Foo"))
    no_trial = create_organization(orgs, OrgCreate(name="Bar", trial_end=None))
    assert defaulted.trial_end is not None
    assert no_trial.trial_end is None


def test_create_records_audit_event(orgs, caplog):
    with caplog.at_level(logging.INFO, logger="org_registry.core.audit"):
        org = create_organization(orgs, OrgCreate(name="Acme"))
    assert f"action=org.created org_id={org.id} slug=acme" in caplog.text


def test_rename_changes_slug(orgs):
    org = create_organization(orgs, OrgCreate(name="Acme"))
    updated = update_organization_settings(orgs, org, OrgUpdate(name="Acme Labs"))
    assert updated.name == "Acme Labs"
    assert updated.slug == "acme-labs"


def test_rename_to_taken_name_is_disambiguated(orgs):
    create_organization(orgs, OrgCreate(name="Beta"))
    org = create_organization(orgs, OrgCreate(name="Acme"))
    updated = update_organization_settings(orgs, org, OrgUpdate(name="Beta"))
    assert re.fullmatch(r"beta-[a-z0-9]+", updated.slug)


def test_same_name_is_a_no_op(orgs, monkeypatch):
    org = create_organization(orgs, OrgCreate(name="Acme"))

    def _fail(*args, **kwargs):
        raise AssertionError("no write expected")

    monkeypatch.setattr(orgs, "update", _fail)
    assert update_organization_settings(orgs, org, OrgUpdate(name="Acme")) is org


def test_logo_update_keeps_slug(orgs):
    org = create_organization(orgs, OrgCreate(name="Acme"))
    updated = update_organization_settings(
        orgs, org, OrgUpdate(image_url="https://cdn.example.com/acme.png")
    )
    assert updated.slug == "acme"
    assert updated.image_url == "https://cdn.example.com/acme.png"


def test_explicit_slug_wins_over_name(orgs):
    org = create_organization(orgs, OrgCreate(name="Acme"))
    updated = update_organization_settings(orgs, org, OrgUpdate(name="Acme Labs", slug="labs"))
    assert updated.slug == "labs"


def test_rename_audit_carries_previous_slug(orgs, caplog):
    org = create_organization(orgs, OrgCreate(name="Acme"))
    with caplog.at_level(logging.INFO, logger="org_registry.core.audit"):
        update_organization_settings(orgs, org, OrgUpdate(name="Acme Labs"))
    assert "action=org.updated" in caplog.text
    assert "slug=acme-labs previous_slug=acme" in caplog.text


def test_deactivate(orgs):
    org = create_organization(orgs, OrgCreate(name="Acme"))
    deactivate_organization(orgs, org)
    assert orgs.get_by_slug("acme") is None
    again = create_organization(orgs, OrgCreate(name="Acme"))
    assert again.slug != "acme"
