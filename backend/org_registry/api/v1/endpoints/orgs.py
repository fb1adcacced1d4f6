from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from org_registry.db.session import get_db
from org_registry.models.organization import Organization
from org_registry.schemas.organization import OrgCreate, OrgOut, OrgUpdate
from org_registry.services.org_slugs import SlugGuardedOrgStore
from org_registry.services.org_store import (
    OrgIdTakenError,
    OrgNotFoundError,
    OrgStore,
    SlugTakenError,
)
from org_registry.services.organizations import (
    create_organization,
    deactivate_organization,
    update_organization_settings,
)

router = APIRouter()


def get_org_store(db: Session = Depends(get_db)) -> SlugGuardedOrgStore:
    return SlugGuardedOrgStore(OrgStore(db))


def _get_org_or_404(orgs: SlugGuardedOrgStore, slug: str) -> Organization:
    org = orgs.get_by_slug(slug)
    if not org:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Organization not found",
        )
    return org


def _slug_conflict(exc: SlugTakenError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail=f"Slug already in use: {exc.slug}",
    )


@router.post("", response_model=OrgOut, status_code=status.HTTP_201_CREATED)
def create_org(
    payload: OrgCreate,
    orgs: SlugGuardedOrgStore = Depends(get_org_store),
) -> OrgOut:
    try:
        org = create_organization(orgs, payload)
    except SlugTakenError as exc:
        raise _slug_conflict(exc)
    except OrgIdTakenError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Organization id already in use: {exc.org_id}",
        )
    return OrgOut.model_validate(org)


@router.get("", response_model=list[OrgOut])
def list_orgs(
    orgs: SlugGuardedOrgStore = Depends(get_org_store),
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
) -> list[OrgOut]:
    return [OrgOut.model_validate(org) for org in orgs.list_active(limit=limit, offset=offset)]


@router.get("/{slug}", response_model=OrgOut)
def get_org(slug: str, orgs: SlugGuardedOrgStore = Depends(get_org_store)) -> OrgOut:
    return OrgOut.model_validate(_get_org_or_404(orgs, slug))


@router.patch("/{slug}", response_model=OrgOut)
def update_org(
    slug: str,
    payload: OrgUpdate,
    orgs: SlugGuardedOrgStore = Depends(get_org_store),
) -> OrgOut:
    org = _get_org_or_404(orgs, slug)
    try:
        org = update_organization_settings(orgs, org, payload)
    except SlugTakenError as exc:
        raise _slug_conflict(exc)
    except OrgNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Organization not found",
        )
    return OrgOut.model_validate(org)


@router.delete("/{slug}", status_code=status.HTTP_204_NO_CONTENT)
def deactivate_org(slug: str, orgs: SlugGuardedOrgStore = Depends(get_org_store)) -> Response:
    org = _get_org_or_404(orgs, slug)
    deactivate_organization(orgs, org)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
