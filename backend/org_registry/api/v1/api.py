from fastapi import APIRouter

from org_registry.api.v1.endpoints import orgs

api_router = APIRouter()

api_router.include_router(orgs.router, prefix="/orgs", tags=["orgs"])
