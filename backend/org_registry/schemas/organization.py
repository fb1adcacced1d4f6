from datetime import datetime
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, StringConstraints

OrgName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=3, max_length=255)]
OrgSlug = Annotated[str, StringConstraints(strip_whitespace=True, max_length=255)]


class OrgCreate(BaseModel):
    name: OrgName
    slug: Optional[OrgSlug] = None
    image_url: Optional[str] = None
    id: Optional[str] = None
    # left unset -> trial defaulted; sent as null -> no trial
    trial_end: Optional[datetime] = None


class OrgUpdate(BaseModel):
    name: Optional[OrgName] = None
    slug: Optional[OrgSlug] = None
    image_url: Optional[str] = None


class OrgOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    slug: str
    image_url: Optional[str] = None
    trial_end: Optional[datetime] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime
