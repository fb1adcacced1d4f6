from org_registry.db.base import Base
from org_registry.models.organization import Organization

__all__ = [
    "Base",
    "Organization",
]
