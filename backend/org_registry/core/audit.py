import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass
class AuditEvent:
    action: str
    org_id: str
    slug: str
    previous_slug: Optional[str] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


def record_audit_event(event: AuditEvent) -> None:
    """
    Organization lifecycle trail. Written to the log only; no audit table yet.
    """
    logger.info(
        "audit_event action=%s org_id=%s slug=%s previous_slug=%s at=%s",
        event.action,
        event.org_id,
        event.slug,
        event.previous_slug,
        event.created_at.isoformat(),
    )
