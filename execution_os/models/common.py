"""Shared pieces for the entity records."""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict


def new_id() -> str:
    """Return a fresh opaque identifier."""
    return uuid.uuid4().hex


def utc_timestamp(moment: Optional[datetime] = None) -> str:
    """Format *moment* (default: now) as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    if moment is None:
        moment = datetime.now(timezone.utc)
    elif moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    else:
        moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO timestamp written by :func:`utc_timestamp` (or a browser)."""
    if not value:
        return None
    raw = value.strip()
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class EntityModel(BaseModel):
    """Base for persisted records.

    Attributes are snake_case in Python; the wire names are the PascalCase
    aliases, which must survive a save/load cycle unchanged.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_record(self) -> Dict[str, Any]:
        """Serialize to the JSON-ready dict stored in a collection."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
