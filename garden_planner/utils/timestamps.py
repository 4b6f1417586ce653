"""Timestamp helpers shared by models and services."""
from datetime import datetime, timezone


def utcnow() -> datetime:
    """Timezone-aware current UTC time (used for created_at / updated_at)."""
    return datetime.now(timezone.utc)
