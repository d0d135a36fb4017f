"""
Common model utilities and base classes
"""

from datetime import datetime, timezone
from pydantic import BaseModel, Field, ConfigDict
import uuid


def generate_id(prefix: str) -> str:
    """Generate a prefixed unique ID"""
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


def utc_now() -> datetime:
    """Get current UTC timestamp"""
    return datetime.now(timezone.utc)


class BaseDocument(BaseModel):
    """Base model for MongoDB documents"""
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=True,
        extra="ignore"
    )

    def to_document(self) -> dict:
        """Serialize for insertion into MongoDB"""
        return self.model_dump()
