"""
ServiceHub Data Models
Pydantic models for MongoDB documents
"""

from app.models.provider import (
    Provider, ProviderResponse, ProviderProfileUpdate, ProfileFormValues,
    Weekday, WEEKDAY_NAMES
)
from app.models.service import (
    Service, ServiceCreate, ServiceUpdate, ServiceResponse, ServiceWithProvider
)
from app.models.common import BaseDocument, generate_id, utc_now

__all__ = [
    # Provider
    "Provider", "ProviderResponse", "ProviderProfileUpdate", "ProfileFormValues",
    "Weekday", "WEEKDAY_NAMES",
    # Service
    "Service", "ServiceCreate", "ServiceUpdate", "ServiceResponse", "ServiceWithProvider",
    # Common
    "BaseDocument", "generate_id", "utc_now",
]
