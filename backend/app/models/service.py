"""
Service Model
Services a provider offers, with pricing and duration
"""

from typing import Optional
from pydantic import BaseModel, Field, ConfigDict
from datetime import datetime

from app.models.common import BaseDocument, generate_id
from app.models.provider import ProviderResponse


class Service(BaseDocument):
    """Service document model"""
    service_id: str = Field(default_factory=lambda: generate_id("svc"))
    provider_id: str  # Owning provider

    image_url: str
    service_name: str
    type_of_service: str
    description: str
    duration: float = Field(gt=0)  # Hours
    price: float = Field(ge=0)


class ServiceCreate(BaseModel):
    """Schema for creating a service"""
    user_id: str = Field(min_length=1)
    image_url: str
    service_name: str = Field(min_length=2, max_length=100)
    type_of_service: str = Field(min_length=2, max_length=50)
    description: str = Field(min_length=1, max_length=2000)
    duration: float = Field(gt=0)
    price: float = Field(ge=0)
    path: str = "/"

    model_config = ConfigDict(str_strip_whitespace=True)


class ServiceUpdate(BaseModel):
    """Schema for updating a service"""
    image_url: Optional[str] = None  # Stored image is kept when omitted
    service_name: str = Field(min_length=2, max_length=100)
    type_of_service: str = Field(min_length=2, max_length=50)
    description: str = Field(min_length=1, max_length=2000)
    duration: float = Field(gt=0)
    price: float = Field(ge=0)
    path: str = "/"

    model_config = ConfigDict(str_strip_whitespace=True)


class ServiceResponse(BaseModel):
    """Public service response"""
    service_id: str
    provider_id: str
    image_url: str
    service_name: str
    type_of_service: str
    description: str
    duration: float
    price: float
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ServiceWithProvider(ServiceResponse):
    """Service with its provider reference resolved"""
    provider: Optional[ProviderResponse] = None
