"""
Provider Model
Service provider accounts with their public profile
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict, field_validator

from app.models.common import BaseDocument, generate_id


# 24h "17:30" or 12h "5:30 PM"
TIME_PATTERN = r"^(?:(?:[01]?\d|2[0-3]):[0-5]\d|(?:0?[1-9]|1[0-2]):[0-5]\d\s?[AaPp][Mm])$"
PHONE_PATTERN = r"^\+?[0-9 ()-]{7,20}$"


class Weekday(str, Enum):
    """Days a provider can operate on"""
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"


WEEKDAY_NAMES = [day.value for day in Weekday]


class Provider(BaseDocument):
    """Provider document model"""
    provider_id: str = Field(default_factory=lambda: generate_id("prv"))
    user_id: str  # External account id

    # Profile
    image_url: Optional[str] = None
    company_name: str = ""
    type_of_provider: str = ""
    phone_number: str = ""
    experience_years: int = Field(default=0, ge=0)
    hourly_rate: int = Field(default=0, ge=0)
    bio: str = ""

    # Hours
    operating_days: list[Weekday] = Field(default_factory=list)
    start_time: str = ""
    end_time: str = ""

    # Service ids, in the order they were added
    services_offered: list[str] = Field(default_factory=list)


class ProfileFormValues(BaseModel):
    """Editable profile fields, validated before anything is sent"""
    company_name: str = Field(min_length=2, max_length=100)
    type_of_provider: str = Field(min_length=2, max_length=50)
    phone_number: str = Field(pattern=PHONE_PATTERN)
    experience_years: int = Field(ge=0, le=100)
    hourly_rate: int = Field(ge=0)
    bio: str = Field(min_length=1, max_length=1000)
    operating_days: list[Weekday] = Field(default_factory=list)
    start_time: str = Field(pattern=TIME_PATTERN)
    end_time: str = Field(pattern=TIME_PATTERN)

    model_config = ConfigDict(str_strip_whitespace=True, use_enum_values=True)

    @field_validator("operating_days")
    @classmethod
    def no_repeated_days(cls, days: list) -> list:
        if len(set(days)) != len(days):
            raise ValueError("Operating days must not repeat")
        return days


class ProfileUpdateRequest(ProfileFormValues):
    """Profile update body; the provider comes from the URL"""
    image_url: Optional[str] = None  # Only overwrites the stored image when set
    path: str = "/"


class ProviderProfileUpdate(ProfileUpdateRequest):
    """Payload for the profile update action"""
    user_id: str = Field(min_length=1)


class ProviderResponse(BaseModel):
    """Public provider response"""
    provider_id: str
    user_id: str
    image_url: Optional[str] = None
    company_name: str
    type_of_provider: str
    phone_number: str
    experience_years: int
    hourly_rate: int
    bio: str
    operating_days: list[str]
    start_time: str
    end_time: str
    services_offered: list[str]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
