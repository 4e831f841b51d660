import re
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, Dict, Optional, Union
from datetime import datetime
from config.badges_config import ReportStatus
from config.settings import settings


def local_contact_number(raw: Optional[str], country_code: Optional[str] = None) -> str:
    """
    Reduce a phone number to its local part: digits only, without the trunk
    `0` of an 11-digit number or a leading country code.
    """
    digits = re.sub(r"\D", "", raw or "")
    cc_digits = (country_code or settings.CONTACT_COUNTRY_CODE).lstrip("+")
    if digits.startswith("0") and len(digits) == 11:
        return digits[1:]
    if digits.startswith(cc_digits) and len(digits) == len(cc_digits) + 10:
        return digits[len(cc_digits):]
    return digits


class ReportOwner(BaseModel):
    id: str = Field(..., alias="_id")

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        return str(v) if v is not None else v


class ReportOwnership(BaseModel):
    """Only what the resolved tally reads: owner and status."""
    user: Optional[Union[ReportOwner, str]] = None
    status: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("user", mode="before")
    @classmethod
    def coerce_user(cls, v):
        """
        Owner arrives either as a bare identifier or as an embedded user object.
        """
        if v is None or isinstance(v, (dict, ReportOwner)):
            return v
        return str(v)

    @property
    def owner_id(self) -> Optional[str]:
        if isinstance(self.user, ReportOwner):
            return self.user.id
        return self.user

    @property
    def is_resolved(self) -> bool:
        return self.status == ReportStatus.resolved.value


class Report(ReportOwnership):
    """A report as returned by the upstream backend (read-only here)."""
    id: str = Field(..., alias="_id")
    status: str = ReportStatus.pending.value      # backend may add statuses
    name: Optional[str] = None
    contact: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    landmark: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    photo_url: Optional[str] = Field(None, alias="photoUrl")
    date: Optional[datetime] = None
    created_at: Optional[datetime] = Field(None, alias="createdAt")

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        return str(v) if v is not None else v


class ReportCreate(BaseModel):
    first_name: str = ""
    middle_name: str = ""
    last_name: str = ""
    contact_number: str = Field("", description="Local number, with or without leading 0")
    description: str = ""
    landmark: str = ""
    location: str = Field("", description="Geocoded address shown on the dashboard")
    user_location: str = Field("", description="Registered area used for filtering")
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    @field_validator("contact_number")
    @classmethod
    def check_contact_number(cls, v: str) -> str:
        local = local_contact_number(v)
        if local and len(local) != 10:
            raise ValueError("Contact number must have 10 digits after the country code")
        return v


class ProfilePrefill(BaseModel):
    first_name: str = ""
    middle_name: str = ""
    last_name: str = ""
    location: str = ""
    contact_number: str = ""
    display_contact_number: str = ""


class ReportSubmitted(BaseModel):
    message: str
    report: Optional[Dict[str, Any]] = None
