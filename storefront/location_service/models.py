"""
Location Service - Data Models

Delivery addresses, device position fixes, reverse-geocoding results and
address validation outcomes.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Optional
from datetime import datetime, timezone
from enum import Enum


class CamelModel(BaseModel):
    """Base for models exchanged with the storefront API (camelCase on the wire)"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LocationErrorCode(str, Enum):
    """Why a device position request failed"""
    PERMISSION_DENIED = "permission_denied"
    POSITION_UNAVAILABLE = "position_unavailable"
    TIMEOUT = "timeout"
    UNSUPPORTED = "unsupported"
    UNKNOWN = "unknown"


class ValidationState(str, Enum):
    """Delivery eligibility of the address currently held"""
    UNKNOWN = "unknown"
    VALID = "valid"
    INVALID = "invalid"


# ==================== Core Models ====================

class Address(CamelModel):
    """Delivery address"""
    street: str = ""
    city: str = ""
    state: str = ""
    pincode: str = ""
    landmark: Optional[str] = None
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)

    @field_validator('pincode')
    @classmethod
    def validate_pincode(cls, v: str) -> str:
        # Partial input is held while the customer types; completeness is
        # checked before validation and checkout
        if v and (len(v) > 6 or not v.isdigit()):
            raise ValueError('pincode must contain at most 6 digits')
        return v

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    @property
    def full_address(self) -> str:
        return f"{self.street}, {self.city}, {self.state} - {self.pincode}"

    def to_order_payload(self) -> dict:
        """Address snapshot sent with a new order"""
        payload = self.model_dump(by_alias=True, exclude_none=True)
        payload["fullAddress"] = self.full_address
        return payload


class PositionOptions(BaseModel):
    """Single-shot device position request options"""
    enable_high_accuracy: bool = True
    timeout: float = Field(15.0, gt=0)  # seconds
    maximum_age: float = Field(60.0, ge=0)  # seconds


class GeoLocation(BaseModel):
    """Device position fix"""
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    accuracy: Optional[float] = None  # meters
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class LocationResult(BaseModel):
    """Outcome of a device position request"""
    success: bool
    location: Optional[GeoLocation] = None
    error_code: Optional[LocationErrorCode] = None
    message: str = ""


class GeocodedAddress(BaseModel):
    """Best-effort postal address for a coordinate pair"""
    latitude: float
    longitude: float
    display_address: str = ""
    city: str = ""
    state: str = ""
    pincode: str = ""
    degraded: bool = False  # geocoder unreachable, coordinates only

    @property
    def street(self) -> str:
        """First comma-separated part of the display string"""
        if not self.display_address:
            return ""
        return self.display_address.split(',')[0].strip()


class ValidationResult(CamelModel):
    """Delivery eligibility verdict"""
    valid: bool
    distance_km: float = Field(..., ge=0)

    @property
    def display_distance(self) -> str:
        return f"{self.distance_km:.2f}"


class PincodeCheckResponse(CamelModel):
    """GET /address/check/{pincode} response"""
    pincode: str
    valid: bool
    distance_km: Optional[float] = None
    message: Optional[str] = None
