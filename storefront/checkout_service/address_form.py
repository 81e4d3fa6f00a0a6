"""
AddressForm

Holds the delivery address being edited together with its validation
state. Each change to pincode or coordinates bumps ``version`` and resets
the state to unknown; a validation result is applied only if it was
started against the current version.
"""

import logging
from typing import Any, List, Optional

from ..location_service.geo_utils import is_complete_pincode, normalize_pincode
from ..location_service.models import Address, ValidationResult, ValidationState

logger = logging.getLogger(__name__)

LOCATION_FIELDS = ("pincode", "latitude", "longitude")
REQUIRED_FIELDS = ("street", "city", "pincode")


class AddressForm:
    """Versioned address input"""

    def __init__(self, address: Optional[Address] = None):
        self._address = address or Address()
        self.version = 0
        self.state = ValidationState.UNKNOWN
        self.distance_km: Optional[float] = None

    @property
    def address(self) -> Address:
        return self._address

    @property
    def is_checkoutable(self) -> bool:
        return self.state == ValidationState.VALID

    def update(self, **fields: Any) -> Address:
        """
        Apply field edits

        Pincode input is normalized to at most six digits.
        """
        if "pincode" in fields:
            fields["pincode"] = normalize_pincode(fields["pincode"] or "")

        current = self._address
        updated = Address.model_validate({**current.model_dump(), **fields})

        if any(getattr(updated, name) != getattr(current, name) for name in LOCATION_FIELDS):
            self.version += 1
            if self.state != ValidationState.UNKNOWN:
                logger.debug(f"Location input changed, validation reset (version {self.version})")
            self.state = ValidationState.UNKNOWN
            self.distance_km = None

        self._address = updated
        return updated

    def apply_result(self, version: int, result: ValidationResult) -> bool:
        """Record a validation verdict unless the input changed meanwhile"""
        if version != self.version:
            logger.info(f"Discarding stale validation (started at v{version}, now v{self.version})")
            return False
        self.state = ValidationState.VALID if result.valid else ValidationState.INVALID
        self.distance_km = result.distance_km
        return True

    def missing_required_fields(self) -> List[str]:
        missing = [name for name in REQUIRED_FIELDS if not getattr(self._address, name)]
        if "pincode" not in missing and not is_complete_pincode(self._address.pincode):
            missing.append("pincode")
        return missing
