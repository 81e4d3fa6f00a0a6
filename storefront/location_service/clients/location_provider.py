"""
Device location providers

Implementations of LocationProviderProtocol. Browsers and mobile shells
supply their own; FixedLocationProvider serves kiosks with a known position.
"""

import logging
from typing import Optional

from ..models import GeoLocation, LocationErrorCode, PositionOptions
from ..protocols import PositionError

logger = logging.getLogger(__name__)


class FixedLocationProvider:
    """Reports a configured position, or a permission denial when unset"""

    def __init__(
        self,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
        accuracy: Optional[float] = None
    ):
        self.latitude = latitude
        self.longitude = longitude
        self.accuracy = accuracy

    async def get_current_position(self, options: PositionOptions) -> GeoLocation:
        if self.latitude is None or self.longitude is None:
            raise PositionError(LocationErrorCode.PERMISSION_DENIED, "No position configured")
        return GeoLocation(
            latitude=self.latitude,
            longitude=self.longitude,
            accuracy=self.accuracy
        )
