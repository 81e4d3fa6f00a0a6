#!/usr/bin/env python3
"""Delivery service-area configuration

A single circle around the shop. Defaults point at pincode 208007 with a
5 km radius; deployments override them through the environment.
"""
import os
from dataclasses import dataclass


def _float(val: str, default: float) -> float:
    try:
        return float(val) if val else default
    except ValueError:
        return default


@dataclass(frozen=True)
class GeofenceConfig:
    """Circular delivery geofence"""
    base_latitude: float = 26.4124
    base_longitude: float = 80.3153
    base_pincode: str = "208007"
    max_radius_km: float = 5.0

    @classmethod
    def from_env(cls) -> 'GeofenceConfig':
        return cls(
            base_latitude=_float(os.getenv("GEOFENCE_BASE_LAT", ""), 26.4124),
            base_longitude=_float(os.getenv("GEOFENCE_BASE_LON", ""), 80.3153),
            base_pincode=os.getenv("GEOFENCE_BASE_PINCODE", "208007"),
            max_radius_km=_float(os.getenv("GEOFENCE_MAX_RADIUS_KM", ""), 5.0),
        )
