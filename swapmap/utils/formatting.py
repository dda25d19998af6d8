"""Formatting helpers."""

from __future__ import annotations

from typing import Mapping

LOCATION_UNAVAILABLE = "Location information not available"

_LOCALITY_KEYS = ("city", "town", "village")
_REGION_KEYS = ("state", "state_district")


def truncate_text(text: str, max_length: int) -> str:
    """Truncate ``text`` to ``max_length`` characters, adding an ellipsis."""

    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


def format_distance(distance_km: float) -> str:
    """Return a short human readable distance."""

    if distance_km < 1:
        return f"{int(round(distance_km * 1000))} m"
    return f"{distance_km:.1f} km"


def format_location_label(address: Mapping[str, object] | None) -> str:
    """Build a "locality, region, country" label from a reverse geocoded address."""

    if not address:
        return LOCATION_UNAVAILABLE

    parts: list[str] = []
    for keys in (_LOCALITY_KEYS, _REGION_KEYS, ("country",)):
        value = next((address.get(key) for key in keys if address.get(key)), None)
        if value:
            parts.append(str(value))

    return ", ".join(parts) or LOCATION_UNAVAILABLE
