"""Location value object - geographic coordinate + bounding box."""

import math
from dataclasses import dataclass

from marketplace.domain.shared import InvalidArgumentError, ValueObject, validate_value_object

EARTH_RADIUS_KM = 6371.0
"""Mean Earth radius used by the haversine formula."""

MIN_LATITUDE, MAX_LATITUDE = -90.0, 90.0
MIN_LONGITUDE, MAX_LONGITUDE = -180.0, 180.0

# Запас на похибку float, щоб bbox гарантовано був superset кола
_BOX_MARGIN_DEG = 1e-9


def _coerce_coordinate(name: str, raw: object) -> float:
    validate_value_object(
        raw is not None and not isinstance(raw, bool),
        f"{name} must be a number",
        **{name: raw},
    )
    try:
        value = float(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError) as e:
        raise InvalidArgumentError(f"{name} must be a number", **{name: raw}) from e
    validate_value_object(math.isfinite(value), f"{name} must be finite", **{name: raw})
    return value


@dataclass(frozen=True)
class Location(ValueObject):
    """Latitude/longitude pair (WGS84 degrees).

    Example:
        >>> new_york = Location(40.7128, -74.0060)
        >>> los_angeles = Location(34.0522, -118.2437)
        >>> round(new_york.distance_to(los_angeles))  # ~3936 km
    """

    latitude: float
    """Latitude в [-90, 90]."""

    longitude: float
    """Longitude в [-180, 180]."""

    def __post_init__(self) -> None:
        """Validate coordinate ranges."""
        latitude = _coerce_coordinate("latitude", self.latitude)
        longitude = _coerce_coordinate("longitude", self.longitude)

        validate_value_object(
            MIN_LATITUDE <= latitude <= MAX_LATITUDE,
            "Latitude must be between -90 and 90",
            latitude=latitude,
        )
        validate_value_object(
            MIN_LONGITUDE <= longitude <= MAX_LONGITUDE,
            "Longitude must be between -180 and 180",
            longitude=longitude,
        )

        object.__setattr__(self, "latitude", latitude)
        object.__setattr__(self, "longitude", longitude)

    def distance_to(self, other: "Location") -> float:
        """Great-circle distance in kilometers (haversine, R = 6371 km).

        Symmetric: a.distance_to(b) == b.distance_to(a); 0.0 для однакових точок.
        """
        phi1 = math.radians(self.latitude)
        phi2 = math.radians(other.latitude)
        d_phi = math.radians(other.latitude - self.latitude)
        d_lambda = math.radians(other.longitude - self.longitude)

        a = (
            math.sin(d_phi / 2) ** 2
            + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
        )
        a = min(1.0, max(0.0, a))
        c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
        return EARTH_RADIUS_KM * c

    def bounding_box(self, radius_km: float) -> "BoundingBox":
        """Smallest lat/lon box that contains every point within `radius_km`.

        Box - тільки prefilter: він ширший за коло, фінальна перевірка
        завжди через distance_to. Біля полюсів або через antimeridian
        повертається повний діапазон longitude.

        Raises:
            InvalidArgumentError: If radius is negative or not finite.
        """
        radius = _coerce_coordinate("radius_km", radius_km)
        validate_value_object(radius >= 0, "Radius cannot be negative", radius_km=radius_km)

        angular = radius / EARTH_RADIUS_KM
        d_lat = math.degrees(angular) + _BOX_MARGIN_DEG

        min_lat = self.latitude - d_lat
        max_lat = self.latitude + d_lat

        if min_lat <= MIN_LATITUDE or max_lat >= MAX_LATITUDE or angular >= math.pi / 2:
            return BoundingBox(
                max(min_lat, MIN_LATITUDE),
                MIN_LONGITUDE,
                min(max_lat, MAX_LATITUDE),
                MAX_LONGITUDE,
            )

        ratio = math.sin(angular) / math.cos(math.radians(self.latitude))
        if ratio >= 1:
            return BoundingBox(min_lat, MIN_LONGITUDE, max_lat, MAX_LONGITUDE)

        d_lon = math.degrees(math.asin(ratio)) + _BOX_MARGIN_DEG
        min_lon = self.longitude - d_lon
        max_lon = self.longitude + d_lon

        if min_lon < MIN_LONGITUDE or max_lon > MAX_LONGITUDE:
            return BoundingBox(min_lat, MIN_LONGITUDE, max_lat, MAX_LONGITUDE)

        return BoundingBox(min_lat, min_lon, max_lat, max_lon)

    def __str__(self) -> str:
        return f"({self.latitude}, {self.longitude})"


@dataclass(frozen=True)
class BoundingBox(ValueObject):
    """Axis-aligned lat/lon rectangle (не перетинає antimeridian)."""

    min_latitude: float
    min_longitude: float
    max_latitude: float
    max_longitude: float

    def __post_init__(self) -> None:
        """Validate ranges and ordering."""
        for name in ("min_latitude", "min_longitude", "max_latitude", "max_longitude"):
            object.__setattr__(self, name, _coerce_coordinate(name, getattr(self, name)))

        for name in ("min_latitude", "max_latitude"):
            value = getattr(self, name)
            validate_value_object(
                MIN_LATITUDE <= value <= MAX_LATITUDE,
                "Latitude must be between -90 and 90",
                **{name: value},
            )
        for name in ("min_longitude", "max_longitude"):
            value = getattr(self, name)
            validate_value_object(
                MIN_LONGITUDE <= value <= MAX_LONGITUDE,
                "Longitude must be between -180 and 180",
                **{name: value},
            )

        validate_value_object(
            self.min_latitude <= self.max_latitude,
            "min_latitude must not exceed max_latitude",
            min_latitude=self.min_latitude,
            max_latitude=self.max_latitude,
        )
        validate_value_object(
            self.min_longitude <= self.max_longitude,
            "min_longitude must not exceed max_longitude",
            min_longitude=self.min_longitude,
            max_longitude=self.max_longitude,
        )

    def contains(self, location: Location) -> bool:
        """Check if location lies inside the box (edges inclusive)."""
        return (
            self.min_latitude <= location.latitude <= self.max_latitude
            and self.min_longitude <= location.longitude <= self.max_longitude
        )

    @property
    def covers_all_longitudes(self) -> bool:
        return self.min_longitude == MIN_LONGITUDE and self.max_longitude == MAX_LONGITUDE
