"""Viator catalogue records and the transforms that build them."""

from .availability import transform_availabilities, transform_availability
from .models import (
    AgeBandPrice,
    AvailabilityOption,
    AvailabilityRecord,
    Coordinates,
    DestinationRecord,
    LocationRecord,
    OptionPricing,
    ProductRecord,
)
from .normalizer import (
    transform_destination,
    transform_destinations,
    transform_location,
    transform_locations,
    transform_product,
    transform_products,
)

__all__ = [
    "AgeBandPrice",
    "AvailabilityOption",
    "AvailabilityRecord",
    "Coordinates",
    "DestinationRecord",
    "LocationRecord",
    "OptionPricing",
    "ProductRecord",
    "transform_availabilities",
    "transform_availability",
    "transform_destination",
    "transform_destinations",
    "transform_location",
    "transform_locations",
    "transform_product",
    "transform_products",
]
