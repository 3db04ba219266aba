"""Normalisation of Viator tours-and-activities payloads."""

from viator_normalizer.catalog import (
    transform_availability,
    transform_destination,
    transform_location,
    transform_product,
)
from viator_normalizer.utils.values import format_date, parse_price

__all__ = [
    "format_date",
    "parse_price",
    "transform_availability",
    "transform_destination",
    "transform_location",
    "transform_product",
]
