"""Utilities to transform raw Viator catalogue payloads into normalised records."""
from __future__ import annotations

from typing import Any, Iterable, List, Optional

from viator_normalizer.core.diagnostics import DiagnosticSink, resolve_sink

from .models import Coordinates, DestinationRecord, LocationRecord, ProductRecord
from .raw import (
    RawCoordinates,
    RawDestination,
    RawImage,
    RawImageVariant,
    RawLocation,
    RawProduct,
    parse_raw,
    peek,
    peek_text,
)

IMAGE_SIZE = (720, 480)
THUMBNAIL_SIZE = (100, 100)

DEFAULT_CURRENCY = "USD"


def _select_cover_image(images: Optional[List[RawImage]]) -> Optional[RawImage]:
    if not images:
        return None
    for image in images:
        if image.is_cover:
            return image
    return images[0]


def _variant_url(image: Optional[RawImage], size: tuple[int, int]) -> str:
    if image is None:
        return ""
    width, height = size
    variants: Iterable[RawImageVariant] = image.variants or []
    match = next(
        (variant for variant in variants if variant.width == width and variant.height == height),
        None,
    )
    if match is None:
        return ""
    return match.url or ""


def extract_coordinates(center: Optional[RawCoordinates]) -> Optional[Coordinates]:
    """Return coordinates only when both axes are present and non-zero.

    A latitude or longitude of exactly ``0`` is indistinguishable from a missing
    value here.
    """
    if center is None or not center.latitude or not center.longitude:
        return None
    return Coordinates(latitude=center.latitude, longitude=center.longitude)


def _build_product(raw: RawProduct) -> ProductRecord:
    cover = _select_cover_image(raw.images)
    destinations = raw.destinations or []
    primary = next((destination for destination in destinations if destination.primary), None)
    pricing = raw.pricing
    summary = pricing.summary if pricing else None
    reviews = raw.reviews
    translation = raw.translation_info

    return ProductRecord(
        product_code=raw.product_code or "",
        title=raw.title or "Unknown Title",
        description=raw.description or "",
        price=(summary.from_price if summary else None) or 0,
        original_price=summary.from_price_before_discount if summary else None,
        currency=(pricing.currency if pricing else None) or DEFAULT_CURRENCY,
        image_url=_variant_url(cover, IMAGE_SIZE),
        thumbnail_url=_variant_url(cover, THUMBNAIL_SIZE),
        average_rating=(reviews.combined_average_rating if reviews else None) or 0,
        review_count=(reviews.total_reviews if reviews else None) or 0,
        destination_ids=[destination.ref or "" for destination in destinations],
        primary_destination_id=primary.ref if primary else None,
        tags=list(raw.tags or []),
        flags=list(raw.flags or []),
        booking_url=raw.product_url or "",
        is_machine_translated=bool(translation and translation.contains_machine_translated_text),
    )


def transform_product(raw: Any, *, sink: Optional[DiagnosticSink] = None) -> ProductRecord:
    """Normalise a raw product, degrading to a fallback record on failure."""
    try:
        return _build_product(parse_raw(RawProduct, raw))
    except Exception as exc:
        resolve_sink(sink).record_failure(f"Error transforming product: {exc}", error=exc)
        return ProductRecord(
            product_code=peek_text(raw, "productCode") or "",
            title=peek_text(raw, "title") or "Error Processing Product",
            description="",
            price=0,
            currency=DEFAULT_CURRENCY,
            image_url="",
            thumbnail_url="",
            average_rating=0,
            review_count=0,
        )


def _build_destination(raw: RawDestination) -> DestinationRecord:
    return DestinationRecord(
        destination_id=raw.destination_id or 0,
        name=raw.name or "Unknown Destination",
        type=raw.type or "UNKNOWN",
        parent_destination_id=raw.parent_destination_id,
        lookup_id=raw.lookup_id or "",
        url=raw.destination_url,
        currency_code=raw.default_currency_code,
        time_zone=raw.time_zone,
        iata_codes=list(raw.iata_codes or []),
        coordinates=extract_coordinates(raw.center),
    )


def _peek_destination_id(raw: Any) -> int:
    value = peek(raw, "destinationId")
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return 0


def transform_destination(raw: Any, *, sink: Optional[DiagnosticSink] = None) -> DestinationRecord:
    """Normalise a raw destination; ``destination_id`` 0 means unknown."""
    try:
        return _build_destination(parse_raw(RawDestination, raw))
    except Exception as exc:
        resolve_sink(sink).record_failure(f"Error transforming destination: {exc}", error=exc)
        return DestinationRecord(
            destination_id=_peek_destination_id(raw),
            name="Error Processing Destination",
            type="ERROR",
            lookup_id="",
        )


def _format_address(raw: RawLocation) -> Optional[str]:
    text = ""
    if raw.address is not None:
        address = raw.address
        parts = [address.street, address.administrative_area, address.state, address.country]
        text = ", ".join(part for part in parts if part)
    elif raw.unstructured_address:
        text = raw.unstructured_address
    return text or None


def _build_location(raw: RawLocation) -> LocationRecord:
    return LocationRecord(
        reference=raw.reference or "",
        provider=raw.provider or "UNKNOWN",
        name=raw.name or "Unknown Location",
        address=_format_address(raw),
        coordinates=extract_coordinates(raw.center),
    )


def transform_location(raw: Any, *, sink: Optional[DiagnosticSink] = None) -> LocationRecord:
    """Normalise a raw location and synthesise its display address."""
    try:
        return _build_location(parse_raw(RawLocation, raw))
    except Exception as exc:
        resolve_sink(sink).record_failure(f"Error transforming location: {exc}", error=exc)
        return LocationRecord(
            reference=peek_text(raw, "reference") or "",
            provider="ERROR",
            name="Error Processing Location",
        )


def transform_products(
    items: Iterable[Any], *, sink: Optional[DiagnosticSink] = None
) -> List[ProductRecord]:
    return [transform_product(item, sink=sink) for item in items]


def transform_destinations(
    items: Iterable[Any], *, sink: Optional[DiagnosticSink] = None
) -> List[DestinationRecord]:
    return [transform_destination(item, sink=sink) for item in items]


def transform_locations(
    items: Iterable[Any], *, sink: Optional[DiagnosticSink] = None
) -> List[LocationRecord]:
    return [transform_location(item, sink=sink) for item in items]
