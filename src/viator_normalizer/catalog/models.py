"""Dataclasses for normalised Viator catalogue records."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional


def _drop_missing(payload: dict[str, object]) -> dict[str, object]:
    return {key: value for key, value in payload.items() if value is not None}


@dataclass(slots=True)
class Coordinates:
    latitude: float
    longitude: float

    def to_dict(self) -> dict[str, object]:
        return {"latitude": self.latitude, "longitude": self.longitude}


@dataclass(slots=True)
class ProductRecord:
    """Flattened product summary suitable for listing pages.

    ``product_code`` is copied as received, except that a payload without one
    yields ``""`` so the field stays a string.
    """

    product_code: str
    title: str
    description: str
    price: float
    currency: str
    image_url: str
    thumbnail_url: str
    average_rating: float
    review_count: int
    destination_ids: List[str] = field(default_factory=list)
    tags: List[int] = field(default_factory=list)
    flags: List[str] = field(default_factory=list)
    booking_url: str = ""
    is_machine_translated: bool = False
    original_price: Optional[float] = None
    primary_destination_id: Optional[str] = None

    def to_dict(self) -> dict[str, object]:
        return _drop_missing(
            {
                "productCode": self.product_code,
                "title": self.title,
                "description": self.description,
                "price": self.price,
                "originalPrice": self.original_price,
                "currency": self.currency,
                "imageUrl": self.image_url,
                "thumbnailUrl": self.thumbnail_url,
                "averageRating": self.average_rating,
                "reviewCount": self.review_count,
                "destinationIds": list(self.destination_ids),
                "primaryDestinationId": self.primary_destination_id,
                "tags": list(self.tags),
                "flags": list(self.flags),
                "bookingUrl": self.booking_url,
                "isMachineTranslated": self.is_machine_translated,
            }
        )


@dataclass(slots=True)
class DestinationRecord:
    """A node of the destination hierarchy.

    ``destination_id`` is ``0`` when the upstream payload did not carry one;
    callers must treat it as unknown rather than as a real identifier.
    """

    destination_id: int
    name: str
    type: str
    lookup_id: str
    iata_codes: List[str] = field(default_factory=list)
    parent_destination_id: Optional[int] = None
    url: Optional[str] = None
    currency_code: Optional[str] = None
    time_zone: Optional[str] = None
    coordinates: Optional[Coordinates] = None

    def to_dict(self) -> dict[str, object]:
        return _drop_missing(
            {
                "destinationId": self.destination_id,
                "name": self.name,
                "type": self.type,
                "parentDestinationId": self.parent_destination_id,
                "lookupId": self.lookup_id,
                "url": self.url,
                "currencyCode": self.currency_code,
                "timeZone": self.time_zone,
                "iataCodes": list(self.iata_codes),
                "coordinates": self.coordinates.to_dict() if self.coordinates else None,
            }
        )


@dataclass(slots=True)
class AgeBandPrice:
    """Retail price for one traveller age band."""

    price: float
    special_price: Optional[float] = None
    # Only populated for the adult band.
    special_price_end_date: Optional[str] = None

    def to_dict(self) -> dict[str, object]:
        return _drop_missing(
            {
                "price": self.price,
                "specialPrice": self.special_price,
                "specialPriceEndDate": self.special_price_end_date,
            }
        )


@dataclass(slots=True)
class OptionPricing:
    adult: AgeBandPrice
    child: Optional[AgeBandPrice] = None
    infant: Optional[AgeBandPrice] = None

    def to_dict(self) -> dict[str, object]:
        return _drop_missing(
            {
                "adult": self.adult.to_dict(),
                "child": self.child.to_dict() if self.child else None,
                "infant": self.infant.to_dict() if self.infant else None,
            }
        )


@dataclass(slots=True)
class AvailabilityOption:
    """Calendar and pricing for one bookable product option."""

    product_option_code: str
    available_dates: List[str] = field(default_factory=list)
    unavailable_dates: List[str] = field(default_factory=list)
    start_times: Dict[str, List[str]] = field(default_factory=dict)
    pricing: OptionPricing = field(default_factory=lambda: OptionPricing(adult=AgeBandPrice(price=0)))

    def to_dict(self) -> dict[str, object]:
        return {
            "productOptionCode": self.product_option_code,
            "availableDates": list(self.available_dates),
            "unavailableDates": list(self.unavailable_dates),
            "startTimes": {day: list(times) for day, times in self.start_times.items()},
            "pricing": self.pricing.to_dict(),
        }


@dataclass(slots=True)
class AvailabilityRecord:
    product_code: str
    available: bool
    options: List[AvailabilityOption] = field(default_factory=list)
    lowest_price: float = 0
    currency: str = "USD"
    original_price: Optional[float] = None

    def to_dict(self) -> dict[str, object]:
        return _drop_missing(
            {
                "productCode": self.product_code,
                "available": self.available,
                "options": [option.to_dict() for option in self.options],
                "lowestPrice": self.lowest_price,
                "originalPrice": self.original_price,
                "currency": self.currency,
            }
        )


@dataclass(slots=True)
class LocationRecord:
    reference: str
    provider: str
    name: str
    address: Optional[str] = None
    coordinates: Optional[Coordinates] = None

    def to_dict(self) -> dict[str, object]:
        return _drop_missing(
            {
                "reference": self.reference,
                "provider": self.provider,
                "name": self.name,
                "address": self.address,
                "coordinates": self.coordinates.to_dict() if self.coordinates else None,
            }
        )
