"""Pydantic models describing raw Viator API payloads.

Every field at every level is optional: the upstream API omits keys freely
and nested objects may be missing altogether. Field names are snake_case and
accept the camelCase keys used on the wire.

Every field is also lenient. A value of the wrong type is treated as missing
instead of failing validation, so one malformed leaf never costs the rest of
the record: numbers that are not usable become ``None``, numbers given where
text is expected are stringified, and list entries of the wrong type are
dropped.
"""
from __future__ import annotations

from typing import Annotated, Any, Callable, List, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel, to_snake

from viator_normalizer.utils.values import parse_price

T = TypeVar("T")


def _lenient_number(value: Any) -> Optional[float]:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return parse_price(value, None)
    if isinstance(value, str):
        return parse_price(value.strip() or None, None)
    return None


def _lenient_int(value: Any) -> Optional[int]:
    number = _lenient_number(value)
    if number is None or not number.is_integer():
        return None
    return int(number)


def _lenient_text(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def _lenient_flag(value: Any) -> Optional[bool]:
    return value if isinstance(value, bool) else None


def _lenient_object(value: Any) -> Any:
    return value if isinstance(value, (Mapping, BaseModel)) else None


def _lenient_items(coerce: Callable[[Any], Any]) -> Callable[[Any], Optional[list]]:
    def validate(value: Any) -> Optional[list]:
        if not isinstance(value, (list, tuple)):
            return None
        items = (coerce(item) for item in value)
        return [item for item in items if item is not None]

    return validate


Number = Annotated[Optional[float], BeforeValidator(_lenient_number)]
Integer = Annotated[Optional[int], BeforeValidator(_lenient_int)]
Text = Annotated[Optional[str], BeforeValidator(_lenient_text)]
Flag = Annotated[Optional[bool], BeforeValidator(_lenient_flag)]
TextList = Annotated[Optional[List[str]], BeforeValidator(_lenient_items(_lenient_text))]
IntegerList = Annotated[Optional[List[int]], BeforeValidator(_lenient_items(_lenient_int))]
Nested = Annotated[Optional[T], BeforeValidator(_lenient_object)]
NestedList = Annotated[Optional[List[T]], BeforeValidator(_lenient_items(_lenient_object))]


class RawModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


class RawCoordinates(RawModel):
    latitude: Number = None
    longitude: Number = None


class RawPriceSummary(RawModel):
    from_price: Number = None
    from_price_before_discount: Number = None


# Products


class RawProductPricing(RawModel):
    summary: Nested[RawPriceSummary] = None
    currency: Text = None


class RawImageVariant(RawModel):
    height: Number = None
    width: Number = None
    url: Text = None


class RawImage(RawModel):
    image_source: Text = None
    caption: Text = None
    is_cover: Flag = None
    variants: NestedList[RawImageVariant] = None


class RawReviewSource(RawModel):
    provider: Text = None
    total_count: Integer = None
    average_rating: Number = None


class RawReviews(RawModel):
    sources: NestedList[RawReviewSource] = None
    total_reviews: Integer = None
    combined_average_rating: Number = None


class RawDestinationRef(RawModel):
    ref: Text = None
    primary: Flag = None


class RawTranslationInfo(RawModel):
    contains_machine_translated_text: Flag = None


class RawProduct(RawModel):
    """A product as returned by ``/products/search`` and ``/products/{code}``."""

    product_code: Text = None
    title: Text = None
    description: Text = None
    pricing: Nested[RawProductPricing] = None
    images: NestedList[RawImage] = None
    reviews: Nested[RawReviews] = None
    destinations: NestedList[RawDestinationRef] = None
    tags: IntegerList = None
    flags: TextList = None
    product_url: Text = None
    translation_info: Nested[RawTranslationInfo] = None


# Destinations


class RawDestination(RawModel):
    destination_id: Integer = None
    name: Text = None
    type: Text = None
    parent_destination_id: Integer = None
    lookup_id: Text = None
    destination_url: Text = None
    default_currency_code: Text = None
    time_zone: Text = None
    iata_codes: TextList = None
    country_calling_code: Text = None
    languages: TextList = None
    center: Nested[RawCoordinates] = None


# Availability schedules


class RawUnavailableDate(RawModel):
    date: Text = None
    reason: Text = None


class RawTimedEntry(RawModel):
    start_time: Text = None
    unavailable_dates: NestedList[RawUnavailableDate] = None


class RawPrice(RawModel):
    recommended_retail_price: Number = None
    partner_net_price: Number = None
    booking_fee: Number = None
    partner_total_price: Number = None


class RawSpecialPrice(RawPrice):
    offer_start_date: Text = None
    offer_end_date: Text = None


class RawPriceBlock(RawModel):
    original: Nested[RawPrice] = None
    special: Nested[RawSpecialPrice] = None


class RawPricingDetail(RawModel):
    pricing_package_type: Text = None
    min_travelers: Integer = None
    max_travelers: Integer = None
    age_band: Text = None
    price: Nested[RawPriceBlock] = None


class RawPricingRecord(RawModel):
    days_of_week: TextList = None
    timed_entries: NestedList[RawTimedEntry] = None
    pricing_details: NestedList[RawPricingDetail] = None


class RawSeason(RawModel):
    start_date: Text = None
    end_date: Text = None
    pricing_records: NestedList[RawPricingRecord] = None


class RawBookableItem(RawModel):
    product_option_code: Text = None
    seasons: NestedList[RawSeason] = None


class RawAvailability(RawModel):
    """An availability schedule as returned by ``/availability/schedules``."""

    product_code: Text = None
    bookable_items: NestedList[RawBookableItem] = None
    currency: Text = None
    summary: Nested[RawPriceSummary] = None


# Locations


class RawAddress(RawModel):
    street: Text = None
    administrative_area: Text = None
    state: Text = None
    country: Text = None
    country_code: Text = None
    postcode: Text = None


class RawLocation(RawModel):
    reference: Text = None
    provider: Text = None
    name: Text = None
    unstructured_address: Text = None
    address: Nested[RawAddress] = None
    center: Nested[RawCoordinates] = None


ModelT = TypeVar("ModelT", bound=RawModel)


def parse_raw(model: Type[ModelT], raw: Any) -> ModelT:
    """Validate ``raw`` (decoded JSON or an existing model) into ``model``."""
    return model.model_validate(raw if raw is not None else {})


def peek(raw: Any, key: str) -> Any:
    """Read a top-level wire key without validating the rest of the payload."""
    if isinstance(raw, BaseModel):
        return getattr(raw, to_snake(key), None)
    if isinstance(raw, Mapping):
        return raw.get(key)
    return None


def peek_text(raw: Any, key: str) -> Optional[str]:
    value = peek(raw, key)
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (str, int, float)):
        return str(value)
    return None
