from __future__ import annotations

import copy
import random
from typing import Any

import pytest

from viator_normalizer.catalog import (
    AvailabilityRecord,
    DestinationRecord,
    LocationRecord,
    ProductRecord,
    transform_availability,
    transform_destination,
    transform_location,
    transform_product,
)

PRODUCT = {
    "productCode": "1234P1",
    "title": "Night Kayak",
    "description": "Paddle under the stars.",
    "pricing": {"summary": {"fromPrice": 55, "fromPriceBeforeDiscount": 70}, "currency": "EUR"},
    "images": [
        {"isCover": True, "variants": [{"width": 720, "height": 480, "url": "big"}, {"width": 100, "height": 100, "url": "small"}]}
    ],
    "reviews": {"totalReviews": 3, "combinedAverageRating": 5},
    "destinations": [{"ref": "d1", "primary": True}],
    "tags": [1, 2],
    "flags": ["NEW_ON_VIATOR"],
    "productUrl": "https://example.com/p",
    "translationInfo": {"containsMachineTranslatedText": False},
}

DESTINATION = {
    "destinationId": 77,
    "name": "Lisbon",
    "type": "CITY",
    "parentDestinationId": 6,
    "lookupId": "6.77",
    "destinationUrl": "https://example.com/d77",
    "defaultCurrencyCode": "EUR",
    "timeZone": "Europe/Lisbon",
    "iataCodes": ["LIS"],
    "center": {"latitude": 38.72, "longitude": -9.14},
}

AVAILABILITY = {
    "productCode": "1234P1",
    "bookableItems": [
        {
            "productOptionCode": "EVENING",
            "seasons": [
                {
                    "startDate": "2024-05-01",
                    "endDate": "2024-05-10",
                    "pricingRecords": [
                        {
                            "daysOfWeek": ["FRIDAY", "SATURDAY"],
                            "timedEntries": [
                                {"startTime": "20:00", "unavailableDates": [{"date": "2024-05-04", "reason": "SOLD_OUT"}]}
                            ],
                            "pricingDetails": [
                                {"ageBand": "ADULT", "price": {"original": {"recommendedRetailPrice": 55}}},
                                {"ageBand": "CHILD", "price": {"original": {"recommendedRetailPrice": 30}}},
                            ],
                        }
                    ],
                }
            ],
        }
    ],
    "currency": "EUR",
    "summary": {"fromPrice": 30, "fromPriceBeforeDiscount": 40},
}

LOCATION = {
    "reference": "LOC-x",
    "provider": "GOOGLE",
    "name": "Belem Tower",
    "unstructuredAddress": "Av. Brasilia",
    "address": {"street": "Av. Brasilia", "state": "Lisboa", "country": "Portugal"},
    "center": {"latitude": 38.69, "longitude": -9.21},
}


def _prune(value: Any, rng: random.Random) -> Any:
    if isinstance(value, dict):
        return {key: _prune(item, rng) for key, item in value.items() if rng.random() > 0.3}
    if isinstance(value, list):
        return [_prune(item, rng) for item in value if rng.random() > 0.2]
    if rng.random() < 0.1:
        return None
    return value


def _assert_product(record: ProductRecord) -> None:
    assert isinstance(record.product_code, str)
    assert isinstance(record.title, str) and record.title
    assert isinstance(record.description, str)
    assert isinstance(record.price, (int, float))
    assert isinstance(record.currency, str) and record.currency
    assert isinstance(record.image_url, str)
    assert isinstance(record.thumbnail_url, str)
    assert isinstance(record.review_count, int)
    assert all(isinstance(ref, str) for ref in record.destination_ids)
    assert isinstance(record.is_machine_translated, bool)
    assert record.original_price is None or isinstance(record.original_price, float)


def _assert_destination(record: DestinationRecord) -> None:
    assert isinstance(record.destination_id, int)
    assert isinstance(record.name, str) and record.name
    assert isinstance(record.type, str) and record.type
    assert isinstance(record.lookup_id, str)
    assert isinstance(record.iata_codes, list)


def _assert_availability(record: AvailabilityRecord) -> None:
    assert isinstance(record.product_code, str)
    assert record.available is (len(record.options) > 0)
    assert isinstance(record.lowest_price, (int, float))
    assert isinstance(record.currency, str) and record.currency
    for option in record.options:
        assert isinstance(option.product_option_code, str)
        assert len(option.available_dates) == len(set(option.available_dates))
        assert len(option.unavailable_dates) == len(set(option.unavailable_dates))
        for times in option.start_times.values():
            assert len(times) == len(set(times))
        assert isinstance(option.pricing.adult.price, (int, float))


def _assert_location(record: LocationRecord) -> None:
    assert isinstance(record.reference, str)
    assert isinstance(record.provider, str) and record.provider
    assert isinstance(record.name, str) and record.name
    assert record.address is None or record.address


CASES = [
    (PRODUCT, transform_product, _assert_product),
    (DESTINATION, transform_destination, _assert_destination),
    (AVAILABILITY, transform_availability, _assert_availability),
    (LOCATION, transform_location, _assert_location),
]


@pytest.mark.parametrize("seed", range(40))
@pytest.mark.parametrize("template,transform,check", CASES)
def test_randomly_pruned_payloads_still_produce_valid_records(seed, template, transform, check, sink):
    raw = _prune(copy.deepcopy(template), random.Random(seed))
    snapshot = copy.deepcopy(raw)

    first = transform(raw, sink=sink)
    second = transform(raw, sink=sink)

    check(first)
    assert first == second
    assert first.to_dict() == second.to_dict()
    assert raw == snapshot


@pytest.mark.parametrize("template,transform,check", CASES)
@pytest.mark.parametrize("garbage", [None, [], "text", 42, {"center": "north"}, {"images": 3, "bookableItems": 3, "address": 3}])
def test_garbage_inputs_never_raise(template, transform, check, garbage, sink):
    check(transform(garbage, sink=sink))
