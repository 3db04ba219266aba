from __future__ import annotations

import json

import pytest

from viator_normalizer.storage.json_writer import JsonStore
from viator_normalizer.tasks.normalize import NormalizeTask, extract_items


def test_extract_items_unwraps_known_envelopes():
    assert extract_items({"products": [{"productCode": "A"}], "totalCount": 1}, "products") == [{"productCode": "A"}]
    assert extract_items({"availabilitySchedules": [{"productCode": "A"}]}, "availability") == [{"productCode": "A"}]
    assert extract_items({"locations": []}, "locations") == []


def test_extract_items_accepts_bare_lists_and_single_objects():
    assert extract_items([{"destinationId": 1}, {"destinationId": 2}], "destinations") == [
        {"destinationId": 1},
        {"destinationId": 2},
    ]
    assert extract_items({"reference": "LOC-1"}, "locations") == [{"reference": "LOC-1"}]
    assert extract_items("nonsense", "products") == []
    assert extract_items({"products": "oops"}, "products") == []


def test_extract_items_rejects_unknown_kind():
    with pytest.raises(ValueError, match="Unknown payload kind 'tags'"):
        extract_items({}, "tags")


def test_json_store_writes_items_with_metadata(tmp_path):
    store = JsonStore(tmp_path / "out")

    path = store.write([{"a": 1}, {"a": 2}], filename="items.json", subdir="products")

    assert path == tmp_path / "out" / "products" / "items.json"
    written = json.loads(path.read_text())
    assert written["count"] == 2
    assert written["items"] == [{"a": 1}, {"a": 2}]
    assert written["generated_at"].endswith("Z")


def test_normalize_task_writes_normalised_products(tmp_path, sink):
    task = NormalizeTask(tmp_path, sink=sink)
    payload = {
        "products": [
            {"productCode": "A", "title": "Alpha", "pricing": {"summary": {"fromPrice": 10}}},
            "broken",
        ],
        "totalCount": 2,
    }

    path = task.run(payload, kind="products")

    assert path == tmp_path / "products" / "products.json"
    items = json.loads(path.read_text())["items"]
    assert [item["productCode"] for item in items] == ["A", ""]
    assert items[0]["title"] == "Alpha"
    assert items[0]["price"] == 10
    assert items[1]["title"] == "Error Processing Product"
    assert len(sink.records) == 1


def test_normalize_task_applies_season_cap(tmp_path, sink):
    task = NormalizeTask(tmp_path, sink=sink, max_season_days=2)
    payload = {
        "availabilitySchedules": [
            {
                "productCode": "A",
                "bookableItems": [
                    {
                        "productOptionCode": "OPT",
                        "seasons": [
                            {
                                "startDate": "2024-01-01",
                                "endDate": "2024-12-31",
                                "pricingRecords": [
                                    {
                                        "daysOfWeek": ["MONDAY", "TUESDAY", "WEDNESDAY"],
                                        "timedEntries": [{"startTime": "10:00"}],
                                    }
                                ],
                            }
                        ],
                    }
                ],
            }
        ]
    }

    records = task.normalize(payload, kind="availability")

    assert records[0]["options"][0]["availableDates"] == ["2024-01-01", "2024-01-02"]
    assert sink.records[0][0] == "warning"


def test_run_file_reads_payload_from_disk(tmp_path):
    source = tmp_path / "locations.json"
    source.write_text(json.dumps({"locations": [{"reference": "LOC-1", "address": {"street": "1 Rd", "country": "FR"}}]}))
    task = NormalizeTask(tmp_path / "normalized")

    path = task.run_file(source, kind="locations", filename="batch-1.json")

    items = json.loads(path.read_text())["items"]
    assert items == [{"reference": "LOC-1", "provider": "UNKNOWN", "name": "Unknown Location", "address": "1 Rd, FR"}]


def test_run_file_raises_for_missing_payload(tmp_path):
    task = NormalizeTask(tmp_path)

    with pytest.raises(FileNotFoundError):
        task.run_file(tmp_path / "missing.json", kind="products")
