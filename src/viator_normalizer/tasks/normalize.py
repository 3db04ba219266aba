"""Normalise stored upstream responses and persist the resulting records."""
from __future__ import annotations

import json
import logging
from functools import partial
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from viator_normalizer.catalog import (
    transform_availabilities,
    transform_destinations,
    transform_locations,
    transform_products,
)
from viator_normalizer.core.diagnostics import DiagnosticSink
from viator_normalizer.storage.json_writer import JsonStore

logger = logging.getLogger(__name__)

# Key holding the item list in each upstream response envelope.
ENVELOPE_KEYS: Dict[str, str] = {
    "products": "products",
    "destinations": "destinations",
    "availability": "availabilitySchedules",
    "locations": "locations",
}

PAYLOAD_KINDS = tuple(ENVELOPE_KEYS)


def extract_items(payload: Any, kind: str) -> List[Any]:
    """Return the raw items carried by ``payload``.

    Accepts an upstream envelope, a bare list of items or a single item.
    """
    try:
        envelope_key = ENVELOPE_KEYS[kind]
    except KeyError as exc:
        known = ", ".join(PAYLOAD_KINDS)
        raise ValueError(f"Unknown payload kind '{kind}'. Known kinds: {known}") from exc
    if isinstance(payload, list):
        return list(payload)
    if isinstance(payload, dict):
        items = payload.get(envelope_key)
        if isinstance(items, list):
            return list(items)
        if envelope_key in payload:
            logger.warning("Envelope key '%s' is not a list; treating payload as empty", envelope_key)
            return []
        return [payload]
    return []


class NormalizeTask:
    """Transform raw payloads of one kind and write them as JSON."""

    def __init__(
        self,
        output_dir: Path,
        *,
        sink: Optional[DiagnosticSink] = None,
        max_season_days: Optional[int] = None,
    ) -> None:
        self._store = JsonStore(output_dir)
        self._sink = sink
        self._max_season_days = max_season_days

    def _transformer(self, kind: str) -> Callable[..., List[Any]]:
        transformers: Dict[str, Callable[..., List[Any]]] = {
            "products": transform_products,
            "destinations": transform_destinations,
            "availability": partial(transform_availabilities, max_season_days=self._max_season_days),
            "locations": transform_locations,
        }
        return transformers[kind]

    def normalize(self, payload: Any, *, kind: str) -> List[dict[str, object]]:
        items = extract_items(payload, kind)
        records = self._transformer(kind)(items, sink=self._sink)
        return [record.to_dict() for record in records]

    def run(self, payload: Any, *, kind: str, filename: Optional[str] = None) -> Path:
        data = self.normalize(payload, kind=kind)
        target = filename or f"{kind}.json"
        logger.info("Writing %s %s records to %s/%s", len(data), kind, kind, target)
        return self._store.write(data, filename=target, subdir=kind)

    def run_file(self, path: Path, *, kind: str, filename: Optional[str] = None) -> Path:
        if not path.exists():
            raise FileNotFoundError(f"Payload file not found at {path}")
        payload = json.loads(path.read_text())
        return self.run(payload, kind=kind, filename=filename)
