"""Helpers for coercing loosely typed upstream values."""
from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Any, Optional

from viator_normalizer.core.diagnostics import DiagnosticSink, resolve_sink


def format_date(
    value: Optional[str],
    fallback: Optional[str] = None,
    *,
    sink: Optional[DiagnosticSink] = None,
) -> Optional[str]:
    """Render ``value`` as a UTC ISO-8601 timestamp with millisecond precision.

    Naive timestamps are read as UTC. Missing values, unparseable values and
    timestamps that fall outside the representable range once moved to UTC
    return ``fallback``.
    """
    if not value:
        return fallback
    try:
        parsed = datetime.fromisoformat(value)
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        rendered = parsed.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    except (TypeError, ValueError, OverflowError) as exc:
        resolve_sink(sink).record_failure(
            f"Error formatting date '{value}': {exc}", severity="warning"
        )
        return fallback
    return rendered.replace("+00:00", "Z")


def parse_price(price: Any, default: Optional[float] = 0) -> Optional[float]:
    """Return ``price`` as a float, or ``default`` when it is not a number.

    A blank string reads as ``0.0`` whatever ``default`` is.
    """
    if price is None:
        return default
    if isinstance(price, str) and not price.strip():
        return 0.0
    try:
        value = float(price)
    except (TypeError, ValueError, OverflowError):
        return default
    if math.isnan(value):
        return default
    return value
