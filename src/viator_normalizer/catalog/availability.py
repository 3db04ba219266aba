"""Expand Viator availability schedules into per-day calendars.

A schedule lists, per bookable item, seasons bounded by a start and end date.
Each season holds pricing records that apply on certain weekdays and carry
timed entries (a start time plus the dates on which it is sold out). The
expansion walks every day of every season and records, for each day covered
by a pricing record, its start times and whether each timed entry is
available on that day.

Classification happens per timed entry, so a day sold out for one entry and
open for another appears in both ``available_dates`` and
``unavailable_dates``.
"""
from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, Iterable, Iterator, List, Optional

from viator_normalizer.core.diagnostics import DiagnosticSink, resolve_sink

from .models import AgeBandPrice, AvailabilityOption, AvailabilityRecord, OptionPricing
from .normalizer import DEFAULT_CURRENCY
from .raw import (
    RawAvailability,
    RawBookableItem,
    RawPricingDetail,
    RawPricingRecord,
    RawSeason,
    parse_raw,
    peek_text,
)

WEEKDAY_NAMES = (
    "SUNDAY",
    "MONDAY",
    "TUESDAY",
    "WEDNESDAY",
    "THURSDAY",
    "FRIDAY",
    "SATURDAY",
)


def weekday_name(day: date) -> str:
    return WEEKDAY_NAMES[day.isoweekday() % 7]


def parse_calendar_date(value: Optional[str]) -> Optional[date]:
    """Parse a season boundary; aware timestamps are moved to UTC first."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    return parsed.date()


def _dedupe(values: Iterable[str]) -> List[str]:
    seen: set[str] = set()
    ordered: List[str] = []
    for value in values:
        if value in seen:
            continue
        seen.add(value)
        ordered.append(value)
    return ordered


def iter_season_days(
    season: RawSeason,
    *,
    max_days: Optional[int] = None,
    sink: Optional[DiagnosticSink] = None,
) -> Iterator[date]:
    """Yield every day from the season start to its end, both inclusive."""
    start = parse_calendar_date(season.start_date)
    end = parse_calendar_date(season.end_date)
    if start is None or end is None or end < start:
        return
    span = (end - start).days + 1
    if max_days is not None and span > max_days:
        resolve_sink(sink).record_failure(
            f"Season {season.start_date}..{season.end_date} spans {span} days; "
            f"expanding the first {max_days} only",
            severity="warning",
        )
        span = max_days
    for offset in range(span):
        yield start + timedelta(days=offset)


def _find_age_band(details: Iterable[RawPricingDetail], age_band: str) -> Optional[RawPricingDetail]:
    return next((detail for detail in details if detail.age_band == age_band), None)


def _age_band_price(detail: Optional[RawPricingDetail], *, with_end_date: bool = False) -> AgeBandPrice:
    block = detail.price if detail else None
    original = block.original if block else None
    special = block.special if block else None
    return AgeBandPrice(
        price=(original.recommended_retail_price if original else None) or 0,
        special_price=special.recommended_retail_price if special else None,
        special_price_end_date=special.offer_end_date if special and with_end_date else None,
    )


def _first_pricing_record(item: RawBookableItem) -> Optional[RawPricingRecord]:
    seasons = item.seasons or []
    if not seasons:
        return None
    records = seasons[0].pricing_records or []
    return records[0] if records else None


def _option_pricing(item: RawBookableItem) -> OptionPricing:
    record = _first_pricing_record(item)
    details = (record.pricing_details if record else None) or []
    adult = _find_age_band(details, "ADULT")
    child = _find_age_band(details, "CHILD")
    infant = _find_age_band(details, "INFANT")
    return OptionPricing(
        adult=_age_band_price(adult, with_end_date=True),
        child=_age_band_price(child) if child else None,
        infant=_age_band_price(infant) if infant else None,
    )


def build_option(
    item: RawBookableItem,
    *,
    max_season_days: Optional[int] = None,
    sink: Optional[DiagnosticSink] = None,
) -> AvailabilityOption:
    available: List[str] = []
    unavailable: List[str] = []
    start_times: Dict[str, List[str]] = {}

    for season in item.seasons or []:
        records = season.pricing_records or []
        for day in iter_season_days(season, max_days=max_season_days, sink=sink):
            day_str = day.isoformat()
            weekday = weekday_name(day)
            for record in records:
                if weekday not in (record.days_of_week or []):
                    continue
                for entry in record.timed_entries or []:
                    times = start_times.setdefault(day_str, [])
                    if entry.start_time and entry.start_time not in times:
                        times.append(entry.start_time)
                    sold_out = any(
                        unavailable_date.date == day_str
                        for unavailable_date in entry.unavailable_dates or []
                    )
                    if sold_out:
                        unavailable.append(day_str)
                    else:
                        available.append(day_str)

    return AvailabilityOption(
        product_option_code=item.product_option_code or "",
        available_dates=_dedupe(available),
        unavailable_dates=_dedupe(unavailable),
        start_times=start_times,
        pricing=_option_pricing(item),
    )


def _build_availability(
    raw: RawAvailability,
    *,
    max_season_days: Optional[int],
    sink: Optional[DiagnosticSink],
) -> AvailabilityRecord:
    options = [
        build_option(item, max_season_days=max_season_days, sink=sink)
        for item in raw.bookable_items or []
    ]
    summary = raw.summary
    return AvailabilityRecord(
        product_code=raw.product_code or "",
        available=len(options) > 0,
        options=options,
        lowest_price=(summary.from_price if summary else None) or 0,
        original_price=summary.from_price_before_discount if summary else None,
        currency=raw.currency or DEFAULT_CURRENCY,
    )


def transform_availability(
    raw: Any,
    *,
    sink: Optional[DiagnosticSink] = None,
    max_season_days: Optional[int] = None,
) -> AvailabilityRecord:
    """Normalise a raw availability schedule.

    ``available`` reports whether any bookable item exists, not whether any day
    is open. ``max_season_days`` bounds the days expanded per season; ``None``
    expands every day.
    """
    sink = resolve_sink(sink)
    try:
        return _build_availability(
            parse_raw(RawAvailability, raw), max_season_days=max_season_days, sink=sink
        )
    except Exception as exc:
        sink.record_failure(f"Error transforming availability: {exc}", error=exc)
        return AvailabilityRecord(
            product_code=peek_text(raw, "productCode") or "",
            available=False,
            options=[],
            lowest_price=0,
            currency=DEFAULT_CURRENCY,
        )


def transform_availabilities(
    items: Iterable[Any],
    *,
    sink: Optional[DiagnosticSink] = None,
    max_season_days: Optional[int] = None,
) -> List[AvailabilityRecord]:
    return [
        transform_availability(item, sink=sink, max_season_days=max_season_days)
        for item in items
    ]
