"""Per-unit, per-shift totals of fuel refilled and hours worked."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, fields
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from .models import AlatBerat, FuelRatio, Unit
from .pagination import Pagination

PAGE_LIMIT = 7
BOUND_FORMAT = "%Y-%m-%d %H:%M:%S"
_ALIASES = frozenset({"u", "fr", "ab", "sub"})


@dataclass
class SummaryFilter:
    """Sorting and filtering of the fuel ratio summary.

    ``first_hm`` and ``last_hm`` are ``YYYY-MM-DD HH:MM:SS`` bounds on the
    records' times; a bound that does not parse is ignored. The remaining
    text fields match, without regard to case, part of the column's text.
    """

    field: str = ""
    sort: str = ""
    unit_name: str = ""
    shift: str = ""
    total_refill: str = ""
    consumption: str = ""
    tolerance: str = ""
    first_hm: str = ""
    last_hm: str = ""
    duration: str = ""
    total_konsumsi_bbm: str = ""


@dataclass(frozen=True)
class SummaryRow:
    """Totals for one unit in one shift."""

    unit_id: int
    unit_name: str
    shift: str
    total_refill: int
    consumption: float
    tolerance: float
    duration: float
    batas_bawah: float
    batas_atas: float
    total_konsumsi_bbm: str | None


_ROW_FIELDS = frozenset(f.name for f in fields(SummaryRow))


@dataclass
class _Totals:
    total_refill: int = 0
    duration: float = 0.0
    batas_bawah: float = 0.0
    batas_atas: float = 0.0


def _like(text: str | None, pattern: str) -> bool:
    """Case-insensitive SQL LIKE match."""
    if text is None:
        return False
    parts = []
    chars = iter(pattern)
    for char in chars:
        if char == "\\":
            parts.append(re.escape(next(chars, "")))
        elif char == "%":
            parts.append(".*")
        elif char == "_":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    return re.fullmatch("".join(parts), text, re.IGNORECASE | re.DOTALL) is not None


def _contains(text: str | None, value: str) -> bool:
    return _like(text, f"%{value}%")


def _number_text(value: float) -> str:
    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text


def _timestamp(text: str) -> datetime:
    cleaned = text.strip()
    if cleaned.endswith("Z"):
        cleaned = cleaned[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(cleaned).replace(tzinfo=None)
    except ValueError:
        raise ValueError(f"invalid timestamp {text!r}") from None


def _hours(ratio: FuelRatio) -> float:
    if ratio.tanggal_awal and ratio.tanggal_akhir:
        span = _timestamp(ratio.tanggal_akhir) - _timestamp(ratio.tanggal_awal)
        return span.total_seconds() / 3600
    return ratio.last_hm - ratio.first_hm


def _parse_bound(value: str) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.strptime(value, BOUND_FORMAT)
    except ValueError:
        return None


def _fuel_figure(duration: float, consumption: float) -> str | None:
    if consumption == 0:
        return None
    return f"{math.ceil(duration / consumption * 10) / 10.0:.1f}"


def _sort_key(name: str):
    if name is None:
        return (True, 0)
    return (False, name)


def _order(rows: list[SummaryRow], sort_filter: SummaryFilter) -> list[SummaryRow]:
    field_name, direction = "unit_name", "desc"
    if sort_filter.field and sort_filter.sort:
        field_name, direction = sort_filter.field, sort_filter.sort.lower()
    prefix, _, column = field_name.rpartition(".")
    if (prefix and prefix not in _ALIASES) or column not in _ROW_FIELDS:
        raise ValueError(f"cannot sort by {field_name!r}")
    if direction not in ("asc", "desc"):
        raise ValueError(f"unknown sort direction {sort_filter.sort!r}")
    return sorted(
        rows,
        key=lambda row: _sort_key(getattr(row, column)),
        reverse=direction == "desc",
    )


class FuelRatioSummary:
    """Summarises active fuel ratio records against each unit's consumption rate."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def _rates(self) -> dict[tuple[int, int, int], AlatBerat]:
        rates: dict[tuple[int, int, int], AlatBerat] = {}
        for rate in self._session.scalars(select(AlatBerat).order_by(AlatBerat.id)):
            key = (rate.brand_id, rate.heavy_equipment_id, rate.series_id)
            rates.setdefault(key, rate)
        return rates

    def _summarise(self, sort_filter: SummaryFilter) -> list[SummaryRow]:
        rates = self._rates()
        start = _parse_bound(sort_filter.first_hm)
        end = _parse_bound(sort_filter.last_hm)
        statement = (
            select(FuelRatio, Unit)
            .join(Unit, FuelRatio.unit_id == Unit.id)
            .where(FuelRatio.status.is_(True), FuelRatio.deleted_at.is_(None))
            .order_by(FuelRatio.id)
        )

        groups: dict[tuple[int, str, str, float, float], _Totals] = {}
        for ratio, unit in self._session.execute(statement):
            rate = rates.get((unit.brand_id, unit.heavy_equipment_id, unit.series_id))
            if rate is None:
                continue
            if start is not None and not (
                (ratio.tanggal_awal is not None and ratio.tanggal_awal >= sort_filter.first_hm)
                or (ratio.tanggal is not None and ratio.tanggal >= start.strftime("%Y-%m-%d"))
            ):
                continue
            if end is not None and not (
                (ratio.tanggal_akhir is not None and ratio.tanggal_akhir <= sort_filter.last_hm)
                or (ratio.tanggal is not None and ratio.tanggal <= end.strftime("%Y-%m-%d"))
            ):
                continue
            checks = (
                (sort_filter.unit_name, unit.unit_name),
                (sort_filter.shift, ratio.shift),
                (sort_filter.consumption, _number_text(rate.consumption)),
                (sort_filter.tolerance, _number_text(rate.tolerance)),
            )
            if any(wanted and not _contains(text, wanted) for wanted, text in checks):
                continue

            key = (unit.id, unit.unit_name, ratio.shift, rate.consumption, rate.tolerance)
            totals = groups.setdefault(key, _Totals())
            hours = _hours(ratio)
            totals.total_refill += ratio.total_refill
            totals.duration += hours
            totals.batas_bawah += hours * rate.consumption
            totals.batas_atas += hours * (
                rate.consumption + rate.consumption * rate.tolerance / 100
            )

        rows = [
            SummaryRow(
                unit_id=unit_id,
                unit_name=unit_name,
                shift=shift,
                total_refill=totals.total_refill,
                consumption=consumption,
                tolerance=tolerance,
                duration=totals.duration,
                batas_bawah=totals.batas_bawah,
                batas_atas=totals.batas_atas,
                total_konsumsi_bbm=_fuel_figure(totals.duration, consumption),
            )
            for (unit_id, unit_name, shift, consumption, tolerance), totals in groups.items()
        ]
        post_checks = (
            (sort_filter.total_konsumsi_bbm, lambda row: row.total_konsumsi_bbm),
            (sort_filter.total_refill, lambda row: str(row.total_refill)),
            (sort_filter.duration, lambda row: _number_text(row.duration)),
        )
        for wanted, text_of in post_checks:
            if wanted:
                rows = [row for row in rows if _contains(text_of(row), wanted)]
        return _order(rows, sort_filter)

    def export(self, sort_filter: SummaryFilter) -> list[SummaryRow]:
        """Every summary row matching ``sort_filter``, by unit name descending by default."""
        return self._summarise(sort_filter)

    def list_page(self, page: int, sort_filter: SummaryFilter) -> Pagination:
        """One page of summary rows matching ``sort_filter``."""
        if page < 1:
            raise ValueError(f"page must be at least 1, got {page}")
        rows = self._summarise(sort_filter)
        offset = (page - 1) * PAGE_LIMIT
        return Pagination(
            limit=PAGE_LIMIT,
            page=page,
            total_rows=len(rows),
            total_pages=math.ceil(len(rows) / PAGE_LIMIT),
            data=rows[offset:offset + PAGE_LIMIT],
        )