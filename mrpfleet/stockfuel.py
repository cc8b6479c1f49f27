"""Daily fuel stock report: opening stock, fuel used, fuel received and closing stock."""

from __future__ import annotations

import calendar
import re
from collections import defaultdict
from dataclasses import dataclass
from datetime import date, timedelta
from typing import NamedTuple

from sqlalchemy import select
from sqlalchemy.orm import Session

from .models import AdjustStock, FuelIn, FuelRatio

DAY_SHIFT = "Shift 1"
NIGHT_SHIFT = "Shift 2"
VENDORS = ("MJSU", "PPP", "SADP")

_MONTH = re.compile(r"([0-9]{4})-([0-9]{2})")

# Indexed by date.weekday(), Monday first.
_DAY_NAMES = ("Senin", "Selasa", "Rabu", "Kamis", "Jumat", "Sabtu", "Minggu")
_MONTH_NAMES = (
    "Januari", "Februari", "Maret", "April", "Mei", "Juni",
    "Juli", "Agustus", "September", "Oktober", "November", "Desember",
)


class MonthBounds(NamedTuple):
    """First and last day of a month and of the month before it."""

    start: date
    end: date
    prev_start: date
    prev_end: date


@dataclass(frozen=True)
class StockFuelRow:
    """Fuel figures for one day of the report."""

    report_date: date
    date: str
    first_stock: float
    day: float
    night: float
    total: float
    grand_total: float
    fuel_in: float
    end_stock: float
    mtd_consump: float
    mjsu: float
    ppp: float
    sadp: float
    plan_permintaan: float = 0.0
    btp: float = 0.0
    surplus: float = 0.0


@dataclass
class _Usage:
    day: float = 0.0
    night: float = 0.0
    total: float = 0.0


@dataclass
class _Delivery:
    total: float = 0.0
    mjsu: float = 0.0
    ppp: float = 0.0
    sadp: float = 0.0


def month_bounds(month: str) -> MonthBounds:
    """Bounds of a ``YYYY-MM`` month and of the month preceding it."""
    if not month:
        raise ValueError("month is required")
    match = _MONTH.fullmatch(month)
    if match is None:
        raise ValueError(f"invalid month {month!r}, expected YYYY-MM")
    year, number = int(match.group(1)), int(match.group(2))
    if not 1 <= number <= 12:
        raise ValueError(f"invalid month {month!r}, expected YYYY-MM")
    start = date(year, number, 1)
    end = date(year, number, calendar.monthrange(year, number)[1])
    prev_end = start - timedelta(days=1)
    return MonthBounds(start, end, prev_end.replace(day=1), prev_end)


def format_indonesian_date(day: date) -> str:
    """Format a day as, for example, ``"Selasa, 01 Juli 2025"``."""
    return (
        f"{_DAY_NAMES[day.weekday()]}, {day.day:02d} "
        f"{_MONTH_NAMES[day.month - 1]} {day.year}"
    )


def _leading_date(text: str | None) -> date | None:
    """The calendar day at the start of ``text``; ``None`` for a missing or blank value."""
    if text is None or not text.strip():
        return None
    try:
        return date.fromisoformat(text.strip()[:10])
    except ValueError:
        raise ValueError(f"invalid date {text!r}") from None


class StockFuelReport:
    """Builds the daily fuel stock report from fuel ratios, deliveries and stock adjustments."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def _usage(self, bounds: MonthBounds) -> tuple[dict[date, _Usage], float]:
        daily: dict[date, _Usage] = defaultdict(_Usage)
        previous_total = 0.0
        statement = select(FuelRatio).where(FuelRatio.status.is_(True)).order_by(FuelRatio.id)
        for ratio in self._session.scalars(statement):
            text = ratio.tanggal if ratio.tanggal is not None else ratio.tanggal_awal
            day = _leading_date(text)
            if day is None:
                continue
            refill = float(ratio.total_refill)
            if bounds.start <= day <= bounds.end:
                usage = daily[day]
                usage.total += refill
                if ratio.shift == DAY_SHIFT:
                    usage.day += refill
                elif ratio.shift == NIGHT_SHIFT:
                    usage.night += refill
            if bounds.prev_start <= day <= bounds.prev_end:
                previous_total += refill
        return daily, previous_total

    def _deliveries(self, bounds: MonthBounds) -> tuple[dict[date, _Delivery], float]:
        daily: dict[date, _Delivery] = defaultdict(_Delivery)
        previous_total = 0.0
        low, high = bounds.prev_start.isoformat(), bounds.prev_end.isoformat()
        for fuel_in in self._session.scalars(select(FuelIn).order_by(FuelIn.id)):
            day = _leading_date(fuel_in.date)
            if day is not None and bounds.start <= day <= bounds.end:
                delivery = daily[day]
                delivery.total += fuel_in.qty_now
                if fuel_in.vendor == "MJSU":
                    delivery.mjsu += fuel_in.qty_now
                elif fuel_in.vendor == "PPP":
                    delivery.ppp += fuel_in.qty_now
                elif fuel_in.vendor == "SADP":
                    delivery.sadp += fuel_in.qty_now
            # The previous month's deliveries are bounded by comparing the stored text.
            if low <= fuel_in.date <= high:
                previous_total += fuel_in.qty_now
        return daily, previous_total

    def _explicit_stocks(self) -> dict[date, float]:
        stocks: dict[date, float] = {}
        statement = (
            select(AdjustStock)
            .where(AdjustStock.deleted_at.is_(None))
            .order_by(AdjustStock.id)
        )
        for adjustment in self._session.scalars(statement):
            day = _leading_date(adjustment.date)
            if day is not None:
                stocks.setdefault(day, adjustment.stock)
        return stocks

    def _opening_adjustment(self, bounds: MonthBounds) -> float:
        statement = (
            select(AdjustStock.stock)
            .where(AdjustStock.date == bounds.prev_start.isoformat())
            .order_by(AdjustStock.id)
            .limit(1)
        )
        stock = self._session.scalar(statement)
        return stock if stock is not None else 0.0

    def list_month(self, month: str) -> list[StockFuelRow]:
        """One row for every day of the ``YYYY-MM`` month, in date order."""
        bounds = month_bounds(month)
        usage, previous_out = self._usage(bounds)
        deliveries, previous_in = self._deliveries(bounds)
        explicit = self._explicit_stocks()
        stock = self._opening_adjustment(bounds) + previous_in - previous_out

        rows: list[StockFuelRow] = []
        month_to_date = 0.0
        day = bounds.start
        while day <= bounds.end:
            used = usage.get(day, _Usage())
            received = deliveries.get(day, _Delivery())
            month_to_date += used.total
            first_stock = explicit.get(day, stock)
            stock = first_stock + received.total - used.total
            rows.append(
                StockFuelRow(
                    report_date=day,
                    date=format_indonesian_date(day),
                    first_stock=first_stock,
                    day=used.day,
                    night=used.night,
                    total=used.total,
                    grand_total=used.total,
                    fuel_in=received.total,
                    end_stock=stock,
                    mtd_consump=month_to_date,
                    mjsu=received.mjsu,
                    ppp=received.ppp,
                    sadp=received.sadp,
                )
            )
            day += timedelta(days=1)
        return rows