from datetime import date, datetime

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from mrpfleet.models import AdjustStock, FuelIn, FuelRatio, create_schema
from mrpfleet.stockfuel import (
    StockFuelReport,
    format_indonesian_date,
    month_bounds,
)


@pytest.fixture
def session():
    engine = create_engine("sqlite://")
    create_schema(engine)
    with Session(engine) as db:
        yield db


def _ratio(session, shift, refill, tanggal=None, tanggal_awal=None, status=True):
    session.add(
        FuelRatio(
            unit_id=1,
            operator_name="operator",
            shift=shift,
            tanggal=tanggal,
            tanggal_awal=tanggal_awal,
            total_refill=refill,
            status=status,
        )
    )


def _fuel_in(session, day, vendor, qty):
    session.add(FuelIn(date=day, vendor=vendor, qty=qty, qty_now=qty))


def test_month_bounds_leap_february():
    bounds = month_bounds("2024-03")
    assert bounds.start == date(2024, 3, 1)
    assert bounds.end == date(2024, 3, 31)
    assert bounds.prev_start == date(2024, 2, 1)
    assert bounds.prev_end == date(2024, 2, 29)


def test_month_bounds_crosses_year():
    bounds = month_bounds("2025-01")
    assert bounds.prev_start == date(2024, 12, 1)
    assert bounds.prev_end == date(2024, 12, 31)


@pytest.mark.parametrize("month", ["", "2025-7", "2025-13", "2025-00", "July", "2025-07-01"])
def test_month_bounds_rejects_bad_months(month):
    with pytest.raises(ValueError):
        month_bounds(month)


def test_month_is_required(session):
    with pytest.raises(ValueError, match="month is required"):
        StockFuelReport(session).list_month("")


def test_format_indonesian_date():
    assert format_indonesian_date(date(2025, 7, 1)) == "Selasa, 01 Juli 2025"


def test_empty_month_has_one_zero_row_per_day(session):
    rows = StockFuelReport(session).list_month("2025-07")
    assert [row.report_date for row in rows] == [date(2025, 7, d) for d in range(1, 32)]
    assert rows[0].date == "Selasa, 01 Juli 2025"
    assert all(row.first_stock == 0 and row.end_stock == 0 for row in rows)
    assert all(row.date == format_indonesian_date(row.report_date) for row in rows)


def test_shift_and_vendor_split(session):
    _ratio(session, "Shift 1", 30, tanggal="2025-07-02")
    _ratio(session, "Shift 2", 20, tanggal_awal="2025-07-02 22:00:00")
    _ratio(session, "Shift 1", 99, tanggal="2025-07-02", status=False)
    _fuel_in(session, "2025-07-02", "MJSU", 100.0)
    _fuel_in(session, "2025-07-02", "PPP", 40.0)
    _fuel_in(session, "2025-07-02", "OTHER", 5.0)
    session.commit()

    row = StockFuelReport(session).list_month("2025-07")[1]
    assert row.day == 30
    assert row.night == 20
    assert row.total == row.day + row.night
    assert row.grand_total == row.total
    assert row.mjsu == 100.0
    assert row.ppp == 40.0
    assert row.sadp == 0.0
    assert row.fuel_in == 100.0 + 40.0 + 5.0


def test_stock_carries_over_between_days(session):
    _fuel_in(session, "2025-07-01", "SADP", 500.0)
    _ratio(session, "Shift 1", 120, tanggal="2025-07-01")
    _ratio(session, "Shift 2", 60, tanggal="2025-07-03")
    session.commit()

    rows = StockFuelReport(session).list_month("2025-07")
    for row in rows:
        assert row.end_stock == row.first_stock + row.fuel_in - row.total
    for before, after in zip(rows, rows[1:]):
        assert after.first_stock == before.end_stock
        assert after.mtd_consump == before.mtd_consump + after.total
    assert rows[-1].mtd_consump == 120 + 60


def test_explicit_adjustment_resets_opening_stock(session):
    _fuel_in(session, "2025-07-01", "MJSU", 300.0)
    session.add(AdjustStock(date="2025-07-10", stock=1000.0))
    session.add(
        AdjustStock(date="2025-07-15", stock=7.0, deleted_at=datetime(2025, 7, 16))
    )
    session.commit()

    rows = StockFuelReport(session).list_month("2025-07")
    assert rows[8].end_stock == 300.0
    assert rows[9].first_stock == 1000.0
    assert rows[14].first_stock == rows[13].end_stock == 1000.0


def test_opening_stock_comes_from_previous_month(session):
    session.add(AdjustStock(date="2025-06-01", stock=500.0))
    _fuel_in(session, "2025-06-10", "PPP", 200.0)
    _ratio(session, "Shift 1", 80, tanggal="2025-06-20")
    _ratio(session, "Shift 1", 1000, tanggal="2025-05-20")
    session.commit()

    rows = StockFuelReport(session).list_month("2025-07")
    assert rows[0].first_stock == 500.0 + 200.0 - 80
    assert rows[0].total == 0


def test_records_outside_month_are_not_listed(session):
    _ratio(session, "Shift 1", 50, tanggal="2025-08-01")
    _fuel_in(session, "2025-08-01", "MJSU", 70.0)
    session.commit()

    rows = StockFuelReport(session).list_month("2025-07")
    assert sum(row.total for row in rows) == 0
    assert sum(row.fuel_in for row in rows) == 0


def test_invalid_stored_date_raises(session):
    _fuel_in(session, "not a date", "MJSU", 10.0)
    session.commit()
    with pytest.raises(ValueError):
        StockFuelReport(session).list_month("2025-07")