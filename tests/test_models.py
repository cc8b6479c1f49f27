import pytest
from sqlalchemy import create_engine, inspect, select
from sqlalchemy.orm import Session

from mrpfleet.models import (
    AlatBerat,
    Brand,
    FuelIn,
    FuelRatio,
    HeavyEquipment,
    Series,
    StockFuel,
    Unit,
    create_schema,
)


@pytest.fixture
def engine():
    engine = create_engine("sqlite://")
    create_schema(engine)
    return engine


@pytest.fixture
def session(engine):
    with Session(engine) as db:
        yield db


def _unit(session):
    brand = Brand(brand_name="Komatsu")
    equipment = HeavyEquipment(brand=brand, heavy_equipment_name="Excavator")
    series = Series(series_name="PC200", brand=brand, heavy_equipment=equipment)
    unit = Unit(unit_name="EX-01", brand=brand, heavy_equipment=equipment, series=series)
    session.add(unit)
    session.commit()
    return unit


def test_schema_has_fleet_and_master_tables(engine):
    tables = set(inspect(engine).get_table_names())
    assert {"fuel_ins", "fuel_ratios", "units", "alat_berats", "adjust_stocks"} <= tables
    assert {"user_roles", "forms", "departments"} <= tables


def test_unit_relationships_round_trip(session):
    unit = _unit(session)
    session.expire_all()
    loaded = session.scalars(select(Unit).where(Unit.id == unit.id)).one()
    assert loaded.brand.brand_name == "Komatsu"
    assert loaded.heavy_equipment.heavy_equipment_name == "Excavator"
    assert loaded.series.series_name == "PC200"
    assert loaded.series.brand_id == loaded.brand_id


def test_new_record_gets_timestamps_and_no_deletion(session):
    brand = Brand(brand_name="Hitachi")
    session.add(brand)
    session.commit()
    assert brand.created_at is not None and brand.updated_at is not None
    assert brand.deleted_at is None


def test_fuel_ratio_dates_may_be_null(session):
    unit = _unit(session)
    ratio = FuelRatio(unit=unit, operator_name="Budi", shift="Shift 1", total_refill=120)
    session.add(ratio)
    session.commit()
    session.expire_all()
    loaded = session.get(FuelRatio, ratio.id)
    assert loaded.tanggal is None and loaded.tanggal_awal is None
    assert loaded.status is False
    assert loaded.unit.unit_name == "EX-01"


def test_fuel_in_defaults_are_zero_values(session):
    record = FuelIn(vendor="MJSU", qty=500.0)
    session.add(record)
    session.commit()
    assert record.qty_now == 0.0
    assert record.driver == ""
    assert record.qty == 500.0


def test_stock_fuel_round_trip(session):
    stock = StockFuel(date="2025-07-01", first_stock=1000.0, fuel_in=200.0, end_stock=900.0)
    session.add(stock)
    session.commit()
    session.expire_all()
    loaded = session.scalars(select(StockFuel)).one()
    assert (loaded.first_stock, loaded.fuel_in, loaded.end_stock) == (1000.0, 200.0, 900.0)
    assert loaded.surplus == 0.0


def test_alat_berat_links_equipment_model(session):
    unit = _unit(session)
    session.add(
        AlatBerat(
            brand_id=unit.brand_id,
            heavy_equipment_id=unit.heavy_equipment_id,
            series_id=unit.series_id,
            consumption=12.5,
            tolerance=10.0,
        )
    )
    session.commit()
    rate = session.scalars(
        select(AlatBerat).where(AlatBerat.series_id == unit.series_id)
    ).one()
    assert rate.consumption == 12.5
    assert rate.tolerance == 10.0