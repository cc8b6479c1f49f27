"""Database tables for heavy equipment, units and fuel records."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import ForeignKey
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class RecordNotFound(LookupError):
    """Raised when a requested record does not exist or has been deleted."""


class Base(DeclarativeBase):
    """Declarative base; every table carries an id, timestamps and a soft-delete mark."""

    id: Mapped[int] = mapped_column(primary_key=True)
    created_at: Mapped[datetime | None] = mapped_column(default=datetime.now)
    updated_at: Mapped[datetime | None] = mapped_column(
        default=datetime.now, onupdate=datetime.now
    )
    deleted_at: Mapped[datetime | None] = mapped_column(default=None, index=True)


class Brand(Base):
    __tablename__ = "brands"

    brand_name: Mapped[str] = mapped_column(default="")


class HeavyEquipment(Base):
    __tablename__ = "heavy_equipments"

    brand_id: Mapped[int] = mapped_column(ForeignKey("brands.id"))
    heavy_equipment_name: Mapped[str] = mapped_column(default="")

    brand: Mapped[Brand] = relationship()


class Series(Base):
    __tablename__ = "series"

    series_name: Mapped[str] = mapped_column(default="")
    brand_id: Mapped[int] = mapped_column(ForeignKey("brands.id"))
    heavy_equipment_id: Mapped[int] = mapped_column(ForeignKey("heavy_equipments.id"))

    brand: Mapped[Brand] = relationship()
    heavy_equipment: Mapped[HeavyEquipment] = relationship()


class Unit(Base):
    __tablename__ = "units"

    unit_name: Mapped[str] = mapped_column(default="")
    brand_id: Mapped[int] = mapped_column(ForeignKey("brands.id"))
    heavy_equipment_id: Mapped[int] = mapped_column(ForeignKey("heavy_equipments.id"))
    series_id: Mapped[int] = mapped_column(ForeignKey("series.id"))

    brand: Mapped[Brand] = relationship()
    heavy_equipment: Mapped[HeavyEquipment] = relationship()
    series: Mapped[Series] = relationship()


class AlatBerat(Base):
    """Fuel consumption rate per hour, with a tolerance in percent, for an equipment model."""

    __tablename__ = "alat_berats"

    brand_id: Mapped[int] = mapped_column(ForeignKey("brands.id"))
    heavy_equipment_id: Mapped[int] = mapped_column(ForeignKey("heavy_equipments.id"))
    series_id: Mapped[int] = mapped_column(ForeignKey("series.id"))
    consumption: Mapped[float] = mapped_column(default=0.0)
    tolerance: Mapped[float] = mapped_column(default=0.0)


class AdjustStock(Base):
    """A stock level recorded by hand for one day."""

    __tablename__ = "adjust_stocks"

    date: Mapped[str] = mapped_column(default="")
    stock: Mapped[float] = mapped_column(default=0.0)


class FuelIn(Base):
    __tablename__ = "fuel_ins"

    date: Mapped[str] = mapped_column(default="")
    vendor: Mapped[str] = mapped_column(default="")
    code: Mapped[str] = mapped_column(default="")
    nomor_surat_jalan: Mapped[str] = mapped_column(default="")
    nomor_plat_mobil: Mapped[str] = mapped_column(default="")
    qty: Mapped[float] = mapped_column(default=0.0)
    qty_now: Mapped[float] = mapped_column(default=0.0)
    driver: Mapped[str] = mapped_column(default="")
    tujuan_awal: Mapped[str] = mapped_column(default="")


class FuelRatio(Base):
    __tablename__ = "fuel_ratios"

    unit_id: Mapped[int] = mapped_column(ForeignKey("units.id"))
    operator_name: Mapped[str] = mapped_column(default="")
    shift: Mapped[str] = mapped_column(default="")
    tanggal: Mapped[str | None] = mapped_column(default=None)
    first_hm: Mapped[float] = mapped_column(default=0.0)
    last_hm: Mapped[float] = mapped_column(default=0.0)
    tanggal_awal: Mapped[str | None] = mapped_column(default=None)
    tanggal_akhir: Mapped[str | None] = mapped_column(default=None)
    total_refill: Mapped[int] = mapped_column(default=0)
    status: Mapped[bool] = mapped_column(default=False)

    unit: Mapped[Unit] = relationship()


class StockFuel(Base):
    __tablename__ = "stock_fuels"

    date: Mapped[str] = mapped_column(default="")
    first_stock: Mapped[float] = mapped_column(default=0.0)
    day: Mapped[float] = mapped_column(default=0.0)
    night: Mapped[float] = mapped_column(default=0.0)
    total: Mapped[float] = mapped_column(default=0.0)
    grand_total: Mapped[float] = mapped_column(default=0.0)
    fuel_in: Mapped[float] = mapped_column(default=0.0)
    end_stock: Mapped[float] = mapped_column(default=0.0)
    mtd_consump: Mapped[float] = mapped_column(default=0.0)
    plan_permintaan: Mapped[float] = mapped_column(default=0.0)
    mjsu: Mapped[float] = mapped_column(default=0.0)
    ppp: Mapped[float] = mapped_column(default=0.0)
    sadp: Mapped[float] = mapped_column(default=0.0)
    btp: Mapped[float] = mapped_column(default=0.0)
    surplus: Mapped[float] = mapped_column(default=0.0)


def create_schema(engine: Engine) -> None:
    """Create every table of the package, master data included."""
    from . import master  # noqa: F401  (registers the master-data tables)

    Base.metadata.create_all(engine)