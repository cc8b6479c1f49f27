"""Fuel deliveries received from vendors."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any

from sqlalchemy import String, cast, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .models import FuelIn, RecordNotFound
from .pagination import Pagination


@dataclass
class FuelInInput:
    """Data needed to record or update a fuel delivery."""

    date: str = ""
    vendor: str = ""
    code: str = ""
    nomor_surat_jalan: str = ""
    nomor_plat_mobil: str = ""
    qty: float = 0.0
    qty_now: float = 0.0
    driver: str = ""
    tujuan_awal: str = ""


@dataclass
class FuelInFilter:
    """Sorting and filtering of the paged delivery listing.

    ``date`` is accepted but does not restrict the listing.
    """

    field: str = ""
    sort: str = ""
    date: str = ""
    vendor: str = ""
    code: str = ""
    nomor_surat_jalan: str = ""
    nomor_plat_mobil: str = ""
    qty: str = ""
    qty_now: str = ""
    driver: str = ""
    tujuan_awal: str = ""


_SORT_COLUMNS: dict[str, Any] = {}
for _column in FuelIn.__table__.columns:
    _SORT_COLUMNS[_column.name] = _column
    _SORT_COLUMNS[f"fuel_ins.{_column.name}"] = _column

# Text columns matched case-sensitively and case-insensitively by substring.
_CONTAINS_FIELDS = ("vendor", "code", "tujuan_awal")
_INSENSITIVE_FIELDS = ("nomor_surat_jalan", "nomor_plat_mobil", "driver")


def _ordering(sort_filter: FuelInFilter) -> Any:
    if not (sort_filter.field and sort_filter.sort):
        return FuelIn.id.desc()
    try:
        column = _SORT_COLUMNS[sort_filter.field]
    except KeyError:
        raise ValueError(f"cannot sort by {sort_filter.field!r}") from None
    direction = sort_filter.sort.lower()
    if direction == "asc":
        return column.asc()
    if direction == "desc":
        return column.desc()
    raise ValueError(f"unknown sort direction {sort_filter.sort!r}")


def _as_number(value: str, name: str) -> float:
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {value!r}") from None


class FuelInRepository:
    """Stores and looks up fuel deliveries in a database session."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def _commit(self) -> None:
        try:
            self._session.commit()
        except SQLAlchemyError:
            self._session.rollback()
            raise

    def create(self, data: FuelInInput) -> FuelIn:
        """Store a new delivery and return it."""
        fuel_in = FuelIn(**asdict(data))
        self._session.add(fuel_in)
        self._commit()
        return fuel_in

    def find_all(self) -> list[FuelIn]:
        """All deliveries that are not deleted."""
        statement = (
            select(FuelIn).where(FuelIn.deleted_at.is_(None)).order_by(FuelIn.id)
        )
        return list(self._session.scalars(statement))

    def find_by_id(self, fuel_in_id: int) -> FuelIn:
        """The delivery with this id; raises RecordNotFound if there is none."""
        statement = (
            select(FuelIn)
            .where(FuelIn.id == fuel_in_id, FuelIn.deleted_at.is_(None))
            .order_by(FuelIn.id)
            .limit(1)
        )
        fuel_in = self._session.scalars(statement).first()
        if fuel_in is None:
            raise RecordNotFound("record not found")
        return fuel_in

    def list_page(self, page: int, sort_filter: FuelInFilter) -> Pagination:
        """One page of deliveries matching ``sort_filter``, newest first by default."""
        statement = select(FuelIn).where(FuelIn.deleted_at.is_(None))
        filters = asdict(sort_filter)
        for name in _CONTAINS_FIELDS:
            value = filters[name]
            if value:
                column = _SORT_COLUMNS[name]
                statement = statement.where(cast(column, String).contains(value))
        for name in _INSENSITIVE_FIELDS:
            value = filters[name]
            if value:
                column = _SORT_COLUMNS[name]
                statement = statement.where(cast(column, String).ilike(f"%{value}%"))
        if sort_filter.qty:
            statement = statement.where(
                FuelIn.qty == _as_number(sort_filter.qty, "qty")
            )
        if sort_filter.qty_now:
            statement = statement.where(
                FuelIn.qty_now == _as_number(sort_filter.qty_now, "qty_now")
            )
        statement = statement.order_by(_ordering(sort_filter))
        return Pagination(page=page).fill(self._session, statement)

    def update(self, data: FuelInInput, fuel_in_id: int) -> FuelIn:
        """Overwrite every field of an existing delivery with ``data``."""
        fuel_in = self.find_by_id(fuel_in_id)
        for name, value in asdict(data).items():
            setattr(fuel_in, name, value)
        self._commit()
        return fuel_in

    def delete(self, fuel_in_id: int) -> bool:
        """Mark a delivery as deleted; raises RecordNotFound if there is none."""
        fuel_in = self.find_by_id(fuel_in_id)
        fuel_in.deleted_at = datetime.now()
        self._commit()
        return True