"""Fuel ratio records: fuel refilled into a unit during one shift of work."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any

from sqlalchemy import String, cast, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, aliased, selectinload

from .models import FuelRatio, RecordNotFound, Series, Unit
from .pagination import Pagination

_UNIT = aliased(Unit, name="u")

_EAGER = (
    selectinload(FuelRatio.unit).selectinload(Unit.brand),
    selectinload(FuelRatio.unit).selectinload(Unit.heavy_equipment),
    selectinload(FuelRatio.unit)
    .selectinload(Unit.series)
    .selectinload(Series.brand),
    selectinload(FuelRatio.unit)
    .selectinload(Unit.series)
    .selectinload(Series.heavy_equipment),
)

_TRUE_WORDS = frozenset({"true", "t", "1", "yes", "y", "on"})
_FALSE_WORDS = frozenset({"false", "f", "0", "no", "n", "off"})


def null_if_empty(value: str | None) -> str | None:
    """Return ``None`` for a missing or blank string, the string itself otherwise."""
    if value is None or not value.strip():
        return None
    return value


@dataclass
class FuelRatioInput:
    """Data needed to record or update a fuel ratio entry."""

    unit_id: int
    operator_name: str
    shift: str = ""
    tanggal: str | None = None
    first_hm: float = 0.0
    last_hm: float = 0.0
    tanggal_awal: str | None = None
    tanggal_akhir: str | None = None
    total_refill: int = 0
    status: bool = False

    def __post_init__(self) -> None:
        if not self.unit_id:
            raise ValueError("unit_id is required")
        if not self.operator_name:
            raise ValueError("operator_name is required")


@dataclass
class FuelRatioFilter:
    """Sorting and filtering of the paged fuel ratio listing.

    ``unit_id`` matches part of the unit's name. ``tanggal`` matches the
    record's date exactly or the start of its starting timestamp.
    """

    field: str = ""
    sort: str = ""
    unit_id: str = ""
    operator_name: str = ""
    shift: str = ""
    tanggal: str = ""
    status: str = ""


def _sort_columns() -> dict[str, Any]:
    columns: dict[str, Any] = {}
    for column in FuelRatio.__table__.columns:
        columns[column.name] = column
        columns[f"fuel_ratios.{column.name}"] = column
    columns["u.unit_name"] = _UNIT.unit_name
    columns["unit_name"] = _UNIT.unit_name
    return columns


_SORT_COLUMNS = _sort_columns()


def _ordering(sort_filter: FuelRatioFilter) -> Any:
    if not (sort_filter.field and sort_filter.sort):
        return FuelRatio.id.desc()
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


def _as_bool(value: str) -> bool:
    word = value.strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise ValueError(f"status must be true or false, got {value!r}")


class FuelRatioRepository:
    """Stores and looks up fuel ratio records in a database session."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def _commit(self) -> None:
        try:
            self._session.commit()
        except SQLAlchemyError:
            self._session.rollback()
            raise

    def _get(self, ratio_id: int, *options: Any) -> FuelRatio:
        statement = (
            select(FuelRatio)
            .where(FuelRatio.id == ratio_id, FuelRatio.deleted_at.is_(None))
            .order_by(FuelRatio.id)
            .limit(1)
            .options(*options)
        )
        ratio = self._session.scalars(statement).first()
        if ratio is None:
            raise RecordNotFound("record not found")
        return ratio

    def create(self, data: FuelRatioInput) -> FuelRatio:
        """Store a new record; blank dates are stored as missing."""
        values = asdict(data)
        for name in ("tanggal", "tanggal_awal", "tanggal_akhir"):
            values[name] = null_if_empty(values[name])
        ratio = FuelRatio(**values)
        self._session.add(ratio)
        self._commit()
        return ratio

    def find_all(self) -> list[FuelRatio]:
        """All records that are not deleted, with their units loaded."""
        statement = (
            select(FuelRatio)
            .where(FuelRatio.deleted_at.is_(None))
            .order_by(FuelRatio.id)
            .options(*_EAGER)
        )
        return list(self._session.scalars(statement))

    def find_by_id(self, ratio_id: int) -> FuelRatio:
        """The record with this id; raises RecordNotFound if there is none."""
        return self._get(ratio_id, *_EAGER)

    def list_page(self, page: int, sort_filter: FuelRatioFilter) -> Pagination:
        """One page of records matching ``sort_filter``, newest first by default."""
        statement = (
            select(FuelRatio)
            .join(_UNIT, FuelRatio.unit_id == _UNIT.id)
            .where(FuelRatio.deleted_at.is_(None))
            .options(*_EAGER)
        )
        if sort_filter.unit_id:
            statement = statement.where(
                cast(_UNIT.unit_name, String).contains(sort_filter.unit_id)
            )
        if sort_filter.operator_name:
            statement = statement.where(
                func.lower(FuelRatio.operator_name).contains(
                    sort_filter.operator_name.lower()
                )
            )
        if sort_filter.shift:
            statement = statement.where(
                cast(FuelRatio.shift, String).contains(sort_filter.shift)
            )
        if sort_filter.tanggal:
            statement = statement.where(
                or_(
                    FuelRatio.tanggal == sort_filter.tanggal,
                    FuelRatio.tanggal_awal.like(f"{sort_filter.tanggal}%"),
                )
            )
        if sort_filter.status:
            statement = statement.where(
                FuelRatio.status == _as_bool(sort_filter.status)
            )
        statement = statement.order_by(_ordering(sort_filter))
        return Pagination(page=page).fill(self._session, statement)

    def update(self, data: FuelRatioInput, ratio_id: int) -> FuelRatio:
        """Overwrite every field of an existing record with ``data``."""
        ratio = self._get(ratio_id)
        for name, value in asdict(data).items():
            setattr(ratio, name, value)
        self._commit()
        return ratio

    def delete(self, ratio_id: int) -> bool:
        """Mark a record as deleted; raises RecordNotFound if there is none."""
        ratio = self._get(ratio_id)
        ratio.deleted_at = datetime.now()
        self._commit()
        return True