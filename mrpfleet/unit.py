"""Units: individual machines of a given brand, equipment type and series."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any

from sqlalchemy import String, cast, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, aliased, selectinload

from .models import HeavyEquipment, RecordNotFound, Series, Unit
from .pagination import Pagination

_EQUIPMENT = aliased(HeavyEquipment, name="he")
_SERIES = aliased(Series, name="s")

_EAGER = (
    selectinload(Unit.brand),
    selectinload(Unit.heavy_equipment),
    selectinload(Unit.series),
)


@dataclass
class UnitInput:
    """Data needed to register or update a unit."""

    unit_name: str
    brand_id: int
    heavy_equipment_id: int
    series_id: int


@dataclass
class UnitFilter:
    """Sorting and filtering of the paged unit listing.

    ``heavy_equipment_id`` and ``series_id`` match parts of the equipment
    and series names; ``brand_id`` must equal the brand's id.
    """

    field: str = ""
    sort: str = ""
    unit_name: str = ""
    brand_id: str = ""
    heavy_equipment_id: str = ""
    series_id: str = ""


def _sort_columns() -> dict[str, Any]:
    columns: dict[str, Any] = {}
    for column in Unit.__table__.columns:
        columns[column.name] = column
        columns[f"units.{column.name}"] = column
    columns["he.heavy_equipment_name"] = _EQUIPMENT.heavy_equipment_name
    columns["s.series_name"] = _SERIES.series_name
    return columns


_SORT_COLUMNS = _sort_columns()


def _ordering(sort_filter: UnitFilter) -> Any:
    if not (sort_filter.field and sort_filter.sort):
        return Unit.unit_name
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


def _as_int(value: str, name: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be a whole number, got {value!r}") from None


class UnitRepository:
    """Stores and looks up units in a database session."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def _commit(self) -> None:
        try:
            self._session.commit()
        except SQLAlchemyError:
            self._session.rollback()
            raise

    def _get(self, unit_id: int, *options: Any) -> Unit:
        statement = (
            select(Unit)
            .where(Unit.id == unit_id, Unit.deleted_at.is_(None))
            .order_by(Unit.id)
            .limit(1)
            .options(*options)
        )
        unit = self._session.scalars(statement).first()
        if unit is None:
            raise RecordNotFound("record not found")
        return unit

    def create(self, data: UnitInput) -> Unit:
        """Store a new unit and return it."""
        unit = Unit(**asdict(data))
        self._session.add(unit)
        self._commit()
        return unit

    def find_all(self) -> list[Unit]:
        """All units that are not deleted, ordered by name."""
        statement = (
            select(Unit)
            .where(Unit.deleted_at.is_(None))
            .order_by(Unit.unit_name)
            .options(*_EAGER)
        )
        return list(self._session.scalars(statement))

    def find_by_id(self, unit_id: int) -> Unit:
        """The unit with this id; raises RecordNotFound if there is none."""
        return self._get(unit_id, *_EAGER)

    def list_page(self, page: int, sort_filter: UnitFilter) -> Pagination:
        """One page of units matching ``sort_filter``."""
        statement = (
            select(Unit)
            .join(_EQUIPMENT, Unit.heavy_equipment_id == _EQUIPMENT.id)
            .join(_SERIES, Unit.series_id == _SERIES.id)
            .where(Unit.deleted_at.is_(None))
            .options(*_EAGER)
        )
        if sort_filter.unit_name:
            statement = statement.where(
                cast(Unit.unit_name, String).contains(sort_filter.unit_name)
            )
        if sort_filter.brand_id:
            statement = statement.where(
                Unit.brand_id == _as_int(sort_filter.brand_id, "brand_id")
            )
        if sort_filter.heavy_equipment_id:
            statement = statement.where(
                cast(_EQUIPMENT.heavy_equipment_name, String).contains(
                    sort_filter.heavy_equipment_id
                )
            )
        if sort_filter.series_id:
            statement = statement.where(
                cast(_SERIES.series_name, String).contains(sort_filter.series_id)
            )
        statement = statement.order_by(_ordering(sort_filter))
        return Pagination(page=page).fill(self._session, statement)

    def update(self, data: UnitInput, unit_id: int) -> Unit:
        """Overwrite every field of an existing unit with ``data``."""
        unit = self._get(unit_id)
        for name, value in asdict(data).items():
            setattr(unit, name, value)
        self._commit()
        return unit

    def delete(self, unit_id: int) -> bool:
        """Mark a unit as deleted; raises RecordNotFound if there is none."""
        unit = self._get(unit_id)
        unit.deleted_at = datetime.now()
        self._commit()
        return True