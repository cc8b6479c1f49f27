# mrpfleet

Record-keeping for a heavy-equipment fleet: the units on site, fuel
deliveries coming in, fuel handed out per shift, and a day-by-day fuel
stock report for any month.

The package is a library built on SQLAlchemy 2.0. It has no command line.

## Installing

```
pip install .
```

For running the tests:

```
pip install .[test]
pytest
```

## Tables

- `mrpfleet.models` holds the main tables: `Brand`, `HeavyEquipment`,
  `Series`, `Unit`, `AlatBerat` (fuel consumption per hour and tolerance in
  percent for a brand, equipment type and series), `AdjustStock` (a stock
  level recorded by hand for one day), `FuelIn`, `FuelRatio` and
  `StockFuel`. Every table has `id`, `created_at`, `updated_at` and
  `deleted_at`; a row with `deleted_at` set counts as deleted.
- `mrpfleet.master` holds the personnel and reference tables: `APD`, `Bank`,
  `BPJSKesehatan`, `BPJSKetenagakerjaan`, `Department`, `Position`, `Role`,
  `DepartmentForm`, `DOH`, `Form`, `History`, `Jabatan`, `KartuKeluarga`,
  `KTP`, `Laporan`, `MCU`, `NPWP`, `Pendidikan`, `RoleForm`, `Sertifikat`
  and `UserRole`.
- `create_schema(engine)` in `mrpfleet.models` creates every table of both
  modules.

## Repositories

`mrpfleet.unit.UnitRepository`, `mrpfleet.fuelin.FuelInRepository` and
`mrpfleet.fuelratio.FuelRatioRepository` each wrap a `Session` and offer:

- `create(data)` – store a new row from `UnitInput`, `FuelInInput` or
  `FuelRatioInput`. `FuelRatioInput` raises `ValueError` without a
  `unit_id` or `operator_name`, and `create` stores blank dates as `None`.
- `find_all()` – every row that is not deleted.
- `find_by_id(id)` – one row; raises `mrpfleet.models.RecordNotFound` if it
  is missing or deleted.
- `list_page(page, sort_filter)` – a `mrpfleet.pagination.Pagination` with
  seven rows per page, holding `total_rows`, `total_pages` and `data`. The
  filters are `UnitFilter`, `FuelInFilter` and `FuelRatioFilter`; `field`
  and `sort` (`asc` or `desc`) pick the ordering, and an unknown column or
  direction raises `ValueError`. Units are listed by name by default, fuel
  deliveries and fuel ratios newest first.
- `update(data, id)` – overwrite every field of an existing row.
- `delete(id)` – soft delete; returns `True`, or raises `RecordNotFound`.

## Fuel ratio summary

`mrpfleet.fuelratio_summary.FuelRatioSummary` adds up active fuel ratio
records per unit and shift. Only units whose brand, equipment type and
series have an `AlatBerat` rate appear. Each `SummaryRow` holds the total
refill, the hours worked (from `tanggal_awal`/`tanggal_akhir` when both are
set, otherwise `last_hm - first_hm`), the lower and upper fuel bounds
(`batas_bawah`, `batas_atas`) and `total_konsumsi_bbm`.

- `export(sort_filter)` returns every row, by unit name descending unless
  the `SummaryFilter` says otherwise.
- `list_page(page, sort_filter)` returns seven rows per page; a page below 1
  raises `ValueError`.

`SummaryFilter.first_hm` and `last_hm` take `YYYY-MM-DD HH:MM:SS` bounds; a
bound that does not parse is ignored. The other text fields match part of
the column's text without regard to case.

## Daily stock report

`mrpfleet.stockfuel.StockFuelReport(session).list_month("2025-07")` returns
one `StockFuelRow` per day of the month. Each row carries the opening stock,
day shift (`"Shift 1"`) and night shift (`"Shift 2"`) usage, fuel received
in total and from the vendors MJSU, PPP and SADP, the closing stock and the
month-to-date consumption, and the date written out in Indonesian, for
example "Selasa, 01 Juli 2025". The first day opens with the stock carried
over from the previous month; a day with an `AdjustStock` entry opens with
that stock instead. `plan_permintaan`, `btp` and `surplus` are always 0.

`month_bounds(month)` and `format_indonesian_date(day)` are available on
their own; `month_bounds` raises `ValueError` for an empty or malformed
month.

## Validators

`mrpfleet.validators` holds field checks: `check_enum(value, param)` for
underscore-separated option lists, `validation_period` for values such as
"Jan 2025", `check_date_string` for `YYYY-MM-DD` or
`YYYY-MM-DDT00:00:00Z`, and `validate_struct`, which turns
`(namespace, tag, value)` failures into `FieldError` records.

## Example

```python
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from mrpfleet.models import create_schema
from mrpfleet.fuelin import FuelInInput, FuelInFilter, FuelInRepository

engine = create_engine("sqlite://")
create_schema(engine)

with Session(engine) as session:
    repo = FuelInRepository(session)
    repo.create(FuelInInput(date="2025-07-01", vendor="PPP", qty=5000, qty_now=5000))
    page = repo.list_page(1, FuelInFilter(vendor="PPP"))
    print(page.total_rows, page.total_pages)
```

## What it does not do

- There is no HTTP API, server or command line; the package is used from
  Python code.
- There are no user accounts, logins, passwords or access tokens.
- The master-data tables in `mrpfleet.master` have no repositories; they
  are read and written with plain SQLAlchemy sessions.
- `AlatBerat`, `AdjustStock` and the equipment tables (`Brand`,
  `HeavyEquipment`, `Series`) have no repositories either.
- Nothing is exported to spreadsheets or other files.