"""Page-by-page listing of query results."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session

DEFAULT_LIMIT = 7


@dataclass
class Pagination:
    """One page of a listing together with the totals of the whole listing."""

    limit: int = DEFAULT_LIMIT
    page: int = 1
    total_rows: int = 0
    total_pages: int = 0
    data: list[Any] = field(default_factory=list)

    def _normalise(self) -> None:
        if self.limit == 0:
            self.limit = DEFAULT_LIMIT
        if self.page == 0:
            self.page = 1

    def offset(self) -> int:
        """Number of rows that come before the current page."""
        self._normalise()
        return (self.page - 1) * self.limit

    def fill(self, session: Session, statement: Select) -> Pagination:
        """Count the rows of ``statement`` and load the current page of them."""
        self._normalise()
        counting = select(func.count()).select_from(statement.order_by(None).subquery())
        self.total_rows = session.scalar(counting) or 0
        self.total_pages = math.ceil(self.total_rows / self.limit)

        result = session.execute(statement.offset(self.offset()).limit(self.limit))
        if len(statement.column_descriptions) == 1:
            self.data = list(result.scalars())
        else:
            self.data = [dict(row) for row in result.mappings()]
        return self