"""Fleet fuel tracking for heavy equipment: tables, repositories, fuel summaries and daily stock reports."""

__version__ = "0.1.0"