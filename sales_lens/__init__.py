from .base import SalesLensError, DataLoadError, ValidationError, NotFoundError
from .utils import clean_text, match_key, parse_dates, parse_date, format_date, round_half_away
from .config import Settings, configure_logging
from .store import SalesStore, Snapshot, DateRange
from .filter_engine import FilterEngine
from .query_engine import SalesQueryEngine, BREAKDOWN_DIMENSIONS
from .charts import sales_by_city_figure, breakdown_donut_figure, figure_payload
from .api import create_app

__all__ = [
    "SalesLensError",
    "DataLoadError",
    "ValidationError",
    "NotFoundError",
    "clean_text",
    "match_key",
    "parse_dates",
    "parse_date",
    "format_date",
    "round_half_away",
    "Settings",
    "configure_logging",
    "SalesStore",
    "Snapshot",
    "DateRange",
    "FilterEngine",
    "SalesQueryEngine",
    "BREAKDOWN_DIMENSIONS",
    "sales_by_city_figure",
    "breakdown_donut_figure",
    "figure_payload",
    "create_app",
]
