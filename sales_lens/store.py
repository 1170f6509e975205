"""
SalesStore - loads the sales JSON file into memory and keeps it fresh.

The store owns an immutable snapshot (records + derived indexes) that is
rebuilt wholesale whenever the file's modification time advances. Readers
grab the snapshot reference once and work on it; a reload swaps in a new
snapshot with a single assignment.
"""

import json
import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Dict, List, Mapping, NamedTuple, Optional, Tuple

import pandas as pd

from .base import DataLoadError
from .utils import clean_text, format_date, match_key, parse_dates, to_number

logger = logging.getLogger(__name__)

# Query-frame column -> source record field
TEXT_FIELDS = {
    'state': 'State',
    'city': 'City',
    'category': 'Category',
    'sub_category': 'Sub-Category',
    'segment': 'Segment',
    'product': 'Product Name',
    'region': 'Region',
    'ship_mode': 'Ship Mode',
}
METRIC_FIELDS = {
    'sales': 'Sales',
    'quantity': 'Quantity',
    'discount': 'Discount',
    'profit': 'Profit',
}
ORDER_DATE_FIELD = 'Order Date'


class DateRange(NamedTuple):
    min_date: str
    max_date: str


@dataclass(frozen=True)
class Snapshot:
    """One consistent load of the dataset: raw records plus everything derived from them."""

    records: Tuple[Dict, ...]
    frame: pd.DataFrame
    states: Tuple[str, ...]
    date_ranges: Mapping[str, DateRange]
    mtime_ns: int

    def __len__(self):
        return len(self.records)


def build_frame(records: List[Dict]) -> pd.DataFrame:
    """
    Build the query frame: one row per record, in record order.

    Text columns are trimmed (blank -> None), state and city get lowercase
    match keys, metrics are floats with absent/non-numeric values as 0, and
    order_date is a midnight timestamp or NaT.
    """
    columns = {}
    for column, field in TEXT_FIELDS.items():
        columns[column] = pd.Series([clean_text(r.get(field)) for r in records], dtype=object)
    columns['state_key'] = pd.Series([match_key(r.get('State')) for r in records], dtype=object)
    columns['city_key'] = pd.Series([match_key(r.get('City')) for r in records], dtype=object)
    for column, field in METRIC_FIELDS.items():
        columns[column] = pd.Series([to_number(r.get(field)) for r in records], dtype=float)
    columns['order_date'] = parse_dates([r.get(ORDER_DATE_FIELD) for r in records])
    return pd.DataFrame(columns)


def build_state_index(frame: pd.DataFrame) -> Tuple[str, ...]:
    """Sorted distinct non-blank states."""
    return tuple(sorted(set(frame['state'].dropna())))


def build_date_ranges(frame: pd.DataFrame) -> Mapping[str, DateRange]:
    """Min/max parseable order date per state, keyed by the state's match key."""
    dated = frame.loc[frame['state_key'].notna() & frame['order_date'].notna()]
    bounds = dated.groupby('state_key')['order_date'].agg(['min', 'max'])
    ranges = {
        key: DateRange(format_date(row['min']), format_date(row['max']))
        for key, row in bounds.iterrows()
    }
    return MappingProxyType(ranges)


class SalesStore:
    """
    Read-only, reloadable in-memory copy of a sales JSON file.

    Usage:
        store = SalesStore('data/sales.json')
        snapshot = store.ensure_fresh()
        snapshot.states  # ('Alabama', 'Arizona', ...)
    """

    def __init__(self, path):
        self.path = Path(path)
        self.load_count = 0
        self._snapshot: Optional[Snapshot] = None
        self._lock = threading.Lock()
        self._watch_stop: Optional[threading.Event] = None
        self._watch_thread: Optional[threading.Thread] = None

    @property
    def snapshot(self) -> Optional[Snapshot]:
        """The last successfully loaded snapshot, or None before the first load."""
        return self._snapshot

    def ensure_fresh(self) -> Snapshot:
        """
        Return a snapshot that reflects the file as of its current modification time.

        If the file hasn't changed since the last successful load this is just a
        stat() call. Otherwise the file is read and all indexes are rebuilt.

        Raises:
            DataLoadError: if the file can't be stat'ed, read or parsed. The
                previous snapshot (if any) stays in place.
        """
        mtime_ns = self._stat_mtime()
        snapshot = self._snapshot
        if snapshot is not None and mtime_ns <= snapshot.mtime_ns:
            return snapshot

        with self._lock:
            snapshot = self._snapshot
            if snapshot is not None and mtime_ns <= snapshot.mtime_ns:
                return snapshot
            reloading = snapshot is not None
            snapshot = self._load(mtime_ns)
            self._snapshot = snapshot
            self.load_count += 1

        if reloading:
            logger.info("Reloaded %d sales records from %s", len(snapshot), self.path)
        else:
            logger.info("Loaded %d sales records from %s", len(snapshot), self.path)
        return snapshot

    def _stat_mtime(self) -> int:
        try:
            return self.path.stat().st_mtime_ns
        except OSError as e:
            raise DataLoadError(f"Failed to load sales data: {e}") from e

    def _load(self, mtime_ns: int) -> Snapshot:
        logger.debug("Loading sales data from %s", self.path)
        try:
            with self.path.open(encoding='utf-8') as f:
                records = json.load(f)
        except (OSError, ValueError) as e:
            logger.error("Error loading sales data from %s: %s", self.path, e)
            raise DataLoadError(f"Failed to load sales data: {e}") from e

        if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
            logger.error("Sales data in %s is not a JSON array of objects", self.path)
            raise DataLoadError("Failed to load sales data: expected a JSON array of objects")

        frame = build_frame(records)
        return Snapshot(
            records=tuple(records),
            frame=frame,
            states=build_state_index(frame),
            date_ranges=build_date_ranges(frame),
            mtime_ns=mtime_ns,
        )

    # --- File watching ---

    def start_watching(self, interval: float = 1.0):
        """
        Poll the file in a daemon thread and reload it when it changes.

        The watcher only shortens staleness: every query calls ensure_fresh()
        anyway. Load failures are logged and polling continues.
        """
        if self._watch_thread is not None and self._watch_thread.is_alive():
            return
        self._watch_stop = threading.Event()
        self._watch_thread = threading.Thread(
            target=self._watch,
            args=(self._watch_stop, interval),
            name='sales-store-watcher',
            daemon=True,
        )
        self._watch_thread.start()
        logger.info("Watching %s for changes every %.1fs", self.path, interval)

    def stop_watching(self):
        """Stop the watcher thread if one is running."""
        if self._watch_stop is not None:
            self._watch_stop.set()
        if self._watch_thread is not None:
            self._watch_thread.join(timeout=5)
        self._watch_stop = None
        self._watch_thread = None

    @property
    def watching(self) -> bool:
        return self._watch_thread is not None and self._watch_thread.is_alive()

    def _watch(self, stop: threading.Event, interval: float):
        while not stop.wait(interval):
            try:
                self.ensure_fresh()
            except DataLoadError as e:
                logger.warning("Sales data watcher could not reload %s: %s", self.path, e)
