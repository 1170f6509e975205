"""
FilterEngine - turns request filters into a boolean mask over the query frame.
Filters are plain spec dicts kept in a list and compose with AND.
"""

import logging
from typing import Dict, List, Optional

import pandas as pd

from .utils import clean_text, match_key, parse_date

logger = logging.getLogger(__name__)


class FilterEngine:
    """
    Builds and applies filter specs against a query frame.

    Data is passed in at apply time - the engine doesn't own the data.

    Spec shapes:
        {'param': 'state', 'field': 'state_key', 'match': 'equals', 'condition': 'georgia', 'value': ' Georgia '}
        {'param': 'city', 'field': 'city_key', 'match': 'contains', 'condition': 'atl', 'value': 'Atl'}
        {'param': 'date', 'field': 'order_date', 'match': 'date_range', 'start': Timestamp|None, 'end': Timestamp|None}

    Usage:
        engine = FilterEngine.from_params(state='Georgia', start_date='2016-01-01')
        mask = engine.apply(snapshot.frame)
        rows = snapshot.frame[mask]
    """

    def __init__(self):
        self.active_filters: List[Dict] = []
        self._applied: Dict[str, str] = {}

    @classmethod
    def from_params(cls, state: Optional[str] = None, city: Optional[str] = None,
                    start_date: Optional[str] = None, end_date: Optional[str] = None) -> 'FilterEngine':
        """
        Build an engine from raw request parameters. Blank parameters are skipped.

        A date bound that doesn't parse is ignored, but the date filter still
        applies, so records without a parseable order date are dropped.
        """
        engine = cls()
        if clean_text(state):
            engine.add_filter({'param': 'state', 'field': 'state_key', 'match': 'equals',
                               'condition': match_key(state), 'value': state})
        if clean_text(city):
            engine.add_filter({'param': 'city', 'field': 'city_key', 'match': 'contains',
                               'condition': match_key(city), 'value': city})
        if clean_text(start_date) or clean_text(end_date):
            engine.add_date_range(start_date, end_date)
        return engine

    def add_filter(self, filter_spec: Dict):
        """Add a filter spec to the stack and record the parameter it came from."""
        self.active_filters.append(filter_spec)
        if filter_spec['match'] != 'date_range':
            self._applied[filter_spec['param']] = filter_spec['value']

    def add_date_range(self, start_date: Optional[str], end_date: Optional[str]):
        """Add an inclusive order-date range. Either bound may be blank."""
        start = _parse_bound('startDate', start_date)
        end = _parse_bound('endDate', end_date)
        self.add_filter({'param': 'date', 'field': 'order_date', 'match': 'date_range',
                         'start': start, 'end': end})
        if start is not None:
            self._applied['startDate'] = start_date
        if end is not None:
            self._applied['endDate'] = end_date

    def get_active_filters(self) -> Dict[str, str]:
        """Applied request parameters by name (state, city, startDate, endDate)."""
        return dict(self._applied)

    def apply(self, frame: pd.DataFrame) -> pd.Series:
        """
        Apply all filters to the frame.

        Args:
            frame: Query frame built by the store

        Returns:
            Boolean Series aligned with the frame's rows
        """
        mask = pd.Series(True, index=frame.index)
        for filter_spec in self.active_filters:
            mask &= self._apply_single(frame, filter_spec)
        return mask

    def _apply_single(self, frame: pd.DataFrame, filter_spec: Dict) -> pd.Series:
        match = filter_spec['match']
        column = frame[filter_spec['field']]

        if match == 'equals':
            return column == filter_spec['condition']
        if match == 'contains':
            condition = filter_spec['condition']
            return column.map(lambda v: v is not None and condition in v).astype(bool)
        if match == 'date_range':
            return self._apply_date_range(column, filter_spec['start'], filter_spec['end'])
        raise ValueError(f"Unknown filter match: {match}")

    def _apply_date_range(self, column: pd.Series, start, end) -> pd.Series:
        # records without a parseable order date never satisfy a date filter
        mask = column.notna()
        if start is not None:
            mask &= column >= start
        if end is not None:
            mask &= column <= end
        return mask


def _parse_bound(name, value):
    if not clean_text(value):
        return None
    parsed = parse_date(value)
    if parsed is None:
        logger.warning("Ignoring unparseable %s: %r", name, value)
    return parsed
