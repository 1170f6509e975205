"""
SalesQueryEngine - the read-side queries behind the dashboard API.
Every query refreshes the store first, then works on one snapshot from start to finish.
"""

import math
from typing import Dict, List, Optional

import numpy as np

from .base import ValidationError
from .filter_engine import FilterEngine
from .store import SalesStore
from .utils import clean_text, format_date, match_key, round_half_away

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

# Breakdown dimension (as used in URLs) -> query-frame column
BREAKDOWN_DIMENSIONS = {
    'category': 'category',
    'sub-category': 'sub_category',
    'segment': 'segment',
    'product': 'product',
    'region': 'region',
    'ship-mode': 'ship_mode',
}

EMPTY_STATS = {
    'totalRecords': 0,
    'totalStates': 0,
    'dateRange': None,
    'totalSales': 0,
    'quantitySold': 0,
    'discountPercentage': 0,
    'totalProfit': 0,
}


def clamp_page(page: Optional[int]) -> int:
    return max(1, page or 1)


def clamp_limit(limit: Optional[int]) -> int:
    """Page size defaults to 10 and is clamped to [1, 100]."""
    if limit is None:
        return DEFAULT_PAGE_SIZE
    return min(MAX_PAGE_SIZE, max(1, limit))


def _plain_number(value: float):
    """Return an int for whole numbers so counts like quantity serialize as 3, not 3.0."""
    value = float(value)
    return int(value) if value.is_integer() else value


class SalesQueryEngine:
    """
    Answers the dashboard's queries against a SalesStore.

    Usage:
        engine = SalesQueryEngine(SalesStore('data/sales.json'))
        engine.list_states()
        engine.filtered_sales(state='Georgia', page=2, limit=20)
        engine.stats(start_date='2016-01-01', end_date='2016-12-31')

    Raises DataLoadError from any query if the dataset can't be (re)loaded.
    """

    def __init__(self, store: SalesStore):
        self.store = store

    def list_states(self) -> List[str]:
        """Sorted distinct states. The list is a fresh copy on every call."""
        return list(self.store.ensure_fresh().states)

    def date_range_for_state(self, state: str) -> Optional[Dict[str, str]]:
        """
        Earliest and latest order date for a state.

        Returns:
            {'minDate': 'YYYY-MM-DD', 'maxDate': 'YYYY-MM-DD'}, or None if the
            state has no dated records

        Raises:
            ValidationError: if state is blank
        """
        key = match_key(state)
        if key is None:
            raise ValidationError("State parameter is required")
        snapshot = self.store.ensure_fresh()
        date_range = snapshot.date_ranges.get(key)
        if date_range is None:
            return None
        return {'minDate': date_range.min_date, 'maxDate': date_range.max_date}

    def filtered_sales(self, state: Optional[str] = None, city: Optional[str] = None,
                       start_date: Optional[str] = None, end_date: Optional[str] = None,
                       page: Optional[int] = None, limit: Optional[int] = None) -> Dict:
        """
        One page of records matching all given filters.

        Args:
            state: Exact state match (case/whitespace-insensitive)
            city: Substring of the city (case/whitespace-insensitive)
            start_date, end_date: Inclusive order-date bounds
            page: 1-based page number, clamped to >= 1
            limit: Page size, default 10, clamped to [1, 100]

        Returns:
            dict with 'data', 'total', 'page', 'limit', 'totalPages'. A page past
            the end has empty 'data'.
        """
        filters = FilterEngine.from_params(state=state, city=city,
                                           start_date=start_date, end_date=end_date)
        snapshot = self.store.ensure_fresh()
        page = clamp_page(page)
        limit = clamp_limit(limit)

        positions = np.flatnonzero(filters.apply(snapshot.frame).to_numpy())
        total = len(positions)
        offset = (page - 1) * limit
        data = [dict(snapshot.records[i]) for i in positions[offset:offset + limit]]

        return {
            'data': data,
            'total': total,
            'page': page,
            'limit': limit,
            'totalPages': math.ceil(total / limit),
        }

    def stats(self, state: Optional[str] = None, start_date: Optional[str] = None,
              end_date: Optional[str] = None) -> Dict:
        """
        Summary metrics over the filtered records.

        discountPercentage is the sales-weighted average discount:
        100 * sum(sales * discount) / sum(sales). Money and percentages are
        rounded to 2 places. An empty selection returns zeros and a null
        dateRange.
        """
        filters = FilterEngine.from_params(state=state, start_date=start_date, end_date=end_date)
        snapshot = self.store.ensure_fresh()
        rows = snapshot.frame[filters.apply(snapshot.frame)]
        if rows.empty:
            return dict(EMPTY_STATS)

        total_sales = float(rows['sales'].sum())
        discounted = float((rows['sales'] * rows['discount']).sum())
        discount_pct = discounted / total_sales * 100 if total_sales else 0.0

        dates = rows['order_date'].dropna()
        date_range = None
        if not dates.empty:
            date_range = {'minDate': format_date(dates.min()), 'maxDate': format_date(dates.max())}

        return {
            'totalRecords': len(rows),
            'totalStates': int(rows['state'].nunique()),
            'dateRange': date_range,
            'totalSales': round_half_away(total_sales),
            'quantitySold': _plain_number(rows['quantity'].sum()),
            'discountPercentage': round_half_away(discount_pct),
            'totalProfit': round_half_away(float(rows['profit'].sum())),
        }

    def sales_by_city(self, state: Optional[str] = None, start_date: Optional[str] = None,
                      end_date: Optional[str] = None) -> List[Dict]:
        """
        Sales per city scaled so the top city is 100.

        Records with no city or no state are left out of the grouping.

        Returns:
            [{'label': city, 'value': 0-100, 'total': 100}, ...] in no particular order
        """
        filters = FilterEngine.from_params(state=state, start_date=start_date, end_date=end_date)
        snapshot = self.store.ensure_fresh()
        frame = snapshot.frame
        rows = frame[filters.apply(frame) & frame['city'].notna() & frame['state'].notna()]

        totals = rows.groupby('city', sort=False)['sales'].sum()
        max_sales = max(float(totals.max()), 0.0) if len(totals) else 0.0

        result = []
        for city, city_sales in totals.items():
            value = int(round_half_away(float(city_sales) / max_sales * 100, 0)) if max_sales > 0 else 0
            result.append({'label': city, 'value': value, 'total': 100})
        return result

    def sales_breakdown(self, dimension: str, state: Optional[str] = None,
                        start_date: Optional[str] = None, end_date: Optional[str] = None,
                        top: Optional[int] = None) -> List[Dict]:
        """
        Total sales grouped by a categorical field, largest first.

        Args:
            dimension: One of BREAKDOWN_DIMENSIONS (category, sub-category,
                segment, product, region, ship-mode)
            top: Keep only the first N groups

        Raises:
            ValidationError: for an unknown dimension
        """
        column = BREAKDOWN_DIMENSIONS.get((clean_text(dimension) or '').lower())
        if column is None:
            raise ValidationError(
                f"Unknown dimension: {dimension}. "
                f"Expected one of: {', '.join(BREAKDOWN_DIMENSIONS)}"
            )
        filters = FilterEngine.from_params(state=state, start_date=start_date, end_date=end_date)
        snapshot = self.store.ensure_fresh()
        frame = snapshot.frame
        rows = frame[filters.apply(frame) & frame[column].notna()]

        totals = rows.groupby(column)['sales'].sum().sort_values(ascending=False, kind='stable')
        if top is not None and top > 0:
            totals = totals.head(top)
        return [{'label': label, 'sales': round_half_away(float(sales))}
                for label, sales in totals.items()]
