"""
Plotly figures for the dashboard panels.
Figures are built from query-engine results and shipped to the browser as JSON.
"""

from typing import Dict, List

import plotly.graph_objects as go

BAR_COLOR = '#2E83B8'
REMAINDER_COLOR = 'rgba(46, 131, 184, 0.15)'
DONUT_COLORS = ['#F4B35D', '#2E83B8', '#CC7262', '#10B981', '#A855F7', '#06B6D4']


def sales_by_city_figure(items: List[Dict], title: str = 'Sales by City') -> go.Figure:
    """
    Horizontal stacked bar: each city's 0-100 value plus the remainder up to its total.

    Cities are ordered top to bottom by value.
    """
    items = sorted(items, key=lambda item: (item['value'], item['label']))
    labels = [item['label'] for item in items]

    fig = go.Figure()
    fig.add_trace(go.Bar(
        y=labels,
        x=[item['value'] for item in items],
        orientation='h',
        name='Sales',
        marker_color=BAR_COLOR,
    ))
    fig.add_trace(go.Bar(
        y=labels,
        x=[item['total'] - item['value'] for item in items],
        orientation='h',
        name='Remaining',
        marker_color=REMAINDER_COLOR,
        hoverinfo='skip',
        showlegend=False,
    ))
    fig.update_layout(
        title=title,
        barmode='stack',
        xaxis=dict(range=[0, 100], ticksuffix='%'),
        height=max(300, 28 * len(labels) + 120),
        margin=dict(l=120, r=20, t=60, b=40),
    )
    return fig


def breakdown_donut_figure(items: List[Dict], title: str) -> go.Figure:
    """Donut chart of a sales breakdown ({'label', 'sales'} items)."""
    fig = go.Figure(go.Pie(
        labels=[item['label'] for item in items],
        values=[item['sales'] for item in items],
        hole=0.6,
        sort=False,
        marker=dict(colors=DONUT_COLORS),
    ))
    fig.update_layout(
        title=title,
        legend=dict(orientation='h', y=-0.1, x=0.5, xanchor='center'),
        margin=dict(l=20, r=20, t=60, b=40),
    )
    return fig


def figure_payload(fig: go.Figure) -> dict:
    """Response body for a chart route."""
    return {'success': True, 'fig_json': fig.to_json()}
