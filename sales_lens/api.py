"""
Flask app for the sales dashboard: JSON routes under /api/sales and the dashboard page.
"""

import logging
from typing import Optional

from flask import Blueprint, Flask, current_app, jsonify, render_template, request
from werkzeug.exceptions import HTTPException

from .base import NotFoundError, SalesLensError, ValidationError
from .charts import breakdown_donut_figure, figure_payload, sales_by_city_figure
from .config import Settings
from .filter_engine import FilterEngine
from .query_engine import SalesQueryEngine
from .store import SalesStore

logger = logging.getLogger(__name__)

EXTENSION_KEY = 'sales_lens'
DEFAULT_ALLOW_HEADERS = 'Content-Type, Authorization, X-Requested-With'

sales_api = Blueprint('sales_api', __name__, url_prefix='/api/sales')
dashboard = Blueprint('dashboard', __name__)


def _engine() -> SalesQueryEngine:
    return current_app.extensions[EXTENSION_KEY]['engine']


def _date_filters():
    """state/startDate/endDate query parameters as keyword arguments."""
    return {
        'state': request.args.get('state'),
        'start_date': request.args.get('startDate'),
        'end_date': request.args.get('endDate'),
    }


# --- Pages ---

@dashboard.route('/')
def index():
    return render_template('index.html')


# --- Data ---

@sales_api.route('/states')
def get_states():
    states = _engine().list_states()
    return jsonify({'success': True, 'data': states, 'count': len(states)})


@sales_api.route('/date-range/', defaults={'state': ''})
@sales_api.route('/date-range/<path:state>')
def get_date_range(state):
    state = state.strip()
    if not state:
        raise ValidationError("State parameter is required")

    date_range = _engine().date_range_for_state(state)
    if date_range is None:
        raise NotFoundError(f"No sales data found for state: {state}")

    return jsonify({'success': True, 'data': {'state': state, **date_range}})


@sales_api.route('/data')
def get_data():
    result = _engine().filtered_sales(
        city=request.args.get('city'),
        page=request.args.get('page', type=int),
        limit=request.args.get('limit', type=int),
        **_date_filters()
    )
    return jsonify({'success': True, **result})


@sales_api.route('/stats')
def get_stats():
    filters = _date_filters()
    stats = _engine().stats(**filters)
    applied = FilterEngine.from_params(**filters).get_active_filters()
    return jsonify({'success': True, 'data': stats, 'filters': applied})


@sales_api.route('/sales-by-city')
def get_sales_by_city():
    return jsonify({'success': True, 'data': _engine().sales_by_city(**_date_filters())})


@sales_api.route('/breakdown/<dimension>')
def get_breakdown(dimension):
    data = _engine().sales_breakdown(dimension, top=request.args.get('top', type=int),
                                     **_date_filters())
    return jsonify({'success': True, 'data': data})


# --- Charts ---

@sales_api.route('/charts/sales-by-city')
def chart_sales_by_city():
    items = _engine().sales_by_city(**_date_filters())
    return jsonify(figure_payload(sales_by_city_figure(items)))


@sales_api.route('/charts/breakdown/<dimension>')
def chart_breakdown(dimension):
    items = _engine().sales_breakdown(dimension, top=request.args.get('top', type=int),
                                      **_date_filters())
    title = f"Sales by {dimension.replace('-', ' ').title()}"
    return jsonify(figure_payload(breakdown_donut_figure(items, title)))


# --- Errors ---

def _error(message, status):
    return jsonify({'success': False, 'error': message}), status


def handle_sales_error(error: SalesLensError):
    if error.status_code >= 500:
        logger.error("Error handling %s %s: %s", request.method, request.path, error.message)
        return _error('Internal server error', error.status_code)
    return _error(error.message, error.status_code)


def handle_http_error(error: HTTPException):
    return _error(error.description, error.code)


def handle_unexpected_error(error: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.path)
    return _error('Internal server error', 500)


# --- App factory ---

def create_app(settings: Optional[Settings] = None, store: Optional[SalesStore] = None,
               watch: Optional[bool] = None) -> Flask:
    """
    Build the Flask app around one SalesStore.

    Args:
        settings: Defaults to Settings.from_env()
        store: Defaults to a store over settings.data_path
        watch: Start the background file watcher. Defaults to settings.watch_enabled.
    """
    settings = settings or Settings.from_env()
    store = store or SalesStore(settings.data_path)

    app = Flask(__name__)
    app.config['SALES_SETTINGS'] = settings
    app.extensions[EXTENSION_KEY] = {
        'store': store,
        'engine': SalesQueryEngine(store),
    }

    app.register_blueprint(sales_api)
    app.register_blueprint(dashboard)
    app.register_error_handler(SalesLensError, handle_sales_error)
    app.register_error_handler(HTTPException, handle_http_error)
    app.register_error_handler(Exception, handle_unexpected_error)

    @app.after_request
    def add_cors_headers(response):
        response.headers['Access-Control-Allow-Origin'] = settings.cors_origin
        response.headers['Access-Control-Allow-Credentials'] = 'true'
        response.headers['Access-Control-Allow-Methods'] = 'GET, OPTIONS'
        # preflights get back whatever headers they asked for
        requested = request.headers.get('Access-Control-Request-Headers')
        response.headers['Access-Control-Allow-Headers'] = requested or DEFAULT_ALLOW_HEADERS
        response.headers.add('Vary', 'Origin')
        response.headers.add('Vary', 'Access-Control-Request-Headers')
        return response

    if settings.watch_enabled if watch is None else watch:
        store.start_watching(settings.watch_interval)

    logger.info("Sales API ready at /api/sales (data: %s)", store.path)
    return app
