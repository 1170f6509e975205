"""
Shared fixtures: a small on-disk sales dataset with a few dirty records,
and a store / query engine / Flask client built on top of it.
"""

import json

import pytest

from sales_lens import SalesQueryEngine, SalesStore, Settings, create_app


def make_sale(row_id, state, city, order_date, sales, quantity=1, discount=0.0, profit=0.0,
              category='Office Supplies', segment='Consumer', **extra):
    sale = {
        "Row ID": row_id,
        "Order ID": f"CA-2016-{100000 + row_id}",
        "Order Date": order_date,
        "Ship Date": order_date,
        "Ship Mode": "Standard Class",
        "Customer ID": f"CU-{row_id}",
        "Segment": segment,
        "Country": "United States",
        "City": city,
        "State": state,
        "Postal Code": 30000 + row_id,
        "Region": "South",
        "Product ID": f"OFF-{row_id}",
        "Category": category,
        "Sub-Category": "Paper",
        "Product Name": f"Product {row_id}",
        "Sales": sales,
        "Quantity": quantity,
        "Discount": discount,
        "Profit": profit,
    }
    sale.update(extra)
    return sale


# Totals over all rows: sales 1740, quantity 19, profit 5, sum(sales * discount) 270
SALES = [
    make_sale(1, "Georgia", "Atlanta", "2016-01-05", 100, quantity=2, discount=0.1, profit=10, category="Furniture"),
    make_sale(2, "Georgia", "Atlanta", "2016-03-10", 300, quantity=3, discount=0.2, profit=-5, category="Furniture"),
    make_sale(3, "Georgia", "Savannah", "2/1/2016", 200, quantity=1, profit=20, category="Technology"),
    make_sale(4, "Georgia", "Columbus", "not a date", 50, quantity=4, profit=5),
    make_sale(5, " Kentucky ", "Louisville", "2017-06-12", 400, quantity=5, discount=0.5, profit=-40, category="Technology"),
    make_sale(6, "Kentucky", "Lexington", "2017-07-01", 100, profit=15, category="Furniture"),
    make_sale(7, "", "Nowhere", "2017-01-01", 80),
    make_sale(8, None, None, None, 10, category=None),
    make_sale(9, "Washington", "Seattle", "", 500, category="Technology"),
]


def write_dataset(path, records):
    path.write_text(json.dumps(records), encoding='utf-8')
    return path


@pytest.fixture
def dataset_path(tmp_path):
    return write_dataset(tmp_path / 'sales.json', SALES)


@pytest.fixture
def store(dataset_path):
    return SalesStore(dataset_path)


@pytest.fixture
def engine(store):
    return SalesQueryEngine(store)


@pytest.fixture
def settings(dataset_path):
    return Settings(data_path=str(dataset_path), env='production', cors_origin='http://localhost:5173')


@pytest.fixture
def app(settings, store):
    app = create_app(settings, store=store, watch=False)
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
