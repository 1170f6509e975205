"""
Sample dataset for running the dashboard locally.
A handful of retail sales across three states - enough to exercise every panel.
"""

import json
from pathlib import Path


def _sale(row_id, order_id, order_date, ship_date, city, state, region, category, sub_category,
          product, segment, sales, quantity, discount, profit, postal_code):
    return {
        "Row ID": row_id,
        "Order ID": order_id,
        "Order Date": order_date,
        "Ship Date": ship_date,
        "Ship Mode": "Standard Class" if row_id % 3 else "Second Class",
        "Customer ID": f"CU-{10000 + row_id * 7}",
        "Customer Name": f"Customer {row_id}",
        "Segment": segment,
        "Country": "United States",
        "City": city,
        "State": state,
        "Postal Code": postal_code,
        "Region": region,
        "Product ID": f"{category[:3].upper()}-{sub_category[:2].upper()}-{1000 + row_id}",
        "Category": category,
        "Sub-Category": sub_category,
        "Product Name": product,
        "Sales": sales,
        "Quantity": quantity,
        "Discount": discount,
        "Profit": profit,
    }


SAMPLE_SALES = [
    _sale(1,  "CA-2016-152156", "11/8/2016",  "11/11/2016", "Henderson",    "Kentucky",   "South",   "Furniture",       "Bookcases",   "Bush Somerset Collection Bookcase",                 "Consumer",    261.96,  2, 0.0,  41.91, 42420),
    _sale(2,  "CA-2016-152157", "11/9/2016",  "11/12/2016", "Louisville",   "Kentucky",   "South",   "Furniture",       "Chairs",      "Hon Deluxe Fabric Upholstered Stacking Chairs",     "Consumer",    731.94,  3, 0.0,  219.58, 40214),
    _sale(3,  "CA-2017-138688", "6/12/2017",  "6/16/2017",  "Lexington",    "Kentucky",   "South",   "Office Supplies", "Labels",      "Self-Adhesive Address Labels for Typewriters",      "Corporate",   14.62,   2, 0.0,  6.87,   40503),
    _sale(4,  "US-2015-108966", "10/11/2015", "10/18/2015", "Atlanta",      "Georgia",    "South",   "Furniture",       "Tables",      "Bretford CR4500 Series Slim Rectangular Table",     "Consumer",    957.58,  5, 0.45, -383.03, 30318),
    _sale(5,  "US-2015-108967", "10/12/2015", "10/14/2015", "Atlanta",      "Georgia",    "South",   "Office Supplies", "Storage",     "Eldon Fold 'N Roll Cart System",                    "Consumer",    22.37,   2, 0.2,  2.52,   30318),
    _sale(6,  "CA-2014-115812", "6/9/2014",   "6/14/2014",  "Columbus",     "Georgia",    "South",   "Technology",      "Phones",      "Mitel 5320 IP Phone VoIP phone",                    "Home Office", 907.15,  6, 0.2,  90.72,  31907),
    _sale(7,  "CA-2014-115813", "6/10/2014",  "6/14/2014",  "Savannah",     "Georgia",    "South",   "Office Supplies", "Binders",     "DXL Angle-View Binders with Locking Rings by Samsill", "Home Office", 18.50, 3, 0.2,  5.78,   31404),
    _sale(8,  "CA-2017-114412", "4/15/2017",  "4/20/2017",  "Columbus",     "Georgia",    "South",   "Office Supplies", "Paper",       "Easy-staple paper",                                 "Corporate",   15.55,   3, 0.2,  5.44,   31907),
    _sale(9,  "CA-2016-161389", "12/5/2016",  "12/10/2016", "Seattle",      "Washington", "West",    "Office Supplies", "Binders",     "Fellowes PB200 Plastic Comb Binding Machine",       "Consumer",    407.98,  3, 0.2,  132.59, 98103),
    _sale(10, "US-2015-118983", "11/22/2015", "11/26/2015", "Seattle",      "Washington", "West",    "Office Supplies", "Appliances",  "Holmes Replacement Filter for HEPA Air Cleaner",    "Home Office", 68.81,   5, 0.0,  20.64,  98115),
    _sale(11, "CA-2014-105893", "11/11/2014", "11/18/2014", "Spokane",      "Washington", "West",    "Office Supplies", "Storage",     "Stur-D-Stor Shelving, Vertical 5-Shelf",            "Consumer",    665.88,  6, 0.0,  13.32,  99207),
    _sale(12, "CA-2014-167164", "5/13/2014",  "5/15/2014",  "Tacoma",       "Washington", "West",    "Technology",      "Accessories", "Logitech Wireless Boombox Speaker",                 "Consumer",    1199.98, 2, 0.0,  311.99, 98402),
    _sale(13, "CA-2017-143336", "8/27/2017",  "9/1/2017",   "Seattle",      "Washington", "West",    "Technology",      "Phones",      "AT&T 17929 Landline Telephone",                     "Corporate",   419.93,  7, 0.0,  113.38, 98105),
    _sale(14, "CA-2016-137330", "12/9/2016",  "12/13/2016", "Bellevue",     "Washington", "West",    "Furniture",       "Furnishings", "Acrylic Self-Standing Desk Frames",                 "Consumer",    54.66,   3, 0.0,  16.94,  98006),
    _sale(15, "US-2017-156909", "7/16/2017",  "7/18/2017",  "Lexington",    "Kentucky",   "South",   "Technology",      "Accessories", "Anker Astro Mini 3000mAh Ultra-Compact Portable Charger", "Consumer", 71.98, 2, 0.0, 14.40, 40503),
]


def write_sample_dataset(path):
    """Write SAMPLE_SALES to path as a JSON array, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(SAMPLE_SALES, indent=2), encoding='utf-8')
    return path
