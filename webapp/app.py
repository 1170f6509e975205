"""
Local runner for the sales dashboard.
Serves the JSON API under /api/sales and the dashboard page at /.
"""

import logging
from pathlib import Path

from sales_lens import Settings, configure_logging, create_app
from data import SAMPLE_SALES, write_sample_dataset

settings = Settings.from_env()
configure_logging(settings.log_level)
logger = logging.getLogger('webapp')

if not Path(settings.data_path).exists():
    write_sample_dataset(settings.data_path)
    logger.info("Wrote %d sample records to %s", len(SAMPLE_SALES), settings.data_path)

app = create_app(settings)


if __name__ == '__main__':
    logger.info("Sales API server running on port %d", settings.port)
    logger.info("API base URL: http://localhost:%d/api/sales", settings.port)
    # the reloader would start a second watcher thread
    app.run(debug=settings.env == 'development', port=settings.port, use_reloader=False)
