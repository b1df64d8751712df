"""Uvicorn server runner."""

import copy

import uvicorn
from uvicorn.config import LOGGING_CONFIG

from lireddit.app import App
from lireddit.config import Config
from lireddit.web.server import create_fastapi_app


def run_server(app: App, config: Config) -> None:
    """Run the Uvicorn server, honoring X-Forwarded-* headers from the frontend proxy."""
    fastapi_app = create_fastapi_app(app, config)

    log_config = copy.deepcopy(LOGGING_CONFIG)
    log_config["formatters"]["access"]["fmt"] = '%(asctime)s - "%(request_line)s" %(status_code)s'
    log_config["formatters"]["default"]["fmt"] = "%(asctime)s - %(levelname)s - %(message)s"
    log_config["loggers"]["uvicorn"]["level"] = "DEBUG" if config.debug else "INFO"

    uvicorn.run(
        fastapi_app,
        host=config.host,
        port=config.port,
        log_config=log_config,
        access_log=config.debug,
        proxy_headers=True,
    )
