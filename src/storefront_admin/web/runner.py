"""Uvicorn server runner for the admin API."""

import copy
from typing import Any

import structlog
import uvicorn
from uvicorn.config import LOGGING_CONFIG

from storefront_admin.app import App
from storefront_admin.config import Config
from storefront_admin.web.server import create_fastapi_app

logger = structlog.get_logger(__name__)


def build_log_config(config: Config) -> dict[str, Any]:
    """Uvicorn logging tagged with the service name; DEBUG level in debug mode."""
    log_config = copy.deepcopy(LOGGING_CONFIG)
    log_config["formatters"]["access"]["fmt"] = '%(asctime)s storefront-admin access "%(request_line)s" %(status_code)s'
    log_config["formatters"]["default"]["fmt"] = "%(asctime)s storefront-admin %(levelname)s %(message)s"
    level = "DEBUG" if config.debug else "INFO"
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        log_config["loggers"].setdefault(name, {})["level"] = level
    return log_config


def run_server(app: App, config: Config) -> None:
    fastapi_app = create_fastapi_app(app, config)
    logger.info("server_starting", host=config.host, port=config.port, debug=config.debug, commit=config.git_commit_hash)
    uvicorn.run(fastapi_app, host=config.host, port=config.port, log_config=build_log_config(config), access_log=True)
