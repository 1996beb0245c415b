"""Command-line entry point: load the widget, build the app and serve it with uvicorn."""

import click
import uvicorn

from globe_search.app import create_app
from globe_search.assets import load_assets
from globe_search.exceptions import AssetLoadError
from globe_search.registry import create_registry
from globe_search.settings import MCP_PATH, Settings
from globe_search.utilities.logging import configure_logging, get_logger

logger = get_logger(__name__)


@click.command()
@click.option("--host", default=None, help="Interface to bind (default: GLOBE_SEARCH_HOST or 0.0.0.0)")
@click.option("--port", type=int, default=None, help="Port to listen on for HTTP (default: PORT or 8787)")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default=None,
    help="Logging level",
)
def main(host: str | None, port: int | None, log_level: str | None) -> None:
    settings = Settings()
    host = host if host is not None else settings.host
    port = port if port is not None else settings.port
    level = log_level.upper() if log_level else settings.log_level
    configure_logging(level)  # type: ignore[arg-type]

    try:
        assets = load_assets()
    except AssetLoadError as e:
        logger.error("Refusing to start: %s", e)
        raise click.ClickException(str(e)) from e

    app = create_app(create_registry(assets))
    logger.info("Boston Globe search MCP server listening on http://localhost:%d%s", port, MCP_PATH)
    uvicorn.run(app, host=host, port=port, log_level=level.lower(), lifespan="auto")
