"""Static widget assets served as the search-widget resource body."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from globe_search.exceptions import AssetLoadError

logger = logging.getLogger(__name__)

ASSETS_DIR = Path(__file__).parent / "public"
HTML_FILENAME = "search-widget.html"
CSS_FILENAME = "search-widget.css"


@dataclass(frozen=True)
class WidgetAssets:
    html: str
    css: str

    @property
    def body(self) -> str:
        """The widget markup with the stylesheet embedded in a trailing <style> block."""
        return f"{self.html.strip()}\n<style>\n{self.css.strip()}\n</style>"


def _read_asset(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise AssetLoadError(path, str(e)) from e


def load_assets(directory: Path = ASSETS_DIR) -> WidgetAssets:
    """Read the widget HTML template and stylesheet.

    Args:
        directory: folder holding ``search-widget.html`` and ``search-widget.css``

    Raises:
        AssetLoadError: if either file is missing or unreadable
    """
    html = _read_asset(directory / HTML_FILENAME)
    css = _read_asset(directory / CSS_FILENAME)
    logger.debug("Loaded widget assets from %s (%d + %d chars)", directory, len(html), len(css))
    return WidgetAssets(html=html, css=css)
