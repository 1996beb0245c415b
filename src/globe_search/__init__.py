from .app import SearchApp, create_app
from .assets import WidgetAssets, load_assets
from .exceptions import AssetLoadError, GlobeSearchError
from .registry import Registry, create_registry
from .session import Session, create_session
from .tools import Reply, search_articles

__all__ = [
    "AssetLoadError",
    "GlobeSearchError",
    "Registry",
    "Reply",
    "SearchApp",
    "Session",
    "WidgetAssets",
    "create_app",
    "create_registry",
    "create_session",
    "load_assets",
    "search_articles",
]
