from pathlib import Path


class GlobeSearchError(Exception):
    """Base class for errors raised by the search server."""


class AssetLoadError(GlobeSearchError):
    """Raised when a static widget asset cannot be read at startup.

    Attributes:
        path: the asset file that failed to load
        reason: a short description of the underlying failure
    """

    path: Path
    reason: str

    def __init__(self, path: Path, reason: str):
        super().__init__(f"Failed to load widget asset {path}: {reason}")
        self.path = path
        self.reason = reason
