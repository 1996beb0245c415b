"""Runtime settings for the search server."""

from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

MCP_PATH = "/mcp"
SERVER_NAME = "boston-globe-search"
SERVER_VERSION = "0.1.0"
HEALTH_BANNER = "Boston Globe search MCP server"

DEFAULT_PORT = 8787


class Settings(BaseSettings):
    """Search server settings.

    All settings can be configured via environment variables with the prefix GLOBE_SEARCH_.
    The listen port additionally honours the bare PORT variable used by most hosting platforms.
    """

    model_config = SettingsConfigDict(
        env_prefix="GLOBE_SEARCH_",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    host: str = "0.0.0.0"
    port: int = Field(
        default=DEFAULT_PORT,
        validation_alias=AliasChoices("GLOBE_SEARCH_PORT", "PORT"),
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
