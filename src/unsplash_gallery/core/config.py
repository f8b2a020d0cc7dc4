"""Configuration management for Unsplash Gallery.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the UNSPLASH_GALLERY_
prefix, allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (UNSPLASH_GALLERY_* prefix)
2. .env file in the project root
3. Default values defined in GalleryConfig

Example .env file:
    UNSPLASH_GALLERY_ACCESS_KEY=your-unsplash-access-key
    UNSPLASH_GALLERY_API_BASE_URL=https://api.unsplash.com
    UNSPLASH_GALLERY_SERVER_PORT=7860

Global Configuration Instance
------------------------------
A global `config` instance is created automatically at module import time.
The access key it carries is read once and never rotated while the process
runs.

Usage Example
-------------
    from unsplash_gallery.core.config import config

    print(config.api_base_url)
    print(config.server_port)

Feed Request Settings
---------------------
- api_base_url: Root of the Unsplash API; ``/photos/`` is appended per fetch
- access_key: Unsplash ``client_id`` sent as a query parameter
- request_timeout: Optional per-request timeout in seconds.  When unset the
  httpx default applies.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GalleryConfig(BaseSettings):
    """Main configuration for Unsplash Gallery.

    Values are loaded from environment variables with the UNSPLASH_GALLERY_
    prefix, with fallback to defaults defined here.

    Attributes
    ----------
    Feed Settings:
        api_base_url : str
            Base URL of the upstream image API
        access_key : str
            Static API credential sent as ``client_id``
        request_timeout : float | None
            Request timeout in seconds, None for the httpx default

    Store Settings:
        prune_stale_favorites : bool
            Drop favorites missing from a newly applied feed

    Server Settings:
        server_host : str
            Server bind address (0.0.0.0 for local network)
        server_port : int
            Server port (1024-65535)
        log_level : Literal["DEBUG", "INFO", "WARNING", "ERROR"]
            Root log level applied by the server entry point

    Notes
    -----
    - Configuration is immutable after initialization
    - To modify config, set environment variables and restart the application

    Examples
    --------
    Create a custom configuration:

        >>> custom_config = GalleryConfig(
        ...     access_key="test-key",
        ...     prune_stale_favorites=True,
        ... )
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="UNSPLASH_GALLERY_",
        case_sensitive=False,
        frozen=True,
    )

    # Feed request settings
    api_base_url: str = Field(
        default="https://api.unsplash.com",
        description="Base URL of the Unsplash API",
    )
    access_key: str = Field(
        default="",
        description="Unsplash access key, sent as the client_id query parameter",
    )
    request_timeout: float | None = Field(
        default=None,
        description="Request timeout in seconds (None uses the httpx default)",
    )

    # Store behaviour
    prune_stale_favorites: bool = Field(
        default=False,
        description="Remove favorites whose image is absent from a newly fetched feed",
    )

    # Server settings
    server_host: str = Field(
        default="0.0.0.0",
        description="Server bind address (0.0.0.0 for local network)",
    )
    server_port: int = Field(
        default=7860,
        description="Server port",
        ge=1024,
        le=65535,
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Root log level for the server process",
    )


# Global configuration instance
# Loaded from environment variables (UNSPLASH_GALLERY_* prefix) and .env file.
config = GalleryConfig()
