"""Configuration management for the Smile Directive service.

This module provides centralized configuration using Pydantic Settings.
All configuration is loaded from environment variables with the
SMILEDIRECTIVE_ prefix, so deployments can change behaviour without code
changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (SMILEDIRECTIVE_* prefix)
2. .env file in the working directory
3. Default values defined in SmileDirectiveConfig

Example .env file:
    SMILEDIRECTIVE_SERVER_HOST=127.0.0.1
    SMILEDIRECTIVE_SERVER_PORT=8080
    SMILEDIRECTIVE_LOG_LEVEL=DEBUG

Global Configuration Instance
------------------------------
A global `config` instance is created at module import time and is the
single source of truth for the API layer.

Usage Example
-------------
    from smiledirective.core.config import config

    print(config.server_port)

The directive compiler itself reads no configuration: its output depends
only on the option set it is given.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SmileDirectiveConfig(BaseSettings):
    """Main configuration for the Smile Directive service.

    Attributes
    ----------
    Service:
        service_name : str
            Name reported by the health endpoint
        log_level : Literal["DEBUG", "INFO", "WARNING", "ERROR"]
            Root logging level applied when the server starts

    Server:
        server_host : str
            Bind address for uvicorn
        server_port : int
            Port for uvicorn (1024-65535)
        cors_origins : list[str]
            Origins allowed to call the API from a browser

    Examples
    --------
    Create a custom configuration:

        >>> custom = SmileDirectiveConfig(server_port=9000, _env_file=None)
        >>> custom.server_port
        9000
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SMILEDIRECTIVE_",
        case_sensitive=False,
    )

    service_name: str = Field(
        default="Smile Directive Compiler",
        description="Service name reported by /health",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Root logging level",
    )

    server_host: str = Field(
        default="0.0.0.0",
        description="Server bind address (0.0.0.0 for local network)",
    )
    server_port: int = Field(
        default=8000,
        description="Server port",
        ge=1024,
        le=65535,
    )
    cors_origins: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins (restrict to the front-end domain in production)",
    )


# Global configuration instance, loaded from SMILEDIRECTIVE_* variables and .env.
config = SmileDirectiveConfig()
