"""
Configuration Settings.

This module defines the application configuration using Pydantic's BaseSettings.
It automatically loads all configuration from environment variables and .env file
without explicit dotenv loading.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Must not import from sparxstar_gluon: logging_config loads this module while
# the package is still importing.
CONSENT_CATEGORIES = ("functional", "preferences", "statistics", "statistics-anonymous", "marketing")

# =====================================================================
# Grouped Configuration Models
# =====================================================================


class AIModelConfig(BaseModel):
    """Model settings used by the summarize ability."""

    temperature: float = Field(default=0.1, alias="GLUON_AI_TEMPERATURE")
    model_preferences: List[str] = Field(
        default=["anthropic:claude-sonnet-4-5", "google-gla:gemini-3-pro-preview", "openai:gpt-5.1"],
        alias="GLUON_AI_MODEL_PREFERENCES",
    )

    model_config = {"populate_by_name": True, "protected_namespaces": ()}


class CORSConfig(BaseModel):
    """CORS configuration."""

    origins: List[str] = Field(default=["*"], alias="CORS_ORIGINS", description="Allowed CORS origins (use * for all)")
    allow_credentials: bool = Field(
        default=True, alias="CORS_ALLOW_CREDENTIALS", description="Allow credentials in CORS requests"
    )
    allow_methods: List[str] = Field(
        default=["*"], alias="CORS_ALLOW_METHODS", description="Allowed HTTP methods (use * for all)"
    )
    allow_headers: List[str] = Field(
        default=["*"], alias="CORS_ALLOW_HEADERS", description="Allowed HTTP headers (use * for all)"
    )

    model_config = {"populate_by_name": True}


# =====================================================================
# Main Settings Class
# =====================================================================


class Settings(BaseSettings):
    """
    Application settings model.

    All properties are automatically bound from environment variables and .env file.
    Pydantic's BaseSettings handles dotenv loading automatically via model_config.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
    )

    # =====================================================================
    # Server Configuration
    # =====================================================================
    server_host: str = Field(
        default="0.0.0.0",
        description="Server host address to bind to",
        alias="GLUON_SERVER_HOST",
    )
    server_port: int = Field(
        default=8000,
        description="Server port number",
        alias="GLUON_SERVER_PORT",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        alias="GLUON_LOG_LEVEL",
    )
    log_format: str = Field(
        default="detailed",
        description="Log line format (simple, detailed, json)",
        alias="LOG_FORMAT",
    )
    log_file_dir: str = Field(
        default="logs",
        description="Directory for log files",
        alias="LOG_FILE_DIR",
    )
    enable_file_logging: bool = Field(
        default=False,
        description="Write log files in addition to the console",
        alias="ENABLE_FILE_LOGGING",
    )
    environment_type: str = Field(
        default="production",
        description="Host environment type (local, development, staging, production)",
        alias="GLUON_ENVIRONMENT_TYPE",
    )

    # =====================================================================
    # Plugin Configuration
    # =====================================================================
    plugin_name: str = Field(
        default="SparxstarGluon",
        description="Plugin identifier reported to the consent subsystem",
        alias="GLUON_PLUGIN_NAME",
    )
    plugin_version: str = Field(
        default="1.0.0",
        description="Plugin version",
        alias="GLUON_PLUGIN_VERSION",
    )
    cookie_prefix: str = Field(
        default="SparxstarGluon",
        description="Plugin part of the session cookie name",
        alias="GLUON_COOKIE_PREFIX",
    )
    cookie_base_name: str = Field(
        default="TOKEN",
        description="Suffix of the session cookie name",
        alias="GLUON_COOKIE_BASE_NAME",
    )
    consent_category: str = Field(
        default="functional",
        description="Consent category the session cookie belongs to",
        alias="GLUON_CONSENT_CATEGORY",
    )
    capability_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Default per-invocation capability timeout",
        alias="GLUON_CAPABILITY_TIMEOUT_SECONDS",
    )
    delete_on_uninstall: bool = Field(
        default=False,
        description="Delete stored plugin settings on uninstall",
        alias="GLUON_DELETE_ON_UNINSTALL",
    )
    abilities_enabled: bool = Field(
        default=True,
        description="Whether the host provides the abilities subsystem",
        alias="GLUON_ABILITIES_ENABLED",
    )
    mcp_adapter_url: Optional[str] = Field(
        default=None,
        description="Base URL of an MCP adapter exposing capabilities to agents",
        alias="GLUON_MCP_ADAPTER_URL",
    )

    # =====================================================================
    # AI Model Configuration
    # =====================================================================
    ai_temperature: float = Field(
        default=0.1,
        description="Sampling temperature for summaries",
        alias="GLUON_AI_TEMPERATURE",
    )
    ai_model_preferences: List[str] = Field(
        default=["anthropic:claude-sonnet-4-5", "google-gla:gemini-3-pro-preview", "openai:gpt-5.1"],
        description="JSON list of provider:model identifiers tried in order",
        alias="GLUON_AI_MODEL_PREFERENCES",
    )

    # =====================================================================
    # CORS Configuration
    # =====================================================================
    cors_origins: List[str] = Field(default=["*"], alias="CORS_ORIGINS")
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: List[str] = Field(default=["*"], alias="CORS_ALLOW_METHODS")
    cors_allow_headers: List[str] = Field(default=["*"], alias="CORS_ALLOW_HEADERS")

    @field_validator("consent_category")
    @classmethod
    def _known_category(cls, v: str) -> str:
        value = v.strip().lower()
        if value not in CONSENT_CATEGORIES:
            raise ValueError(f"Unknown consent category: {v!r}")
        return value

    # =====================================================================
    # Computed Properties (Grouped Configurations)
    # =====================================================================

    @property
    def ai(self) -> AIModelConfig:
        """Get AI model configuration from environment variables."""
        return AIModelConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def cors(self) -> CORSConfig:
        """Get CORS configuration from environment variables."""
        return CORSConfig.model_validate(self.model_dump(by_alias=True))


settings = Settings()
