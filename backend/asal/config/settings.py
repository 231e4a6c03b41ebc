"""
Centralized Configuration System for the Asal Media site backend

Type-safe configuration using Pydantic Settings:
- Environment variable binding with defaults
- Hierarchical configuration structure
- Test-friendly configuration isolation via reload_settings()
"""

import os
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _settings_config(prefix: str = "") -> SettingsConfigDict:
    return SettingsConfigDict(
        env_prefix=prefix,
        env_file=".env" if not os.getenv("DOCKER_CONTAINER") else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


class I18nSettings(BaseSettings):
    """Locale negotiation and content translation settings"""

    model_config = _settings_config("I18N_")

    localized_field_names: List[str] = Field(
        default=["title", "description", "text", "subtitle", "body", "content"],
        description="Field names resolved as localized text"
    )
    category_field_names: List[str] = Field(
        default=["category"],
        description="Field names holding category keys"
    )
    auto_detect_localized_objects: bool = Field(
        default=True,
        description="Resolve any {en, so, ar} shaped object regardless of field name"
    )
    max_rewrite_body_bytes: int = Field(
        default=1_000_000,
        description="Largest JSON response body the i18n middleware will rewrite"
    )


class TranslationServiceSettings(BaseSettings):
    """External machine translation service settings"""

    model_config = _settings_config("TRANSLATION_")

    api_url: str = Field(
        default="https://api.mymemory.translated.net",
        description="Machine translation API base URL"
    )
    source_language: str = Field(
        default="en",
        description="Language content is authored in"
    )
    timeout_seconds: float = Field(
        default=10.0,
        description="Per-request timeout in seconds"
    )
    min_text_length: int = Field(
        default=3,
        description="Shorter strings are never sent for translation"
    )


class EdgeSettings(BaseSettings):
    """Host routing and admin gate settings"""

    model_config = _settings_config("EDGE_")

    admin_host_marker: str = Field(
        default="admin.",
        description="Host marker identifying the administrative subdomain"
    )
    primary_host_marker: str = Field(
        default="asalmediagroup.com",
        description="Host marker identifying the public domain"
    )
    admin_path_prefix: str = Field(
        default="/admin",
        description="Path prefix of the administrative surface"
    )
    login_path: str = Field(
        default="/auth/login",
        description="Login page path"
    )
    auth_cookie_name: str = Field(
        default="token",
        description="Cookie carrying the session token"
    )
    auth_cookie_max_age: int = Field(
        default=60 * 60 * 24 * 7,
        description="Session cookie lifetime in seconds"
    )
    strict_host_matching: bool = Field(
        default=False,
        description="Match hosts exactly or by dot-suffix instead of substring containment"
    )


class MediaSettings(BaseSettings):
    """Image URL resolution settings"""

    model_config = _settings_config()

    api_image_url: Optional[str] = Field(
        default=None,
        description="Base URL for legacy image paths"
    )
    image_placeholder: str = Field(
        default="/placeholder.svg",
        description="Placeholder image URL"
    )


class ServiceSettings(BaseSettings):
    """Edge service process settings"""

    model_config = _settings_config("EDGE_SERVICE_")

    host: str = Field(default="0.0.0.0", description="Bind host")
    port: int = Field(default=8000, description="Bind port")
    cors_origins: List[str] = Field(default=["*"], description="Allowed CORS origins")
    log_level: str = Field(default="INFO", description="Root log level")


class ApplicationSettings(BaseSettings):
    """Main application settings - aggregates all other settings"""

    model_config = _settings_config()

    # Nested settings
    i18n: I18nSettings = Field(default_factory=I18nSettings)
    translation: TranslationServiceSettings = Field(default_factory=TranslationServiceSettings)
    edge: EdgeSettings = Field(default_factory=EdgeSettings)
    media: MediaSettings = Field(default_factory=MediaSettings)
    service: ServiceSettings = Field(default_factory=ServiceSettings)


settings = ApplicationSettings()


def get_settings() -> ApplicationSettings:
    """
    Get the global settings instance

    Can be used with FastAPI's Depends() for dependency injection.
    """
    return settings


def reload_settings() -> ApplicationSettings:
    """
    Reload settings from environment (useful for testing)
    """
    global settings
    settings = ApplicationSettings()
    return settings
