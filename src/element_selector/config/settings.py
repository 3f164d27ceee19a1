"""Configuration management using Pydantic Settings."""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict

from ..domain.errors import ConfigurationError


class SelectorFilterSettings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Service
    service_name: str = "element-selector-filter"

    # FastAPI (internal-only)
    http_enable: bool = True
    http_host: str = "127.0.0.1"
    http_port: int = 8000

    # Element selection. Lists are comma-separated compound selectors,
    # e.g. "nav,.ad-banner,#footer". A non-empty whitelist wins over the blacklist.
    selector_blacklist: str = ""
    selector_whitelist: str = ""
    # When set, filtered text goes into this metadata field and the primary
    # text is left untouched.
    selector_storage_field: str | None = None
    # Comma-separated exact-match URLs that are never filtered
    selector_protected_urls: str = ""
    # Log every matched node (debug tracing; off on the hot path)
    selector_trace_matches: bool = False

    # Document processing
    filter_max_workers: int = 4
    max_html_bytes: int = 10 * 1024 * 1024  # 10MB

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    def storage_field_name(self) -> str | None:
        if self.selector_storage_field is None or not self.selector_storage_field.strip():
            return None
        return self.selector_storage_field.strip()

    def protected_url_set(self) -> frozenset[str]:
        return frozenset(u.strip() for u in self.selector_protected_urls.split(",") if u.strip())

    def validate(self) -> None:
        if self.http_port <= 0:
            raise ConfigurationError("http_port must be > 0")
        if self.filter_max_workers <= 0:
            raise ConfigurationError("filter_max_workers must be > 0")
        if self.max_html_bytes <= 0:
            raise ConfigurationError("max_html_bytes must be > 0")
        if self.log_level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ConfigurationError("log_level is not a known level", detail=self.log_level)


_settings: SelectorFilterSettings | None = None


def get_settings() -> SelectorFilterSettings:
    global _settings
    if _settings is None:
        _settings = SelectorFilterSettings()
        _settings.validate()
    return _settings


def reset_settings() -> None:
    global _settings
    _settings = None
