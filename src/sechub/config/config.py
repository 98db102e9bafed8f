"""
Configuration management for SecHub using Pydantic.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- Setup Logging ---
log = logging.getLogger(__name__)

# Outbound requests must target one of these hosts (or a subdomain of one).
DEFAULT_ALLOWED_DOMAINS: List[str] = [
    "thehackernews.com",
    "krebsonsecurity.com",
    "bleepingcomputer.com",
    "securityweek.com",
    "feeds.feedburner.com",
    "threatpost.com",
    "darkreading.com",
    "cyberscoop.com",
    "zdnet.com",
    "arstechnica.com",
    "wired.com",
    "schneier.com",
    "reddit.com",
    "github.com",
]

# Tunable quality gates. Readability output must be longer than
# READABILITY_MIN_LENGTH to be promoted; the selector fallback stops scanning
# once a candidate is longer than SELECTOR_MIN_LENGTH.
READABILITY_MIN_LENGTH = 500
SELECTOR_MIN_LENGTH = 200

DEFAULT_CONTENT_SELECTORS: List[str] = [
    "article",
    '[role="main"]',
    ".post-content",
    ".entry-content",
    ".article-content",
    ".content",
    "main p",
]

# --- Nested Configuration Models ---


class ExtractionConfig(BaseModel):
    """Outbound fetch policy and extraction quality gates."""

    allowed_domains: List[str] = Field(
        default_factory=lambda: list(DEFAULT_ALLOWED_DOMAINS),
        description="Hosts that may be fetched. Subdomains of an entry are allowed too.",
    )
    user_agent: str = Field(
        default="Mozilla/5.0 (compatible; SecHub/1.0; +https://sechub.com)",
        description="User-Agent string for outbound requests.",
    )
    readability_accept: str = Field(
        default="text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        description="Accept header sent by the readability strategy.",
    )
    selector_accept: str = Field(
        default="text/html,application/xhtml+xml",
        description="Accept header sent by the selector fallback strategy.",
    )
    request_timeout: float = Field(default=10.0, description="Total timeout for one page fetch, in seconds.")
    readability_min_length: int = Field(
        default=READABILITY_MIN_LENGTH,
        description="Readability output is only accepted when longer than this many characters.",
    )
    selector_min_length: int = Field(
        default=SELECTOR_MIN_LENGTH,
        description="Selector scanning stops once a candidate is longer than this many characters.",
    )
    content_selectors: List[str] = Field(
        default_factory=lambda: list(DEFAULT_CONTENT_SELECTORS),
        description="CSS selectors tried in order by the fallback strategy.",
    )

    @field_validator("allowed_domains")
    @classmethod
    def normalize_domains(cls, v: List[str]) -> List[str]:
        domains = [d.strip().lower().rstrip(".") for d in v if d and d.strip()]
        if not domains:
            raise ValueError("allowed_domains must contain at least one domain")
        return domains

    @field_validator("content_selectors")
    @classmethod
    def validate_selectors(cls, v: List[str]) -> List[str]:
        if not v:
            raise ValueError("content_selectors must contain at least one selector")
        return v

    @field_validator("request_timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("request_timeout must be positive")
        return v

    @field_validator("readability_min_length", "selector_min_length")
    @classmethod
    def validate_lengths(cls, v: int) -> int:
        if v < 0:
            raise ValueError("length thresholds cannot be negative")
        return v


class RateLimitConfig(BaseModel):
    max_requests: int = Field(default=6, description="Requests allowed per host within one window.")
    window_seconds: float = Field(default=60.0, description="Length of a rate limit window in seconds.")

    @field_validator("max_requests", "window_seconds")
    @classmethod
    def validate_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("rate limit values must be positive")
        return v


class CacheConfig(BaseModel):
    """Result cache lifetimes."""

    success_ttl_seconds: float = Field(default=24 * 60 * 60, description="TTL for successful extractions.")
    failure_ttl_seconds: float = Field(default=30 * 60, description="TTL for failed extractions.")
    cleanup_interval_seconds: float = Field(
        default=60 * 60,
        description="How often the web host sweeps expired cache entries.",
    )

    @field_validator("success_ttl_seconds", "failure_ttl_seconds", "cleanup_interval_seconds")
    @classmethod
    def validate_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("cache durations must be positive")
        return v


class MonitoringConfig(BaseModel):
    """Configuration for logging output."""

    log_level: str = Field(default="INFO", description="Logging level (e.g., DEBUG, INFO, WARNING).")
    log_file: str | None = Field(default=None, description="Path to log file. If None, logs to console.")
    json_logs: bool = Field(default=False, description="Render console logs as JSON.")

    @field_validator("log_file", mode="before")
    @classmethod
    def create_parent_dir(cls, v: str | Path | None) -> str | None:
        if v is None:
            return None
        path = Path(v)
        path.parent.mkdir(parents=True, exist_ok=True)
        return str(path)


class WebConfig(BaseModel):
    host: str = Field(default="127.0.0.1", description="Host for the web server.")
    port: int = Field(default=8000, description="Port for the web server.")


# --- Main Configuration Class ---


class Config(BaseSettings):
    project_name: str = "SecHub"
    version: str = "0.1.0"
    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)
    rate_limit: RateLimitConfig = Field(default_factory=RateLimitConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    monitoring: MonitoringConfig = Field(default_factory=MonitoringConfig)
    web: WebConfig = Field(default_factory=WebConfig)

    model_config = SettingsConfigDict(env_prefix="SECHUB_", env_nested_delimiter="__", case_sensitive=False)

    @classmethod
    def from_yaml(cls, path: Path) -> Config:
        log.debug("Loading configuration from YAML file: %s", path)
        if not path.is_file():
            raise FileNotFoundError(f"Configuration file not found or is not a file: {path}")
        with open(path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f)
        if not yaml_data:
            log.warning("Configuration file is empty: %s. Using default settings.", path)
            return cls.model_validate({})
        return cls.model_validate(yaml_data)


def find_config_file() -> Path | None:
    current_dir = Path.cwd()
    for path in (current_dir / "sechub.yaml", current_dir / "sechub.yml"):
        if path.exists():
            return path
    return None


def load_config(path: Path | None = None) -> Config:
    """Load configuration from ``path``, a discovered YAML file, or defaults."""
    config_path = path or find_config_file()
    if config_path is None:
        log.info("No config file found. Using default settings.")
        return Config()

    try:
        log.info("Loading configuration from: %s", config_path)
        return Config.from_yaml(config_path)
    except ValidationError as e:
        raise RuntimeError(f"Invalid configuration in '{config_path}': {e}") from e
