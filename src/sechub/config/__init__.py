from .config import (
    CacheConfig,
    Config,
    ExtractionConfig,
    MonitoringConfig,
    RateLimitConfig,
    WebConfig,
    load_config,
)

__all__ = [
    "Config",
    "ExtractionConfig",
    "RateLimitConfig",
    "CacheConfig",
    "MonitoringConfig",
    "WebConfig",
    "load_config",
]
