from .loader import ConfigError, TimelineConfig, load_config

__all__ = ["ConfigError", "TimelineConfig", "load_config"]
