from .loader import ConfigError, load_settings, parse_settings
from .models import AppSettings, IOSettings, LoggingSettings

__all__ = ["AppSettings", "ConfigError", "IOSettings", "LoggingSettings", "load_settings", "parse_settings"]
