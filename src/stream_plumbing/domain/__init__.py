from .errors import EncodingFailure, IOFailure, StreamError
from .logging import LogMessage, level_enabled

__all__ = ["StreamError", "IOFailure", "EncodingFailure", "LogMessage", "level_enabled"]
