from .closeable import Closeable
from .log_sink import LogSink
from .sink import Sink
from .source import Source

__all__ = ["Source", "Sink", "Closeable", "LogSink"]
