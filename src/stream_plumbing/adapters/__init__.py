from .file_io import FileLineSource, FileOutputSink, open_source, open_target
from .log_sinks import JsonlLogSink, StdoutLogSink, build_log_sink

__all__ = [
    "FileLineSource",
    "FileOutputSink",
    "JsonlLogSink",
    "StdoutLogSink",
    "build_log_sink",
    "open_source",
    "open_target",
]
