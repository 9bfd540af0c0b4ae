"""Output sinks."""

from csv2json.plugins.sinks.json_format import JSONFormat
from csv2json.plugins.sinks.json_sink import JSONSink, destination_for

__all__ = ["JSONFormat", "JSONSink", "destination_for"]
