"""Pipeline engine: record channel, completion signal and coordinator.

The coordinator lives in csv2json.engine.coordinator and is not re-exported
here, since it imports the source and sink plugins which themselves depend
on the channel.
"""

from csv2json.engine.channel import RecordChannel
from csv2json.engine.completion import CompletionSignal

__all__ = [
    "CompletionSignal",
    "RecordChannel",
]
