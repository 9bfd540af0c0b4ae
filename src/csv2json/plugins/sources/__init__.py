"""Input sources."""

from csv2json.plugins.sources.csv_source import CSVSource

__all__ = ["CSVSource"]
