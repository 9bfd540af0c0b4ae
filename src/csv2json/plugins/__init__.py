"""Pipeline stages: the CSV source, the JSON sink and diagnostics sinks."""
