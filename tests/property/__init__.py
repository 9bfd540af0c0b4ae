"""Property-based tests for csv2json invariants."""
