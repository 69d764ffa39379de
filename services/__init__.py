"""Service implementations for the time-series compression domain."""
