"""HTTP API for the execution dashboard."""
