"""Exec Stats: organization execution statistics for operations dashboards."""

__version__ = "0.1.0"
