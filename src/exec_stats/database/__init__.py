"""Database access for Exec Stats."""
