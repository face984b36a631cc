"""Authentication and organization access checks."""
