"""Network-facing services."""
