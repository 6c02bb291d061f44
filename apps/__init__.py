"""Application pipelines."""
