"""Application state models."""
