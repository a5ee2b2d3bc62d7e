"""Event models."""
