"""Log models."""
