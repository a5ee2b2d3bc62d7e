"""Diagnostic hint models."""
