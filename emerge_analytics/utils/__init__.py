"""Shared helpers for the error-pattern analytics system."""
