"""Validation of user-supplied schema definitions."""
