"""Shared helpers for encoding detection and URL safety."""
