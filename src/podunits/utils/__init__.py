"""Shared helpers for rendering and logging."""
