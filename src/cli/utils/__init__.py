"""Shared CLI helpers: config and output formatting."""
