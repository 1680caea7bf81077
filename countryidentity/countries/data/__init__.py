"""Bundled country data."""
