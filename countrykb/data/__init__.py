"""Bundled country data tables."""
