"""Bundled question bank."""
