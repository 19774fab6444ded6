"""Grouping of face crops into person groups."""
