"""Flet desktop front-end: admin dashboard and read-only viewer."""
