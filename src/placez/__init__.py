"""Placez: REST API for sharing geocoded places."""
