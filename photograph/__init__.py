"""Photograph - gallery sharing and access control service."""

__version__ = "0.1.0"
