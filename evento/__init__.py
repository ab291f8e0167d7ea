"""Evento: event listing and management front-end."""

__version__ = "1.0.0"
