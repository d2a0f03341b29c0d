"""Tharbiya registration service — sign-ups, dashboard reporting and call campaign."""

__version__ = "1.2.0"
