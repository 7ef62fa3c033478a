"""Backend proxy between the segment explorer frontend and the Strava API."""

from .app import create_app

__all__ = ["create_app"]
