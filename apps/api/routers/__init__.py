"""Routers package."""

from . import (
    health,
    video,
)
