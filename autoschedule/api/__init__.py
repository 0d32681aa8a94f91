"""API routers."""

from autoschedule.api import schedule

__all__ = [
    "schedule",
]
