"""Celery tasks package."""

from academy.tasks import badges

__all__ = ["badges"]
