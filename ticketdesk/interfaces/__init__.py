"""Interfaces for platform-dependent collaborators."""

from .scheduler import UiScheduler

__all__ = ["UiScheduler"]
