"""Test helper utilities for job board notifier tests."""

from .factories import make_draft, make_settings, make_student

__all__ = ["make_student", "make_settings", "make_draft"]
