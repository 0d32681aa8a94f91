"""Automatic schedule generator for personal and team tasks."""

__version__ = "0.1.0"
