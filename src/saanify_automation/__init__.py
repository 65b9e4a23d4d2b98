"""Saanify automation and task-dispatch service."""

__all__ = ["__version__"]

__version__ = "0.1.0"
