"""Helpers for CI release pipelines."""

__version__ = "0.1.0"
