"""Utilities module."""

from .config import RenderConfig

__all__ = ["RenderConfig"]
