"""Presentation of finished search results."""

from .text import render_result

__all__ = ["render_result"]
