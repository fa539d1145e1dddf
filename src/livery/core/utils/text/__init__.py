"""Text helpers for Livery."""
from __future__ import annotations

from .templates import render_template_text

__all__ = ["render_template_text"]
