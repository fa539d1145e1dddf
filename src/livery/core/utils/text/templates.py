"""Jinja2 rendering for generated module source.

Virtual modules (style bridges, frontier loaders) are emitted from small
templates. Control blocks sit on their own lines, so blocks are trimmed and
the trailing newline of each template is kept.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Dict

from jinja2 import Environment, StrictUndefined, Template

_ENV = Environment(
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
    undefined=StrictUndefined,
)


@lru_cache(maxsize=32)
def _compile(text: str) -> Template:
    return _ENV.from_string(text)


def render_template_text(text: str, context: Dict[str, Any]) -> str:
    """Render ``text`` with ``context``; undefined names raise."""
    return _compile(text).render(**context)


__all__ = ["render_template_text"]
