"""Livery core library package.

Houses configuration loading, the brand overlay engine and the frontier
component-loader helpers consumed by the CLI and by host build pipelines.
"""

from . import exceptions  # noqa: F401

__all__ = ["exceptions"]
