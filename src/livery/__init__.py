"""
Livery - brand-aware module resolution overlays

Livery decides, for every module request in a multi-brand site build, whether
the request is redirected to a brand override, merged with one (style
modules), or left untouched, in both dev and production builds.
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
