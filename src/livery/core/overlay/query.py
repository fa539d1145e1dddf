"""Query-string handling for module ids.

Module ids are ``<path>[?<query>]``. Brand annotations travel as query
parameters (``brand`` and the legacy ``__brand``), and bridge constituents
carry a bare marker flag.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple
from urllib.parse import parse_qs, quote, urlencode


def split_query(module_id: str) -> Tuple[str, str]:
    """Split ``module_id`` into ``(path, query)``; query excludes the ``?``."""
    path, sep, query = module_id.partition("?")
    return path, query if sep else ""


def strip_query(module_id: str) -> str:
    return split_query(module_id)[0]


def parse_query(module_id: str) -> Dict[str, List[str]]:
    _, query = split_query(module_id)
    if not query:
        return {}
    return parse_qs(query, keep_blank_values=True)


def get_query_param(module_id: str, key: str) -> Optional[str]:
    """Return the first value of ``key``, or None when absent."""
    values = parse_query(module_id).get(key)
    return values[0] if values else None


def has_query_flag(module_id: str, flag: str) -> bool:
    return flag in parse_query(module_id)


def append_query(module_id: str, key: str, value: str) -> str:
    sep = "&" if "?" in module_id else "?"
    return f"{module_id}{sep}{urlencode({key: value})}"


def append_query_flag(module_id: str, flag: str) -> str:
    sep = "&" if "?" in module_id else "?"
    return f"{module_id}{sep}{quote(flag, safe='-_.')}"


@dataclass(frozen=True)
class RequestAnnotations:
    """Brand annotations parsed from one module id.

    ``brand`` comes from the primary key and ``legacy_brand`` from the legacy
    key. Empty values count as absent.
    """

    brand: Optional[str] = None
    legacy_brand: Optional[str] = None

    @property
    def effective_brand(self) -> Optional[str]:
        return self.brand or self.legacy_brand

    @classmethod
    def parse(
        cls,
        module_id: Optional[str],
        *,
        brand_key: str = "brand",
        legacy_key: str = "__brand",
    ) -> "RequestAnnotations":
        if not module_id or "?" not in module_id:
            return cls()
        brand = get_query_param(module_id, brand_key) or None
        legacy = get_query_param(module_id, legacy_key) or None
        return cls(brand=brand, legacy_brand=legacy)


__all__ = [
    "RequestAnnotations",
    "append_query",
    "append_query_flag",
    "get_query_param",
    "has_query_flag",
    "parse_query",
    "split_query",
    "strip_query",
]
