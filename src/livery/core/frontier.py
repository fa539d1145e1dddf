"""Frontier component loaders.

``frontier.config.yaml`` at the project root lists the application's
top-level component entrypoints::

    name: storefront
    entrypoints:
      - src/entries/admin/AdminApp.tsx
      - checkout/Checkout.tsx

The ``virtual:frontier`` module exports ``componentLoaders``, a map from
entrypoint key to a lazy ``import()``. Inside a brand bundle the overlay
engine redirects ``virtual:frontier`` to ``virtual:frontier?brand=<b>`` and
only that brand's loaders are emitted.

Route helpers map a request URL's first path segment onto an entrypoint.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Tuple, Union
from urllib.parse import parse_qs, quote, urljoin, urlsplit

from livery.core.utils.io import read_yaml
from livery.core.utils.text import render_template_text

logger = logging.getLogger(__name__)

FRONTIER_ID = "virtual:frontier"
RESOLVED_FRONTIER_ID = "\0" + FRONTIER_ID
DEFAULT_ENTRY_NAME = "main"

_FRONTIER_TEMPLATE = """\
export const componentLoaders = {
{{ pairs | join(sep) }}
}
"""


@dataclass(frozen=True)
class FrontierConfig:
    name: str
    entrypoints: Tuple[str, ...]


def read_frontier_config(path: Union[str, Path]) -> Optional[FrontierConfig]:
    """Load ``frontier.config.yaml``; None when missing or without an entrypoint list."""
    data = read_yaml(Path(path), default=None)
    if not isinstance(data, dict) or not isinstance(data.get("entrypoints"), list):
        return None
    return FrontierConfig(
        name=str(data.get("name") or "default"),
        entrypoints=tuple(str(p) for p in data["entrypoints"]),
    )


def normalize_component_path(raw: str, source_dir: str = "src") -> str:
    """Map an entrypoint as written in the config onto a root-relative id.

    >>> normalize_component_path("checkout/Checkout.tsx")
    '/src/checkout/Checkout.tsx'
    >>> normalize_component_path("src/App.tsx")
    '/src/App.tsx'
    """
    p = raw.strip().replace("\\", "/")
    if p.startswith("/"):
        return p
    if p.startswith(f"{source_dir}/"):
        return "/" + p
    return f"/{source_dir}/" + re.sub(r"^\.?/?", "", p, count=1)


def derive_route_segment(raw: str, source_dir: str = "src") -> str:
    """Route segment served by an entrypoint.

    The directory after ``/<source_dir>/entries/`` when present, else the
    first path segment under ``/<source_dir>/``, else ``main``.

    >>> derive_route_segment("app/entries/admin/AdminApp.tsx", source_dir="app")
    'admin'
    """
    p = normalize_component_path(raw, source_dir)
    prefix = f"/{source_dir}/"
    match = re.search(re.escape(prefix) + r"entries/([^/]+)", p)
    if match:
        return match.group(1)
    rest = p[len(prefix):] if p.startswith(prefix) else p
    parts = [s for s in rest.split("/") if s]
    return parts[0] if parts else DEFAULT_ENTRY_NAME


def list_available_entries(config: Optional[FrontierConfig], source_dir: str = "src") -> List[str]:
    if config is None:
        return []
    return [seg for seg in (derive_route_segment(p, source_dir) for p in config.entrypoints) if seg]


def _first_url_segment(url: str) -> Optional[str]:
    pathname = urlsplit(urljoin("http://localhost", url)).path
    parts = [s for s in pathname.split("/") if s]
    return parts[0] if parts else None


def resolve_entry_name_from_url(
    url: str, config: Optional[FrontierConfig], source_dir: str = "src"
) -> str:
    """Entry name for a request URL; ``main`` when nothing matches."""
    try:
        first = _first_url_segment(url)
    except ValueError:
        return DEFAULT_ENTRY_NAME
    if first and first in list_available_entries(config, source_dir):
        return first
    return DEFAULT_ENTRY_NAME


def resolve_component_path_from_url(
    url: str, config: Optional[FrontierConfig], source_dir: str = "src"
) -> Optional[str]:
    if config is None or not config.entrypoints:
        return None
    try:
        first = _first_url_segment(url)
    except ValueError:
        return None
    if not first:
        return None
    for raw in config.entrypoints:
        if derive_route_segment(raw, source_dir) == first:
            return normalize_component_path(raw, source_dir)
    return None


def _js_string(value: str) -> str:
    return "'" + value.replace("\\", "\\\\").replace("'", "\\'") + "'"


def _branded(spec: str, brand: str, key: str) -> str:
    sep = "&" if "?" in spec else "?"
    return f"{spec}{sep}{key}={quote(brand, safe='')}"


def build_frontier_module(
    entrypoints: Iterable[str],
    brands: Iterable[str],
    brand: Optional[str] = None,
    key: str = "brand",
    source_dir: str = "src",
) -> str:
    """Render the ``virtual:frontier`` module body.

    With ``brand`` only that brand's loaders are emitted; otherwise each
    entrypoint gets its unbranded loader followed by one per brand.
    """
    brand_list = sorted(brands)
    specs: List[str] = []
    for spec in (normalize_component_path(p, source_dir) for p in entrypoints):
        if brand:
            specs.append(_branded(spec, brand, key))
        else:
            specs.append(spec)
            specs.extend(_branded(spec, b, key) for b in brand_list)
    pairs = [f"  {_js_string(s)}: () => import({_js_string(s)})" for s in specs]
    return render_template_text(_FRONTIER_TEMPLATE, {"pairs": pairs, "sep": ",\n"})


class FrontierPlugin:
    """Host hooks serving ``virtual:frontier``."""

    name = "livery-frontier"

    def __init__(
        self,
        config_path: Union[str, Path],
        brands_provider: Callable[[], Iterable[str]],
        add_watch: Optional[Callable[[str], None]] = None,
        *,
        key: str = "brand",
        source_dir: str = "src",
    ) -> None:
        self.config_path = Path(config_path)
        self._brands = brands_provider
        self._add_watch = add_watch
        self.key = key
        self.source_dir = source_dir

    def on_resolve_id(self, specifier: str) -> Optional[str]:
        if specifier == FRONTIER_ID or specifier.startswith(FRONTIER_ID + "?"):
            return "\0" + specifier
        return None

    def on_load(self, module_id: str) -> Optional[str]:
        if not module_id.startswith(RESOLVED_FRONTIER_ID):
            return None
        _, _, query = module_id.partition("?")
        brand = (parse_qs(query).get(self.key) or [""])[0] or None
        if self._add_watch is not None:
            self._add_watch(str(self.config_path))
        config = read_frontier_config(self.config_path)
        entrypoints = config.entrypoints if config else ()
        logger.debug("Frontier loaders for %s (brand=%s): %d entrypoint(s)",
                     self.config_path, brand, len(entrypoints))
        return build_frontier_module(entrypoints, self._brands(), brand, self.key, self.source_dir)


__all__ = [
    "DEFAULT_ENTRY_NAME",
    "FRONTIER_ID",
    "FrontierConfig",
    "FrontierPlugin",
    "RESOLVED_FRONTIER_ID",
    "build_frontier_module",
    "derive_route_segment",
    "list_available_entries",
    "normalize_component_path",
    "read_frontier_config",
    "resolve_component_path_from_url",
    "resolve_entry_name_from_url",
]
