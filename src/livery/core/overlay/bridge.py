"""Style bridges: one virtual module composing a base stylesheet and its overlay.

A bridge is described by :class:`StyleBridge` and travels through the host
pipeline only as its encoded id::

    \\0livery-style-bridge:module?base=%2Fr%2Fsrc%2Fa.module.css&overlay=...

so the load step can rebuild it without any side table.

Plain stylesheets are imported for their side effects, base first, so the
overlay's declarations win the cascade. CSS-module stylesheets export
class-name maps; the bridge exports the merged map, joining the class names
of keys defined on both sides.
"""
from __future__ import annotations

import json
import os
from dataclasses import dataclass
from typing import Callable, Iterable, Literal, Optional
from urllib.parse import parse_qs, urlencode

from livery.core.exceptions import BridgeIdError
from livery.core.utils.text import render_template_text

from .paths import compute_base_path_from_overlay, compute_overlay_path
from .query import append_query_flag

StyleBridgeKind = Literal["plain", "module"]

BRIDGE_PREFIX = "\0livery-style-bridge:"
_KINDS = ("plain", "module")

_BRIDGE_TEMPLATE = """\
{% if kind == "plain" %}
import {{ base }};
import {{ overlay }};
{% else %}
import __base from {{ base }};
import __overlay from {{ overlay }};
const __merged = {};
for (const key of new Set([...Object.keys(__base || {}), ...Object.keys(__overlay || {})])) {
  const a = __base ? __base[key] : undefined;
  const b = __overlay ? __overlay[key] : undefined;
  __merged[key] = a && b ? a + " " + b : (a || b);
}
export default __merged;
{% endif %}
"""


def is_style_file(path: str, extensions: Iterable[str]) -> bool:
    return os.path.splitext(path)[1].lower() in tuple(extensions)


def style_kind(path: str) -> StyleBridgeKind:
    """``module`` for CSS-module files (``*.module.*``), else ``plain``."""
    return "module" if ".module." in os.path.basename(path) else "plain"


@dataclass(frozen=True)
class StyleBridge:
    base: str
    overlay: str
    kind: StyleBridgeKind

    def __post_init__(self) -> None:
        if self.kind not in _KINDS:
            raise BridgeIdError(
                f"Unknown style bridge kind: {self.kind!r}",
                context={"kind": self.kind},
            )

    def encode(self) -> str:
        return f"{BRIDGE_PREFIX}{self.kind}?{urlencode({'base': self.base, 'overlay': self.overlay})}"

    @staticmethod
    def is_bridge_id(module_id: str) -> bool:
        return module_id.startswith(BRIDGE_PREFIX)

    @classmethod
    def decode(cls, module_id: str) -> "StyleBridge":
        if not cls.is_bridge_id(module_id):
            raise BridgeIdError(
                "Not a style bridge id", context={"id": module_id}
            )
        kind, _, query = module_id[len(BRIDGE_PREFIX):].partition("?")
        params = parse_qs(query)
        base = (params.get("base") or [""])[0]
        overlay = (params.get("overlay") or [""])[0]
        if not base or not overlay:
            raise BridgeIdError(
                "Style bridge id is missing its base or overlay",
                context={"id": module_id},
            )
        return cls(base=base, overlay=overlay, kind=kind)  # type: ignore[arg-type]

    def render(self, marker: str = "livery-bridged") -> str:
        """Emit the bridge module body.

        Both constituents carry ``marker`` so the overlay engine leaves them
        to default resolution instead of bridging them again.
        """
        return render_template_text(
            _BRIDGE_TEMPLATE,
            {
                "kind": self.kind,
                "base": json.dumps(append_query_flag(self.base, marker)),
                "overlay": json.dumps(append_query_flag(self.overlay, marker)),
            },
        )


def plan_style_bridge(
    resolved_path: str,
    brand: str,
    root: str,
    exists: Callable[[str], bool],
    *,
    source_dir: str = "src",
    brands_dir_name: str = "brands",
) -> Optional[StyleBridge]:
    """Decide whether ``resolved_path`` should be served through a bridge.

    Case A: ``resolved_path`` is a base file whose overlay exists.
    Case B: ``resolved_path`` already is an overlay whose base exists.
    """
    kind = style_kind(resolved_path)
    candidate = compute_overlay_path(
        resolved_path, brand, root, source_dir=source_dir, brands_dir_name=brands_dir_name
    )
    if candidate != resolved_path:
        if exists(candidate):
            return StyleBridge(base=resolved_path, overlay=candidate, kind=kind)
        return None
    base = compute_base_path_from_overlay(
        resolved_path, brand, root, source_dir=source_dir, brands_dir_name=brands_dir_name
    )
    if base and exists(base):
        return StyleBridge(base=base, overlay=resolved_path, kind=kind)
    return None


__all__ = [
    "BRIDGE_PREFIX",
    "StyleBridge",
    "StyleBridgeKind",
    "is_style_file",
    "plan_style_bridge",
    "style_kind",
]
