"""Brand inference for a module request.

Rules are evaluated in order and the first one naming a *known* brand wins:

=================  =====================================================
specifier-query    ``brand``/``__brand`` query on the requested specifier
importer-query     ``brand``/``__brand`` query on the importer id
importer-path      importer lives under ``.../brands/<brand>/...``
=================  =====================================================

No match means "no brand"; the request is left to default resolution.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import AbstractSet, Callable, Optional, Tuple

from .paths import brand_segment, is_virtual_id
from .query import RequestAnnotations, strip_query


@dataclass(frozen=True)
class InferenceInput:
    specifier: str
    importer: Optional[str]
    known_brands: AbstractSet[str]
    brands_dir_name: str = "brands"
    brand_key: str = "brand"
    legacy_key: str = "__brand"

    def annotations(self, module_id: Optional[str]) -> RequestAnnotations:
        return RequestAnnotations.parse(
            module_id, brand_key=self.brand_key, legacy_key=self.legacy_key
        )


InferenceRule = Callable[[InferenceInput], Optional[str]]


def _specifier_query(req: InferenceInput) -> Optional[str]:
    return req.annotations(req.specifier).effective_brand


def _importer_query(req: InferenceInput) -> Optional[str]:
    return req.annotations(req.importer).effective_brand


def _importer_path(req: InferenceInput) -> Optional[str]:
    if not req.importer or is_virtual_id(req.importer):
        return None
    path = strip_query(req.importer)
    if os.sep != "/":
        path = path.replace("/", os.sep)
    # Innermost brands/<b>/ segment wins for nested layouts.
    best: Optional[Tuple[int, str]] = None
    for brand in req.known_brands:
        idx = path.rfind(brand_segment(brand, req.brands_dir_name))
        if idx != -1 and (best is None or idx > best[0]):
            best = (idx, brand)
    return best[1] if best else None


RULES: Tuple[Tuple[str, InferenceRule], ...] = (
    ("specifier-query", _specifier_query),
    ("importer-query", _importer_query),
    ("importer-path", _importer_path),
)


def explain_brand(req: InferenceInput) -> Optional[Tuple[str, str]]:
    """Return ``(rule_name, brand)`` for the first matching rule, else None."""
    for name, rule in RULES:
        brand = rule(req)
        if brand and brand in req.known_brands:
            return name, brand
    return None


def infer_brand(
    specifier: str,
    importer: Optional[str],
    known_brands: AbstractSet[str],
    *,
    brands_dir_name: str = "brands",
    brand_key: str = "brand",
    legacy_key: str = "__brand",
) -> Optional[str]:
    match = explain_brand(
        InferenceInput(
            specifier=specifier,
            importer=importer,
            known_brands=known_brands,
            brands_dir_name=brands_dir_name,
            brand_key=brand_key,
            legacy_key=legacy_key,
        )
    )
    return match[1] if match else None


__all__ = ["InferenceInput", "InferenceRule", "RULES", "explain_brand", "infer_brand"]
