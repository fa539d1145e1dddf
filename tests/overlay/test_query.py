from __future__ import annotations

from livery.core.overlay.query import (
    RequestAnnotations,
    append_query,
    append_query_flag,
    get_query_param,
    has_query_flag,
    split_query,
    strip_query,
)


def test_split_and_strip_query() -> None:
    assert split_query("/a.tsx?x=1&y") == ("/a.tsx", "x=1&y")
    assert split_query("/a.tsx") == ("/a.tsx", "")
    assert strip_query("/a.tsx?brand=acme") == "/a.tsx"


def test_query_params_and_flags() -> None:
    module_id = "/a.css?livery-bridged&brand=acme"
    assert get_query_param(module_id, "brand") == "acme"
    assert get_query_param(module_id, "missing") is None
    assert has_query_flag(module_id, "livery-bridged")
    assert not has_query_flag("/a.css", "livery-bridged")


def test_append_query_picks_separator() -> None:
    assert append_query("/a.tsx", "__brand", "acme") == "/a.tsx?__brand=acme"
    assert append_query("/a.tsx?v=1", "__brand", "acme") == "/a.tsx?v=1&__brand=acme"
    assert append_query_flag("/a.css", "livery-bridged") == "/a.css?livery-bridged"


def test_annotations_prefer_primary_key() -> None:
    ann = RequestAnnotations.parse("/a.tsx?__brand=globex&brand=acme")
    assert ann.brand == "acme"
    assert ann.legacy_brand == "globex"
    assert ann.effective_brand == "acme"


def test_annotations_fall_back_to_legacy_key() -> None:
    assert RequestAnnotations.parse("/a.tsx?__brand=globex").effective_brand == "globex"


def test_annotations_treat_empty_and_missing_as_absent() -> None:
    assert RequestAnnotations.parse("/a.tsx?brand=").effective_brand is None
    assert RequestAnnotations.parse("/a.tsx?brand=&__brand=acme").effective_brand == "acme"
    assert RequestAnnotations.parse("/a.tsx") == RequestAnnotations()
    assert RequestAnnotations.parse(None) == RequestAnnotations()


def test_annotations_custom_keys() -> None:
    ann = RequestAnnotations.parse("/a.tsx?site=acme", brand_key="site", legacy_key="_site")
    assert ann.effective_brand == "acme"
