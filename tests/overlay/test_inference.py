from __future__ import annotations

from livery.core.overlay.inference import InferenceInput, explain_brand, infer_brand

KNOWN = {"acme", "globex"}


def test_specifier_query_wins_over_importer_query() -> None:
    assert infer_brand("./Button?brand=acme", "/site/src/App.tsx?brand=globex", KNOWN) == "acme"


def test_specifier_query_wins_over_importer_path() -> None:
    importer = "/site/src/components/brands/globex/Card.tsx"
    assert infer_brand("./Button?__brand=acme", importer, KNOWN) == "acme"


def test_importer_query_wins_over_importer_path() -> None:
    importer = "/site/src/components/brands/globex/Card.tsx?__brand=acme"
    assert infer_brand("./Button", importer, KNOWN) == "acme"


def test_importer_path_segment() -> None:
    assert infer_brand("./Button", "/site/src/components/brands/acme/Card.tsx", KNOWN) == "acme"


def test_innermost_path_segment_wins() -> None:
    importer = "/site/src/brands/globex/ui/brands/acme/Card.tsx"
    assert infer_brand("./Button", importer, KNOWN) == "acme"


def test_unknown_brand_falls_through_to_next_rule() -> None:
    assert infer_brand("./Button?brand=nobody", "/site/src/App.tsx?brand=acme", KNOWN) == "acme"
    assert infer_brand("./Button?brand=nobody", "/site/src/App.tsx", KNOWN) is None


def test_no_brand_without_annotation_or_path() -> None:
    assert infer_brand("./Button", "/site/src/App.tsx", KNOWN) is None
    assert infer_brand("./Button", None, KNOWN) is None


def test_virtual_importer_path_is_ignored() -> None:
    assert infer_brand("./x", "\0/site/src/brands/acme/x", KNOWN) is None


def test_explain_brand_names_the_rule() -> None:
    req = InferenceInput(
        specifier="./Button",
        importer="/site/src/components/brands/acme/Card.tsx",
        known_brands=frozenset(KNOWN),
    )
    assert explain_brand(req) == ("importer-path", "acme")
    assert explain_brand(InferenceInput("./B?brand=globex", None, frozenset(KNOWN))) == (
        "specifier-query",
        "globex",
    )
