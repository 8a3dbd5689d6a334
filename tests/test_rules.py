"""Unit tests for rule catalog construction and suffix lookup."""

import gzip
import json
import logging

import pytest

from services.categories import Category
from services.errors import CatalogError
from services.rules import Rule, RuleCatalog, default_catalog


def _rule(
    match: str,
    replace: str,
    *,
    required: Category = Category.UNCONSTRAINED,
    result: Category = Category.V5,
    reason: str = "test",
) -> Rule:
    return Rule(
        match_suffix=match,
        replace_suffix=replace,
        required_categories=required,
        result_categories=result,
        reason=reason,
    )


_YOMICHAN = {
    "passive": [
        {"kanaIn": "かれる", "kanaOut": "く", "rulesIn": ["v1"], "rulesOut": ["v5"]},
    ],
    "polite past": [
        {"kanaIn": "ました", "kanaOut": "る", "rulesIn": [], "rulesOut": ["v1"]},
    ],
    "fallback": [
        {"kanaIn": "っす", "kanaOut": "です", "rulesIn": [], "rulesOut": []},
    ],
}


def test_lookup_returns_every_matching_suffix_in_catalog_order() -> None:
    rules = (
        _rule("ました", "る", reason="a"),
        _rule("た", "る", reason="b"),
        _rule("した", "す", reason="c"),
        _rule("ない", "る", reason="d"),
    )
    catalog = RuleCatalog(rules)

    assert [rule.reason for rule in catalog.lookup("話しました")] == ["a", "b", "c"]
    assert [rule.reason for rule in catalog.lookup("話した")] == ["b", "c"]


def test_lookup_keeps_rules_sharing_one_suffix() -> None:
    catalog = RuleCatalog((
        _rule("った", "う", reason="u"),
        _rule("った", "つ", reason="tsu"),
        _rule("った", "る", reason="ru"),
    ))

    assert [rule.replace_suffix for rule in catalog.lookup("買った")] == ["う", "つ", "る"]


def test_lookup_with_no_match_or_empty_term_is_empty() -> None:
    catalog = RuleCatalog((_rule("ます", "る"),))

    assert catalog.lookup("猫") == ()
    assert catalog.lookup("") == ()


def test_lookup_matches_suffix_equal_to_whole_term() -> None:
    catalog = RuleCatalog((_rule("ねえ", "ない"),))

    assert len(catalog.lookup("ねえ")) == 1


def test_rule_apply_replaces_suffix() -> None:
    assert _rule("かれる", "く").apply("聞かれる") == "聞く"


def test_catalog_rejects_empty_match_suffix() -> None:
    with pytest.raises(CatalogError, match="empty match suffix"):
        RuleCatalog((_rule("た", "る"), _rule("", "る")))


def test_catalog_rejects_no_op_rule() -> None:
    rule = _rule("る", "る", required=Category.V1, result=Category.V1)

    with pytest.raises(CatalogError, match="no-op rewrite"):
        RuleCatalog((rule,))


def test_catalog_accepts_same_suffix_with_changed_categories() -> None:
    rule = _rule("る", "る", required=Category.V1, result=Category.V5)

    assert len(RuleCatalog((rule,))) == 1


def test_catalog_reports_every_malformed_rule() -> None:
    rules = tuple(_rule("", "x", reason=f"r{i}") for i in range(30))

    with pytest.raises(CatalogError) as excinfo:
        RuleCatalog(rules)

    message = str(excinfo.value)
    assert "(30 errors)" in message
    assert "'r24'" in message
    assert "'r25'" not in message
    assert "and 5 more" in message


def test_catalog_rejects_non_rule_entries() -> None:
    with pytest.raises(CatalogError, match="expected Rule, got tuple"):
        RuleCatalog((("た", "る"),))


def test_catalog_built_twice_looks_up_identically() -> None:
    first = RuleCatalog.from_mapping(_YOMICHAN)
    second = RuleCatalog.from_mapping(_YOMICHAN)

    assert first == second
    for term in ("聞かれる", "聞きました", "そうっす", "猫"):
        assert first.lookup(term) == second.lookup(term)


def test_from_mapping_translates_yomichan_fields() -> None:
    catalog = RuleCatalog.from_mapping(_YOMICHAN)
    passive, polite_past, fallback = catalog.rules

    assert passive == Rule("かれる", "く", Category.V1, Category.V5, "passive")
    assert polite_past.required_categories == Category.UNCONSTRAINED
    assert polite_past.result_categories == Category.V1
    assert fallback.result_categories == Category.ANY


def test_from_mapping_rejects_entry_without_kana() -> None:
    with pytest.raises(CatalogError, match="Malformed 'passive' entry"):
        RuleCatalog.from_mapping({"passive": [{"kanaIn": "かれる"}]})


def test_from_mapping_rejects_unknown_category() -> None:
    data = {"x": [{"kanaIn": "だ", "kanaOut": "", "rulesIn": [], "rulesOut": ["cop"]}]}

    with pytest.raises(CatalogError, match="Unknown category tag"):
        RuleCatalog.from_mapping(data)


def test_from_mapping_rejects_non_mapping() -> None:
    with pytest.raises(CatalogError, match="Expected a mapping"):
        RuleCatalog.from_mapping([])


def test_from_table_splits_space_separated_tags() -> None:
    catalog = RuleCatalog.from_table({"-ba": [("れば", "る", "", "v1 v5")]})

    (rule,) = catalog.rules
    assert rule.required_categories == Category.UNCONSTRAINED
    assert rule.result_categories == Category.V1 | Category.V5


def test_from_file_reads_json(tmp_path) -> None:
    path = tmp_path / "deinflect.json"
    path.write_text(json.dumps(_YOMICHAN, ensure_ascii=False), encoding="utf-8")

    assert RuleCatalog.from_file(path) == RuleCatalog.from_mapping(_YOMICHAN)


def test_from_file_reads_gzipped_json(tmp_path, caplog) -> None:
    path = tmp_path / "deinflect.json.gz"
    with gzip.open(path, "wt", encoding="utf-8") as f:
        json.dump(_YOMICHAN, f, ensure_ascii=False)

    with caplog.at_level(logging.INFO, logger="services.rules"):
        catalog = RuleCatalog.from_file(str(path))

    assert len(catalog) == 3
    assert "Loaded 3 deinflection rules" in caplog.text


def test_from_file_wraps_missing_file(tmp_path) -> None:
    with pytest.raises(CatalogError, match="Could not read rule catalog"):
        RuleCatalog.from_file(tmp_path / "missing.json")


def test_from_file_wraps_invalid_json(tmp_path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(CatalogError, match="Could not read rule catalog"):
        RuleCatalog.from_file(path)


@pytest.mark.parametrize(
    ("entry", "message"),
    [
        ({"kanaIn": 5, "kanaOut": "く"}, "match_suffix must be str, got int"),
        ({"kanaIn": "かれる", "kanaOut": None}, "replace_suffix must be str, got NoneType"),
    ],
)
def test_from_mapping_rejects_non_string_kana(entry, message) -> None:
    with pytest.raises(CatalogError, match=message):
        RuleCatalog.from_mapping({"passive": [entry]})


@pytest.mark.parametrize("key", ["rulesIn", "rulesOut"])
@pytest.mark.parametrize("tags", [None, "v1", [1]])
def test_from_mapping_rejects_malformed_tag_lists(key, tags) -> None:
    entry = {"kanaIn": "かれる", "kanaOut": "く", key: tags}

    with pytest.raises(CatalogError, match=f"{key} must be a list of tags"):
        RuleCatalog.from_mapping({"passive": [entry]})


def test_from_mapping_rejects_non_list_entries() -> None:
    with pytest.raises(CatalogError, match="Expected a list of 'passive' entries, got NoneType"):
        RuleCatalog.from_mapping({"passive": None})


def test_catalog_rejects_mistyped_rule_fields() -> None:
    rules = (
        Rule(5, "く", Category.V1, Category.V5, "passive"),
        Rule("かれる", "く", 1, Category.V5, "passive"),
        Rule("かれる", "く", Category.V1, "v5", None),
    )

    with pytest.raises(CatalogError) as excinfo:
        RuleCatalog(rules)

    message = str(excinfo.value)
    assert "(4 errors)" in message
    assert "Rule 0 ('passive'): match_suffix must be str, got int" in message
    assert "Rule 1 ('passive'): required_categories must be Category, got int" in message
    assert "Rule 2 (None): reason must be str, got NoneType" in message
    assert "Rule 2 (None): result_categories must be Category, got str" in message


def test_from_file_wraps_undecodable_bytes(tmp_path) -> None:
    path = tmp_path / "latin1.json"
    path.write_bytes(b"\xff\xfe{\x00}\x00")

    with pytest.raises(CatalogError, match="Could not read rule catalog") as excinfo:
        RuleCatalog.from_file(path)

    assert isinstance(excinfo.value.__cause__, UnicodeDecodeError)


def test_reasons_are_distinct_in_first_seen_order() -> None:
    catalog = RuleCatalog((
        _rule("た", "る", reason="past"),
        _rule("ない", "る", reason="negative"),
        _rule("った", "う", reason="past"),
    ))

    assert catalog.reasons() == ("past", "negative")


def test_default_catalog_is_shared_and_well_formed() -> None:
    catalog = default_catalog()

    assert catalog is default_catalog()
    assert len(catalog) > 300
    assert all(rule.match_suffix for rule in catalog)
    assert {"passive", "polite past", "-te", "-e"} <= set(catalog.reasons())
