from stook_recipes.app.services.ocr_parsing.text_normalizer import (
    merge_split_quantities,
    normalize_whitespace,
    preprocess_ocr_text,
)


def test_normalize_whitespace():
    assert normalize_whitespace("hello   world") == "hello world"
    assert normalize_whitespace("hello\r\nworld") == "hello\nworld"
    assert normalize_whitespace("  hello  ") == "hello"
    assert normalize_whitespace("hello\n\n\n\nworld") == "hello\n\nworld"
    assert normalize_whitespace("a\t\tb c") == "a b c"
    assert normalize_whitespace("") == ""


def test_merge_bare_quantity_unit_and_name():
    assert merge_split_quantities(["500", "g", "kipfilet"]) == ["500 g kipfilet"]


def test_merge_quantity_unit_with_name_line():
    assert merge_split_quantities(["2 eetlepels", "olijfolie"]) == ["2 eetlepels olijfolie"]
    assert merge_split_quantities(["1 el", "honing", "of ahornsiroop"]) == [
        "1 el honing of ahornsiroop"
    ]


def test_merge_leaves_headings_and_steps_alone():
    lines = ["200 g", "Bereiding", "1. Bak het vlees"]
    assert merge_split_quantities(lines) == lines


def test_preprocess_joins_hyphenated_words():
    assert preprocess_ocr_text("2 kg aardap-\npelen") == "2 kg aardappelen"


def test_preprocess_normalizes_ocr_artifacts():
    text = "| 2 el olie\n---\nBak 10 min op 180º C"
    assert preprocess_ocr_text(text) == "• 2 el olie\nBak 10 min op 180° C"


def test_preprocess_normalizes_dashes_and_quotes():
    assert preprocess_ocr_text("2–3 uur “low & slow”") == '2-3 uur "low & slow"'
