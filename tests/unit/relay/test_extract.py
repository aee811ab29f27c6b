"""Tests for the shape-tolerant hit extraction helpers."""

from __future__ import annotations

import pytest

from suggest_relay.services.relay import extract_field, extract_hit


@pytest.mark.parametrize(
    "value",
    ["Foo", ["Foo"], [{"raw": "Foo"}], [{"raw": "Foo", "highlighted": "<b>Foo</b>"}]],
)
def test_all_supported_shapes_extract_the_same_title(value) -> None:
    extraction = extract_field({"common.title": value}, "common.title")

    assert extraction.ok
    assert extraction.value == "Foo"


def test_only_first_array_element_is_considered() -> None:
    extraction = extract_field({"displayurl": [{"raw": "/a"}, {"raw": "/b"}]}, "displayurl")

    assert extraction.value == "/a"


def test_raw_wrapper_wins_over_later_string_elements() -> None:
    extraction = extract_field({"displayurl": [{"raw": "/raw"}, "/plain"]}, "displayurl")

    assert extraction.value == "/raw"


@pytest.mark.parametrize(
    "value",
    [[], [{"raw": 3}], [{"text": "Foo"}], [None], 7, None, {"raw": "Foo"}],
)
def test_unsupported_shapes_fail_with_reason(value) -> None:
    extraction = extract_field({"common.title": value}, "common.title")

    assert not extraction.ok
    assert extraction.value is None
    assert "common.title" in (extraction.reason or "")


def test_missing_field_reports_name() -> None:
    extraction = extract_field({}, "displayurl")

    assert not extraction.ok
    assert extraction.reason == "missing 'displayurl'"


@pytest.mark.parametrize("item", [None, "string", 3, ["common.title"]])
def test_non_object_hits_fail(item) -> None:
    assert not extract_field(item, "common.title").ok
    assert extract_hit(item).hit is None


def test_extract_hit_pairs_title_and_url() -> None:
    result = extract_hit({"common.title": ["Report"], "displayurl": [{"raw": "/r/1"}]})

    assert result.hit is not None
    assert result.hit.title == "Report"
    assert result.hit.display_url == "/r/1"
    assert result.reason is None


@pytest.mark.parametrize(
    "item",
    [
        {"common.title": "", "displayurl": "/x"},
        {"common.title": "Foo", "displayurl": ""},
        {"common.title": [{"raw": ""}], "displayurl": "/x"},
    ],
)
def test_extract_hit_rejects_empty_values(item) -> None:
    result = extract_hit(item)

    assert result.hit is None
    assert result.reason == "empty title or display url"
