from __future__ import annotations

import copy

import pytest

from kardme.domain.background import (
    BackgroundShape,
    classify_background,
    is_canonical,
    normalize_background,
)

DEFAULT = {"version": 1, "opacity": 1, "base": {"kind": "solid", "color": "#ffffff"}, "overlays": []}


@pytest.mark.parametrize("value", [None, "", 0, False])
def test_absent_background_gets_default(value):
    assert normalize_background(value) == DEFAULT


def test_default_is_a_fresh_value():
    first = normalize_background(None)
    first["overlays"].append({"kind": "dots", "opacity": 1})
    assert normalize_background(None) == DEFAULT


def test_legacy_solid_migration():
    assert normalize_background({"mode": "solid", "color": "#112233"}) == {
        "version": 1,
        "opacity": 1,
        "base": {"kind": "solid", "color": "#112233"},
        "overlays": [],
    }


def test_legacy_gradient_migration():
    legacy = {"mode": "gradient", "from": "#000000", "to": "#ffffff", "angle": 45, "opacity": 0.5}
    assert normalize_background(legacy) == {
        "version": 1,
        "opacity": 0.5,
        "base": {
            "kind": "gradient",
            "angle": 45,
            "stops": [{"color": "#000000", "pos": 0}, {"color": "#ffffff", "pos": 100}],
        },
        "overlays": [],
    }


def test_legacy_gradient_defaults_angle_and_opacity():
    result = normalize_background({"mode": "gradient", "from": "#000", "to": "#fff"})
    assert result["opacity"] == 1
    assert result["base"]["angle"] == 180


def test_legacy_keeps_zero_opacity():
    assert normalize_background({"mode": "solid", "color": "#000", "opacity": 0})["opacity"] == 0


def test_malformed_legacy_propagates_missing_colors():
    result = normalize_background({"mode": "gradient"})
    assert result["base"]["stops"] == [{"color": None, "pos": 0}, {"color": None, "pos": 100}]
    assert normalize_background({"mode": "solid"})["base"] == {"kind": "solid", "color": None}


def test_empty_object_is_treated_as_legacy_gradient():
    assert classify_background({}) is BackgroundShape.LEGACY_GRADIENT
    assert normalize_background({})["base"]["kind"] == "gradient"


def test_canonical_is_kept_and_idempotent():
    value = {
        "version": 1,
        "opacity": 0.8,
        "base": {"kind": "image", "url": "https://cdn.example/bg.jpg", "fit": "cover", "zoom": 1.2},
        "imageOverlay": {"enabled": True, "color": "#000000", "opacity": 0.4},
        "overlays": [{"kind": "noise", "opacity": 0.2}],
        "browserBarColor": "#101010",
    }
    once = normalize_background(value)
    assert once == value
    assert normalize_background(once) == once


def test_canonical_coerces_opacity_and_overlays():
    result = normalize_background({"version": 1, "opacity": "0.5", "base": {"kind": "solid", "color": "#000"}})
    assert result["opacity"] == 1
    assert result["overlays"] == []
    nulled = normalize_background({"version": 1, "opacity": True, "base": {}, "overlays": None})
    assert nulled["opacity"] == 1
    assert nulled["overlays"] == []


def test_canonical_check_precedes_legacy_mode():
    value = {"version": 1, "mode": "solid", "color": "#ff0000", "base": {"kind": "gradient", "stops": []}}
    assert classify_background(value) is BackgroundShape.CANONICAL
    assert normalize_background(value)["base"] == {"kind": "gradient", "stops": []}


def test_normalize_does_not_mutate_input():
    value = {"version": 1, "base": {"kind": "solid", "color": "#000"}}
    snapshot = copy.deepcopy(value)
    result = normalize_background(value)
    result["base"]["color"] = "#fff"
    assert value == snapshot


def test_is_canonical():
    assert is_canonical({"version": 1})
    assert not is_canonical({"version": 2})
    assert not is_canonical({"mode": "solid"})
    assert not is_canonical(None)


def test_classify():
    assert classify_background(None) is BackgroundShape.ABSENT
    assert classify_background({"mode": "solid"}) is BackgroundShape.LEGACY_SOLID
    assert classify_background({"mode": "gradient"}) is BackgroundShape.LEGACY_GRADIENT
    assert classify_background("red") is BackgroundShape.LEGACY_GRADIENT
