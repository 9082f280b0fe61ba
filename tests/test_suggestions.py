"""
AI design suggestion tests.

Tests:
1-7.   validate_suggestion (field filtering, required left design, mirrored right design)
8-11.  apply_suggestion (unit conversion, colors kept, door split handling)
12.    Prompt building
13-17. request_suggestion (no key, good response, network error, bad JSON, invalid design)
"""

import json
import urllib.error
from unittest.mock import MagicMock, patch

import pytest

from ironforge.schemas import GateConfig, GateType, InnerDesign, Unit, default_gate_config
from ironforge.suggestions import (
    RESPONSE_SCHEMA,
    GateSuggestion,
    apply_suggestion,
    build_prompt,
    request_suggestion,
    validate_suggestion,
)


def _door(inner_design="vertical-bars", *steps):
    steps = steps or (("p7", 120),)
    return {
        "innerDesign": inner_design,
        "innerDesignSequence": [{"profileId": pid, "gap": gap} for pid, gap in steps],
    }


def _raw(**overrides):
    raw = {
        "gateType": "sliding-openable",
        "frameProfileId": "p29",
        "leftDoorWidth": 1200,
        "leftDoorDesign": _door("vertical-bars", ("p7", 120), ("p11", 80)),
        "rightDoorDesign": _door("sheet"),
    }
    raw.update(overrides)
    return raw


def _gemini_response(payload):
    """Mock urlopen context manager returning a Gemini envelope around `payload`."""
    text = payload if isinstance(payload, str) else json.dumps(payload)
    body = json.dumps({"candidates": [{"content": {"parts": [{"text": text}]}}]}).encode()
    response = MagicMock()
    response.read.return_value = body
    response.__enter__.return_value = response
    return response


# ============================================================
# validate_suggestion
# ============================================================

def test_validate_full_suggestion(gate_catalog):
    suggestion = validate_suggestion(_raw(), gate_catalog)
    assert suggestion.gate_type == GateType.SLIDING_OPENABLE
    assert suggestion.frame_profile_id == "p29"
    assert suggestion.left_door_width == 1200
    assert [s.profile_id for s in suggestion.left_door_design.inner_design_sequence] == ["p7", "p11"]
    assert suggestion.right_door_design.inner_design == InnerDesign.SHEET


def test_validate_drops_unknown_fields(gate_catalog):
    suggestion = validate_suggestion(_raw(gateType="telescopic", frameProfileId="p404"), gate_catalog)
    assert suggestion is not None
    assert suggestion.gate_type is None
    assert suggestion.frame_profile_id is None
    assert suggestion.left_door_width is None


def test_validate_requires_left_design(gate_catalog):
    assert validate_suggestion(_raw(leftDoorDesign=None), gate_catalog) is None
    assert validate_suggestion(_raw(leftDoorDesign=_door("zigzag")), gate_catalog) is None
    assert validate_suggestion(_raw(leftDoorDesign=_door("sheet", ("p404", 100))), gate_catalog) is None
    assert validate_suggestion("not a dict", gate_catalog) is None


def test_validate_rejects_non_numeric_gap(gate_catalog):
    assert validate_suggestion(_raw(leftDoorDesign=_door("sheet", ("p7", "wide"))), gate_catalog) is None
    assert validate_suggestion(_raw(leftDoorDesign=_door("sheet", ("p7", True))), gate_catalog) is None


def test_validate_empty_sequence_rejected(gate_catalog):
    raw = _raw(leftDoorDesign={"innerDesign": "sheet", "innerDesignSequence": []})
    assert validate_suggestion(raw, gate_catalog) is None


def test_right_design_mirrors_left_for_single_door(gate_catalog):
    suggestion = validate_suggestion(_raw(gateType="sliding"), gate_catalog)
    assert suggestion.left_door_width is None
    assert suggestion.right_door_design == suggestion.left_door_design


def test_invalid_right_design_dropped(gate_catalog):
    suggestion = validate_suggestion(_raw(rightDoorDesign=_door("blobs")), gate_catalog)
    assert suggestion.right_door_design is None


# ============================================================
# apply_suggestion
# ============================================================

def test_apply_converts_millimeters_to_display_unit(gate_catalog):
    data = default_gate_config().model_dump()
    data.update(width=300, height=150, unit=Unit.CM, left_door_width=None)
    config = GateConfig(**data)
    merged = apply_suggestion(config, validate_suggestion(_raw(), gate_catalog))
    assert merged.gate_type == GateType.SLIDING_OPENABLE
    assert merged.frame_profile_id == "p29"
    assert merged.left_door_width == pytest.approx(120)
    gaps = [s.gap for s in merged.left_door_design.inner_design_sequence]
    assert gaps == pytest.approx([12, 8])


def test_apply_keeps_colors_and_size(gate_catalog):
    config = default_gate_config()
    config.left_door_design.color = "#AA0000"
    merged = apply_suggestion(config, validate_suggestion(_raw(), gate_catalog))
    assert merged.left_door_design.color == "#AA0000"
    assert (merged.width, merged.height) == (3000, 1500)
    assert config.frame_profile_id == "p26"


def test_apply_out_of_range_split_falls_back_to_half(gate_catalog):
    suggestion = validate_suggestion(_raw(leftDoorWidth=5000), gate_catalog)
    merged = apply_suggestion(default_gate_config(), suggestion)
    assert merged.left_door_width is None
    assert merged.effective_left_door_width() == 1500


def test_apply_partial_suggestion(gate_catalog):
    suggestion = GateSuggestion(left_door_design=validate_suggestion(_raw(), gate_catalog).left_door_design)
    merged = apply_suggestion(default_gate_config(), suggestion)
    assert merged.gate_type == GateType.SLIDING
    assert merged.frame_profile_id == "p26"
    assert len(merged.left_door_design.inner_design_sequence) == 2


# ============================================================
# Prompt
# ============================================================

def test_prompt_includes_context_and_profiles(gate_catalog):
    prompt = build_prompt("strong and private", default_gate_config(), gate_catalog)
    assert "strong and private" in prompt
    assert "3000 mm" in prompt
    assert "p26: 40x40x2 mm" in prompt
    assert "Select Profile" not in prompt
    assert "(no current design)" in build_prompt("anything", None, gate_catalog)
    assert RESPONSE_SCHEMA["properties"]["gateType"]["enum"] == [g.value for g in GateType]


# ============================================================
# request_suggestion
# ============================================================

def test_no_api_key_returns_none(gate_catalog, no_ai_key):
    with patch("ironforge.suggestions.urllib.request.urlopen") as urlopen:
        assert request_suggestion("modern", default_gate_config(), gate_catalog) is None
    urlopen.assert_not_called()


def test_good_response_is_validated(gate_catalog, ai_key):
    with patch("ironforge.suggestions.urllib.request.urlopen",
               return_value=_gemini_response(_raw())) as urlopen:
        suggestion = request_suggestion("modern", default_gate_config(), gate_catalog)
    assert suggestion.frame_profile_id == "p29"
    request = urlopen.call_args[0][0]
    assert "key=test-key" in request.full_url
    body = json.loads(request.data)
    assert body["generationConfig"]["responseMimeType"] == "application/json"


def test_network_error_returns_none(gate_catalog, ai_key):
    with patch("ironforge.suggestions.urllib.request.urlopen",
               side_effect=urllib.error.URLError("unreachable")):
        assert request_suggestion("modern", None, gate_catalog) is None


def test_unparseable_response_returns_none(gate_catalog, ai_key):
    with patch("ironforge.suggestions.urllib.request.urlopen",
               return_value=_gemini_response("this is not json {")):
        assert request_suggestion("modern", None, gate_catalog) is None


def test_invalid_design_returns_none(gate_catalog, ai_key):
    with patch("ironforge.suggestions.urllib.request.urlopen",
               return_value=_gemini_response(_raw(leftDoorDesign=_door("zigzag")))):
        assert request_suggestion("modern", None, gate_catalog) is None
