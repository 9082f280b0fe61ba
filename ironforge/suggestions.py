"""
AI-assisted gate design suggestions.

Uses Gemini to turn a freeform request ("strong frame, privacy on the small
door") into a partial gate configuration. Everything the model returns is
checked against the enums and the profile catalog before it is used; fields
that fail validation are dropped, and a suggestion without a usable left
door design is discarded.

Fallback: no API key, a network error or unparseable JSON all return None.
The configurator keeps the user's current design. Never crashes.
"""

import json
import logging
import numbers
import urllib.error
import urllib.request
from typing import Optional

from .config import settings
from .schemas import CamelModel, DoorDesign, GateConfig, GateType, InnerDesign, InnerDesignStep
from .units import from_mm

logger = logging.getLogger(__name__)

GATE_TYPE_LABELS = {
    "sliding": "Sliding",
    "openable": "Openable",
    "fixed": "Fixed",
    "sliding-openable": "Sliding + Openable",
}

_DOOR_DESIGN_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "innerDesign": {"type": "STRING", "enum": [d.value for d in InnerDesign]},
        "innerDesignSequence": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "profileId": {"type": "STRING"},
                    "gap": {"type": "NUMBER"},
                },
                "required": ["profileId", "gap"],
            },
        },
    },
    "required": ["innerDesign", "innerDesignSequence"],
}

RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "gateType": {"type": "STRING", "enum": [g.value for g in GateType]},
        "frameProfileId": {"type": "STRING"},
        "leftDoorWidth": {"type": "NUMBER"},
        "leftDoorDesign": _DOOR_DESIGN_SCHEMA,
        "rightDoorDesign": _DOOR_DESIGN_SCHEMA,
    },
    "required": ["gateType", "frameProfileId", "leftDoorDesign", "rightDoorDesign"],
}


class GateSuggestion(CamelModel):
    """Validated suggestion. Lengths (door width, gaps) are in millimeters."""
    gate_type: Optional[GateType] = None
    frame_profile_id: Optional[str] = None
    left_door_width: Optional[float] = None
    left_door_design: DoorDesign
    right_door_design: Optional[DoorDesign] = None


def is_ai_available() -> bool:
    return bool(settings.GEMINI_API_KEY)


def _is_number(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _valid_door_design(raw, catalog) -> Optional[DoorDesign]:
    if not isinstance(raw, dict):
        return None
    if raw.get("innerDesign") not in {d.value for d in InnerDesign}:
        return None
    sequence = raw.get("innerDesignSequence")
    if not isinstance(sequence, list) or not sequence:
        return None
    steps = []
    for step in sequence:
        if not isinstance(step, dict):
            return None
        profile_id, gap = step.get("profileId"), step.get("gap")
        if not profile_id or profile_id not in catalog or not _is_number(gap):
            return None
        steps.append(InnerDesignStep(profile_id=profile_id, gap=gap))
    return DoorDesign(inner_design=raw["innerDesign"], inner_design_sequence=steps)


def validate_suggestion(raw, catalog) -> Optional[GateSuggestion]:
    """
    Keep only the fields that check out:
      - gateType: a known gate type
      - frameProfileId: present in the catalog
      - leftDoorWidth: numeric, and only for sliding-openable gates
      - door designs: known inner design, non-empty sequence, every step a
        catalog profile with a numeric gap
    Returns None when the left door design is unusable.
    """
    if not isinstance(raw, dict):
        return None

    left = _valid_door_design(raw.get("leftDoorDesign"), catalog)
    if left is None:
        logger.warning("Suggestion rejected: no valid left door design")
        return None

    gate_type = raw.get("gateType")
    gate_type = GateType(gate_type) if gate_type in {g.value for g in GateType} else None
    frame_id = raw.get("frameProfileId")
    frame_id = frame_id if isinstance(frame_id, str) and frame_id in catalog else None

    left_width = None
    if gate_type == GateType.SLIDING_OPENABLE and _is_number(raw.get("leftDoorWidth")):
        left_width = float(raw["leftDoorWidth"])

    if gate_type == GateType.SLIDING_OPENABLE:
        right = _valid_door_design(raw.get("rightDoorDesign"), catalog)
    else:
        right = left.model_copy(deep=True)

    return GateSuggestion(
        gate_type=gate_type,
        frame_profile_id=frame_id,
        left_door_width=left_width,
        left_door_design=left,
        right_door_design=right,
    )


def apply_suggestion(config: GateConfig, suggestion: GateSuggestion) -> GateConfig:
    """
    Merge a suggestion into a copy of `config`. Suggested millimeter lengths
    are converted to the config's display unit; colors and size are kept.
    """
    new = config.model_copy(deep=True)
    if suggestion.gate_type is not None:
        new.gate_type = suggestion.gate_type
    if suggestion.frame_profile_id is not None:
        new.frame_profile_id = suggestion.frame_profile_id

    def to_config_unit(design: DoorDesign, keep_from: DoorDesign) -> DoorDesign:
        return DoorDesign(
            inner_design=design.inner_design,
            inner_design_sequence=[
                InnerDesignStep(profile_id=s.profile_id, gap=from_mm(s.gap, config.unit))
                for s in design.inner_design_sequence
            ],
            color=keep_from.color,
            texture=keep_from.texture,
        )

    new.left_door_design = to_config_unit(suggestion.left_door_design, config.left_door_design)
    if suggestion.right_door_design is not None:
        current_right = config.right_door_design or config.left_door_design
        new.right_door_design = to_config_unit(suggestion.right_door_design, current_right)

    if new.gate_type == GateType.SLIDING_OPENABLE and suggestion.left_door_width is not None:
        width = from_mm(suggestion.left_door_width, config.unit)
        # an out-of-range split would fail validation; fall back to half
        new.left_door_width = width if 0 < width < new.width else None
    return GateConfig.model_validate(new.model_dump())


def build_prompt(prompt: str, config: Optional[GateConfig], catalog) -> str:
    if config is not None:
        context = (
            f"  - Width: {config.width:g} {config.unit.value}\n"
            f"  - Height: {config.height:g} {config.unit.value}\n"
            f"  - Gate Type: {GATE_TYPE_LABELS.get(config.gate_type.value, 'Not set')}"
        )
        if config.gate_type == GateType.SLIDING_OPENABLE and config.left_door_width:
            context += f"\n  - Left Door Width: {config.left_door_width:g} {config.unit.value}"
    else:
        context = "  (no current design)"

    profiles = ", ".join(f"{p.id}: {p.name}" for p in catalog.all() if not p.is_placeholder)

    return f"""Analyze the user's request for an iron gate design and translate it into a structured JSON object.

Current gate specifications:
{context}

The user's specific request is: "{prompt}"

Available profiles for gates: {profiles}. Tube names read WIDTHxHEIGHTxWALL_THICKNESS.

Guidelines:
1. Use the current gate specifications as context. For a vague request ("make it look modern"), apply the new design to the existing dimensions and gate type.
2. If the request asks for a different gate type, you may change it.
3. For a strong frame pick a heavier profile such as p29 (50x50x2). For privacy use innerDesign "sheet". For simple vertical lines use "vertical-bars".
4. Only a "sliding-openable" gate may have different left and right door designs; you may then also suggest leftDoorWidth in millimeters.
5. If gateType is NOT "sliding-openable", rightDoorDesign MUST be an identical copy of leftDoorDesign.
6. Every gap is in millimeters; 80 to 150 is reasonable.
7. Give innerDesignSequence 1 to 3 steps.

Return ONLY a JSON object with keys gateType, frameProfileId, leftDoorWidth (optional), leftDoorDesign, rightDoorDesign."""


def _call_gemini(prompt: str, model: Optional[str] = None) -> str:
    """Call Gemini API. Raises on failure."""
    model = model or settings.GEMINI_MODEL
    url = (
        "https://generativelanguage.googleapis.com/v1beta/models/"
        "%s:generateContent?key=%s" % (model, settings.GEMINI_API_KEY)
    )

    payload = json.dumps({
        "contents": [{"parts": [{"text": prompt}]}],
        "generationConfig": {
            "temperature": 0.2,
            "responseMimeType": "application/json",
            "responseSchema": RESPONSE_SCHEMA,
        },
    }).encode("utf-8")

    req = urllib.request.Request(
        url,
        data=payload,
        headers={"Content-Type": "application/json"},
        method="POST",
    )

    with urllib.request.urlopen(req, timeout=settings.GEMINI_TIMEOUT_SECONDS) as response:
        result = json.loads(response.read())
        return result["candidates"][0]["content"]["parts"][0]["text"]


def request_suggestion(prompt: str, config: Optional[GateConfig], catalog) -> Optional[GateSuggestion]:
    """Ask Gemini for a design and validate it. None when unavailable or unusable."""
    if not is_ai_available():
        logger.info("No GEMINI_API_KEY, design suggestions disabled")
        return None

    try:
        text = _call_gemini(build_prompt(prompt, config, catalog))
        raw = json.loads(text.strip())
    except (urllib.error.URLError, TimeoutError) as e:
        logger.warning("Gemini request failed: %s", e)
        return None
    except (json.JSONDecodeError, KeyError, IndexError, TypeError) as e:
        logger.warning("Could not parse Gemini response: %s", e)
        return None

    return validate_suggestion(raw, catalog)
