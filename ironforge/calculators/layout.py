"""
Geometry shared by the weight calculators and the preview builder.

All lengths here are millimeters. Bar gaps arrive in the structure's display
unit and are converted on the way in. Both the calculator and the preview
call into this module, so the number of bars that get priced is always the
number of bars that get drawn.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from ..schemas import (
    DoorDesign,
    GateConfig,
    GateType,
    InnerDesignStep,
    Profile,
    UnitBasis,
    WindowConfig,
    WindowProfile,
)
from ..units import to_mm

VERTICAL = "vertical"
HORIZONTAL = "horizontal"


@dataclass(frozen=True)
class BarPlacement:
    profile: Profile
    offset_mm: float      # from the start of the span, pattern centred
    thickness_mm: float   # extent along the span
    gap_mm: float         # gap after this bar


@dataclass(frozen=True)
class CrissCross:
    spacing_mm: float
    bars_one_way: int
    diagonal_mm: float

    @property
    def total_bars(self) -> int:
        return self.bars_one_way * 2


@dataclass(frozen=True)
class DoorSpan:
    key: str              # "single", "left" or "right"
    x_mm: float           # left edge of the door leaf
    width_mm: float
    inner_width_mm: float
    inner_height_mm: float
    design: DoorDesign


def resolve_sequence(
    sequence: Sequence[InnerDesignStep], catalog
) -> List[Tuple[InnerDesignStep, Optional[Profile]]]:
    """
    Pair each step with its profile. Unknown ids and sheet stock (priced per
    square meter, so not a bar) resolve to None. The "Select Profile"
    placeholder resolves to itself: a bar of no width and no weight.
    """
    resolved = []
    for step in sequence:
        profile = catalog.get(step.profile_id)
        if profile is not None and profile.unit_basis != UnitBasis.PER_METER:
            profile = None
        resolved.append((step, profile))
    return resolved


def unresolved_profile_ids(sequence: Sequence[InnerDesignStep], catalog) -> List[str]:
    return [step.profile_id for step, profile in resolve_sequence(sequence, catalog) if profile is None]


def bar_thickness_mm(profile: Profile, orientation: str) -> float:
    """Vertical bars stack across their width, horizontal bars across their height."""
    return profile.width_mm if orientation == VERTICAL else profile.height_mm


def place_bars(
    span_mm: float,
    sequence: Sequence[InnerDesignStep],
    catalog,
    unit,
    orientation: str = VERTICAL,
) -> List[BarPlacement]:
    """
    Lay bars across `span_mm` by cycling through the sequence from step 0.

    A step whose profile cannot be resolved is skipped without moving the
    cursor. The placeholder profile is placed with zero thickness, so it
    only moves the cursor by its gap. Placement stops at the first bar that would run past the end of
    the span. The finished pattern is centred: the leftover space is split
    evenly before the first bar and after the last one.
    """
    if span_mm <= 0 or not sequence:
        return []

    resolved = []
    for step, profile in resolve_sequence(sequence, catalog):
        if profile is None:
            resolved.append((None, 0.0, 0.0))
        else:
            resolved.append((profile, bar_thickness_mm(profile, orientation), to_mm(step.gap, unit)))

    advances = [t + g for p, t, g in resolved if p is not None and t + g > 0]
    if not advances:
        return []
    max_steps = len(resolved) * (math.ceil(span_mm / min(advances)) + 1)

    raw = []
    position = 0.0
    for i in range(max_steps):
        profile, thickness, gap = resolved[i % len(resolved)]
        if profile is None:
            continue
        if position + thickness > span_mm:
            break
        raw.append((profile, thickness, gap))
        position += thickness + gap

    if not raw:
        return []

    pattern_mm = sum(t for _, t, _ in raw) + sum(g for _, _, g in raw[:-1])
    cursor = (span_mm - pattern_mm) / 2
    placements = []
    for profile, thickness, gap in raw:
        placements.append(BarPlacement(profile, cursor, thickness, gap))
        cursor += thickness + gap
    return placements


def sequence_average_weight(sequence: Sequence[InnerDesignStep], catalog) -> float:
    """Mean kg/m of the resolvable steps, each step counted once (placeholder at 0)."""
    weights = [p.weight_kg_per_meter for _, p in resolve_sequence(sequence, catalog) if p is not None]
    if not weights:
        return 0.0
    return sum(weights) / len(weights)


def criss_cross_layout(
    inner_width_mm: float,
    inner_height_mm: float,
    step: InnerDesignStep,
    profile: Optional[Profile],
    unit,
) -> CrissCross:
    """
    Two families of 45 degree diagonals. Each family needs enough bars to
    sweep the width plus the height of the opening at the given spacing,
    and every bar is cut to the full diagonal. A non-positive opening is
    not clamped; the counts come out of the same arithmetic.
    """
    diagonal = math.hypot(inner_width_mm, inner_height_mm)
    if profile is None:
        return CrissCross(spacing_mm=0.0, bars_one_way=0, diagonal_mm=diagonal)
    spacing = profile.width_mm + to_mm(step.gap, unit)
    if spacing <= 0:
        return CrissCross(spacing_mm=spacing, bars_one_way=0, diagonal_mm=diagonal)
    bars = math.ceil((inner_width_mm + inner_height_mm) / spacing)
    return CrissCross(spacing_mm=spacing, bars_one_way=bars, diagonal_mm=diagonal)


def gate_door_spans(config: GateConfig, frame_profile: Profile) -> List[DoorSpan]:
    """
    Split a gate into door leaves. A sliding-openable gate has two leaves
    sharing a centre member; each leaf loses a full frame width on its outer
    side and half a frame width to the centre member.
    """
    width_mm = to_mm(config.width, config.unit)
    height_mm = to_mm(config.height, config.unit)
    fw = frame_profile.width_mm
    inner_height = height_mm - 2 * frame_profile.height_mm

    if config.gate_type == GateType.SLIDING_OPENABLE:
        left_mm = to_mm(config.effective_left_door_width(), config.unit)
        right_mm = width_mm - left_mm
        return [
            DoorSpan("left", 0.0, left_mm, left_mm - fw - fw / 2, inner_height,
                     config.left_door_design),
            DoorSpan("right", left_mm, right_mm, right_mm - fw - fw / 2, inner_height,
                     config.effective_right_design()),
        ]

    return [
        DoorSpan("single", 0.0, width_mm, width_mm - 2 * fw, inner_height,
                 config.left_door_design),
    ]


def split_weighted(total: float, weights: Sequence[float]) -> List[float]:
    """Share `total` in proportion to `weights`. A zero weight sum counts as 1."""
    weight_sum = sum(weights) or 1
    return [total * w / weight_sum for w in weights]


def window_cell_sizes(
    config: WindowConfig,
    outer: Optional[WindowProfile],
    v_mullion: Optional[WindowProfile],
    h_mullion: Optional[WindowProfile],
) -> Tuple[List[float], List[float]]:
    """
    Column widths and row heights in mm. The usable span is the overall size
    minus both outer frame members and the mullions between cells. A missing
    profile takes no space.
    """
    width_mm = to_mm(config.width, config.unit)
    height_mm = to_mm(config.height, config.unit)
    of_w = outer.width_mm if outer else 0.0
    of_h = outer.height_mm if outer else 0.0
    vm_w = v_mullion.width_mm if v_mullion else 0.0
    hm_h = h_mullion.height_mm if h_mullion else 0.0

    usable_width = width_mm - 2 * of_h - (len(config.col_sizes) - 1) * vm_w
    usable_height = height_mm - 2 * of_w - (len(config.row_sizes) - 1) * hm_h
    return (
        split_weighted(usable_width, config.col_sizes),
        split_weighted(usable_height, config.row_sizes),
    )
