"""
Gate / grill weight calculator.

Decomposition:
  - Frame: perimeter of the overall size in the frame profile.
  - Sliding-openable gates: one extra full-height centre member, and two
    door leaves that each lose one and a half frame widths.
  - Fill: the door design's inner pattern (vertical bars, horizontal bars,
    criss-cross diagonals or a plate sheet) inside each leaf's inner opening.

Windows reuse this calculator for their security grill.
"""

import logging
from dataclasses import dataclass, field
from typing import List

from ..catalog import SHEET_FILL_PROFILE_ID, ProfileCatalog
from ..schemas import CalculationResult, GateConfig, GateType, InnerDesign, ProductType, UnitBasis
from ..units import mm_to_m
from .base import BaseCalculator
from .layout import (
    HORIZONTAL,
    VERTICAL,
    DoorSpan,
    criss_cross_layout,
    gate_door_spans,
    place_bars,
    resolve_sequence,
    sequence_average_weight,
    unresolved_profile_ids,
)

logger = logging.getLogger(__name__)


@dataclass
class DoorFill:
    key: str
    inner_design: InnerDesign
    inner_width_mm: float
    inner_height_mm: float
    bar_count: int = 0
    weight_kg: float = 0.0


@dataclass
class GateBreakdown:
    width_mm: float
    height_mm: float
    frame_weight_kg: float = 0.0
    centre_member_weight_kg: float = 0.0
    doors: List[DoorFill] = field(default_factory=list)

    @property
    def fill_weight_kg(self) -> float:
        return sum(d.weight_kg for d in self.doors)

    @property
    def total_weight_kg(self) -> float:
        return self.frame_weight_kg + self.centre_member_weight_kg + self.fill_weight_kg


class GateCalculator(BaseCalculator):

    product_type = ProductType.GATE.value

    def calculate(self, config: GateConfig) -> CalculationResult:
        b = self.breakdown(config)
        return self.make_result(b.width_mm, b.height_mm, b.total_weight_kg)

    def breakdown(self, config: GateConfig) -> GateBreakdown:
        width_mm, height_mm = self.overall_mm(config)
        result = GateBreakdown(width_mm=width_mm, height_mm=height_mm)

        frame = self.lookup(config.frame_profile_id, "frame")
        if frame is None:
            return result

        width_m, height_m = mm_to_m(width_mm), mm_to_m(height_mm)
        result.frame_weight_kg = self.perimeter_m(width_m, height_m) * frame.weight_kg_per_meter

        if config.gate_type == GateType.SLIDING_OPENABLE:
            result.centre_member_weight_kg = height_m * frame.weight_kg_per_meter

        for span in gate_door_spans(config, frame):
            result.doors.append(self.fill(span, config.unit))
        return result

    def fill(self, span: DoorSpan, unit) -> DoorFill:
        """Weight and bar count of one leaf's inner pattern."""
        design = span.design
        w, h = span.inner_width_mm, span.inner_height_mm
        door = DoorFill(span.key, design.inner_design, w, h)

        sequence = design.inner_design_sequence
        if design.inner_design != InnerDesign.SHEET:
            skipped = unresolved_profile_ids(sequence, self.catalog)
            if skipped:
                logger.warning("gate fill (%s door): profile ids %s skipped", span.key, skipped)

        if design.inner_design in (InnerDesign.VERTICAL_BARS, InnerDesign.HORIZONTAL_BARS):
            vertical = design.inner_design == InnerDesign.VERTICAL_BARS
            bars = place_bars(
                w if vertical else h,
                sequence,
                self.catalog,
                unit,
                VERTICAL if vertical else HORIZONTAL,
            )
            bar_length_m = mm_to_m(h if vertical else w)
            door.bar_count = len(bars)
            door.weight_kg = len(bars) * bar_length_m * sequence_average_weight(sequence, self.catalog)

        elif design.inner_design == InnerDesign.CRISS_CROSS:
            if not sequence:
                return door
            step, profile = resolve_sequence(sequence[:1], self.catalog)[0]
            layout = criss_cross_layout(w, h, step, profile, unit)
            door.bar_count = layout.total_bars
            if profile is not None:
                door.weight_kg = (
                    layout.total_bars * mm_to_m(layout.diagonal_mm) * profile.weight_kg_per_meter
                )

        elif design.inner_design == InnerDesign.SHEET:
            sheet = self.lookup(SHEET_FILL_PROFILE_ID, "sheet fill")
            if sheet is None:
                return door
            if sheet.unit_basis != UnitBasis.PER_SQ_METER:
                logger.warning("gate fill: %s is not priced per square meter, sheet skipped", sheet.id)
                return door
            door.weight_kg = mm_to_m(w) * mm_to_m(h) * sheet.weight_kg_per_meter

        return door


def compute_gate_quote(config: GateConfig, gate_profiles) -> CalculationResult:
    """Functional entry point; `gate_profiles` is a ProfileCatalog or a list of Profile."""
    if not isinstance(gate_profiles, ProfileCatalog):
        gate_profiles = ProfileCatalog(gate_profiles)
    return GateCalculator(gate_profiles).calculate(config)
