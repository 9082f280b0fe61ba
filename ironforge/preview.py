"""
Preview geometry for the configurator canvas.

Produces a flat list of positioned rectangles in millimeters (origin at the
top-left of the structure, y pointing down). No drawing happens here; the
client maps shapes to SVG. Bar positions, counts and panel sizes come from
calculators/layout.py, the same code the weight calculators use.

For "diagonal" shapes (criss-cross) x/y is the bottom end of the bar, the
point it is rotated about.
"""

import logging
from typing import List, Optional

from .calculators.layout import (
    HORIZONTAL,
    VERTICAL,
    DoorSpan,
    criss_cross_layout,
    gate_door_spans,
    place_bars,
    resolve_sequence,
    window_cell_sizes,
)
from .catalog import SHEET_FILL_PROFILE_ID
from .schemas import CamelModel, GateConfig, GateType, InnerDesign, WindowConfig
from .units import to_mm

logger = logging.getLogger(__name__)


class Shape(CamelModel):
    kind: str
    x: float
    y: float
    width: float
    height: float
    rotation: float = 0.0
    ref: Optional[str] = None       # profile id, cell id or fitting id
    detail: Optional[str] = None    # cell type / fitting type / door key
    layer: str = "structure"


class PreviewGeometry(CamelModel):
    width_mm: float
    height_mm: float
    shapes: List[Shape] = []

    def count(self, kind: str, layer: Optional[str] = None) -> int:
        return sum(1 for s in self.shapes
                   if s.kind == kind and (layer is None or s.layer == layer))


def _frame_members(width: float, height: float, side: float, top: float,
                   ref: Optional[str], layer: str) -> List[Shape]:
    """Top, bottom, left and right members of a rectangular frame."""
    return [
        Shape(kind="frame", x=0, y=0, width=width, height=top, ref=ref, detail="top", layer=layer),
        Shape(kind="frame", x=0, y=height - top, width=width, height=top, ref=ref,
              detail="bottom", layer=layer),
        Shape(kind="frame", x=0, y=top, width=side, height=height - 2 * top, ref=ref,
              detail="left", layer=layer),
        Shape(kind="frame", x=width - side, y=top, width=side, height=height - 2 * top,
              ref=ref, detail="right", layer=layer),
    ]


def _fill_shapes(span: DoorSpan, origin_x: float, origin_y: float, unit, catalog,
                 layer: str) -> List[Shape]:
    design = span.design
    w, h = span.inner_width_mm, span.inner_height_mm
    if w <= 0 or h <= 0:
        return []
    sequence = design.inner_design_sequence
    shapes = []

    if design.inner_design == InnerDesign.VERTICAL_BARS:
        for bar in place_bars(w, sequence, catalog, unit, VERTICAL):
            shapes.append(Shape(kind="bar", x=origin_x + bar.offset_mm, y=origin_y,
                                width=bar.thickness_mm, height=h, ref=bar.profile.id,
                                detail=span.key, layer=layer))

    elif design.inner_design == InnerDesign.HORIZONTAL_BARS:
        for bar in place_bars(h, sequence, catalog, unit, HORIZONTAL):
            shapes.append(Shape(kind="bar", x=origin_x, y=origin_y + bar.offset_mm,
                                width=w, height=bar.thickness_mm, ref=bar.profile.id,
                                detail=span.key, layer=layer))

    elif design.inner_design == InnerDesign.CRISS_CROSS and sequence:
        step, profile = resolve_sequence(sequence[:1], catalog)[0]
        layout = criss_cross_layout(w, h, step, profile, unit)
        bottom = origin_y + h
        for i in range(layout.bars_one_way):
            offset = i * layout.spacing_mm - h
            shapes.append(Shape(kind="diagonal", x=origin_x + offset, y=bottom,
                                width=profile.width_mm, height=layout.diagonal_mm,
                                rotation=45, ref=profile.id, detail=span.key, layer=layer))
            shapes.append(Shape(kind="diagonal", x=origin_x + w - offset, y=bottom,
                                width=profile.width_mm, height=layout.diagonal_mm,
                                rotation=-45, ref=profile.id, detail=span.key, layer=layer))

    elif design.inner_design == InnerDesign.SHEET:
        shapes.append(Shape(kind="sheet", x=origin_x, y=origin_y, width=w, height=h,
                            ref=SHEET_FILL_PROFILE_ID, detail=span.key, layer=layer))

    return shapes


def build_gate_preview(config: GateConfig, catalog, layer: str = "structure") -> PreviewGeometry:
    width_mm = to_mm(config.width, config.unit)
    height_mm = to_mm(config.height, config.unit)
    geometry = PreviewGeometry(width_mm=width_mm, height_mm=height_mm)

    frame = catalog.get(config.frame_profile_id)
    if frame is None:
        logger.info("gate preview: no frame profile %r, nothing to draw", config.frame_profile_id)
        return geometry

    fw, fh = frame.width_mm, frame.height_mm
    geometry.shapes.extend(_frame_members(width_mm, height_mm, fw, fh, frame.id, layer))

    spans = gate_door_spans(config, frame)
    if config.gate_type == GateType.SLIDING_OPENABLE:
        centre_x = spans[1].x_mm - fw / 2
        geometry.shapes.append(Shape(kind="centre-member", x=centre_x, y=fh, width=fw,
                                     height=height_mm - 2 * fh, ref=frame.id, layer=layer))

    for span in spans:
        # the right leaf only loses half a frame width to the centre member
        inner_x = span.x_mm + (fw / 2 if span.key == "right" else fw)
        geometry.shapes.extend(_fill_shapes(span, inner_x, fh, config.unit, catalog, layer))
    return geometry


def build_window_preview(config: WindowConfig, window_catalog, gate_catalog) -> PreviewGeometry:
    width_mm = to_mm(config.width, config.unit)
    height_mm = to_mm(config.height, config.unit)
    geometry = PreviewGeometry(width_mm=width_mm, height_mm=height_mm)

    fp = config.frame_profiles
    outer = window_catalog.get(fp.outer_frame)
    v_mullion = window_catalog.get(fp.vertical_mullion)
    h_mullion = window_catalog.get(fp.horizontal_mullion)

    ofw = outer.width_mm if outer else 0.0
    ofh = outer.height_mm if outer else 0.0
    vmw = v_mullion.width_mm if v_mullion else 0.0
    hmh = h_mullion.height_mm if h_mullion else 0.0

    if outer is not None:
        geometry.shapes.extend(_frame_members(width_mm, height_mm, ofh, ofw, outer.id, "structure"))

    col_widths, row_heights = window_cell_sizes(config, outer, v_mullion, h_mullion)
    col_x = [ofh + sum(col_widths[:c]) + c * vmw for c in range(len(col_widths))]
    row_y = [ofw + sum(row_heights[:r]) + r * hmh for r in range(len(row_heights))]

    for i in range(len(col_widths) - 1):
        geometry.shapes.append(Shape(kind="mullion", x=col_x[i] + col_widths[i], y=ofw,
                                     width=vmw, height=height_mm - 2 * ofw,
                                     ref=fp.vertical_mullion, detail="vertical"))
    for i in range(len(row_heights) - 1):
        geometry.shapes.append(Shape(kind="mullion", x=ofh, y=row_y[i] + row_heights[i],
                                     width=width_mm - 2 * ofh, height=hmh,
                                     ref=fp.horizontal_mullion, detail="horizontal"))

    for r, row in enumerate(config.grid):
        for c, cell in enumerate(row):
            x, y, w, h = col_x[c], row_y[r], col_widths[c], row_heights[r]
            geometry.shapes.append(Shape(kind="panel", x=x, y=y, width=w, height=h,
                                         ref=cell.id, detail=cell.type.value))
            if cell.has_mesh:
                geometry.shapes.append(Shape(kind="mesh", x=x, y=y, width=w, height=h, ref=cell.id))
            for fitting in cell.fittings:
                geometry.shapes.append(Shape(
                    kind="fitting", x=x + fitting.x * w, y=y + fitting.y * h,
                    width=fitting.size, height=fitting.size, rotation=fitting.rotation,
                    ref=fitting.id, detail=fitting.type.value,
                ))

    if config.grill_config is not None:
        grill = build_gate_preview(config.grill_config, gate_catalog, layer="grill")
        geometry.shapes.extend(grill.shapes)
    return geometry
