"""
Aluminium window weight and hardware calculator.

Decomposition:
  - Outer frame around the overall size.
  - Vertical mullions between columns, horizontal mullions between rows,
    each running between the outer frame members.
  - One panel per grid cell, sized from the weighted row/column split of
    the space left inside the frame and mullions. The panel type picks the
    sash sections it is built from.
  - Hardware quantities derived from the panel types, fittings and mesh.

A window without all seven profile roles resolved is not computed: weight
is zero and no hardware is listed.
"""

import logging
import math
from typing import List

from ..catalog import WindowProfileCatalog
from ..schemas import (
    CalculationResult,
    FittingType,
    HardwareLine,
    ProductType,
    WindowCellType,
    WindowConfig,
)
from ..units import M_TO_FT, mm_to_m
from .base import BaseCalculator
from .layout import window_cell_sizes

logger = logging.getLogger(__name__)

CASEMENT_LIKE = (WindowCellType.CASEMENT, WindowCellType.TOP_HUNG)


class WindowCalculator(BaseCalculator):

    product_type = ProductType.WINDOW.value

    def calculate(self, config: WindowConfig) -> CalculationResult:
        width_mm, height_mm = self.overall_mm(config)
        width_m, height_m = mm_to_m(width_mm), mm_to_m(height_mm)

        fp, sp = config.frame_profiles, config.shutter_profiles
        outer = self.lookup(fp.outer_frame, "outer frame")
        v_mullion = self.lookup(fp.vertical_mullion, "vertical mullion")
        h_mullion = self.lookup(fp.horizontal_mullion, "horizontal mullion")
        handle = self.lookup(sp.handle_section, "shutter handle")
        interlock = self.lookup(sp.interlock_section, "shutter interlock")
        top_bottom = self.lookup(sp.top_bottom_section, "shutter top/bottom")
        casement = self.lookup(sp.casement_sash, "casement sash")

        if None in (outer, v_mullion, h_mullion, handle, interlock, top_bottom, casement):
            logger.warning("window calculation skipped: profile set incomplete")
            return self.make_result(width_mm, height_mm, 0.0, [])

        # 1. Outer frame
        total_weight = self.perimeter_m(width_m, height_m) * outer.weight_kg_per_meter

        # 2. Mullions
        cols, rows = len(config.col_sizes), len(config.row_sizes)
        v_length = (cols - 1) * (height_m - 2 * mm_to_m(outer.width_mm)) if cols > 1 else 0.0
        h_length = (rows - 1) * (width_m - 2 * mm_to_m(outer.height_mm)) if rows > 1 else 0.0
        total_weight += v_length * v_mullion.weight_kg_per_meter
        total_weight += h_length * h_mullion.weight_kg_per_meter

        # 3. Panels
        col_widths_mm, row_heights_mm = window_cell_sizes(config, outer, v_mullion, h_mullion)
        sliding_count = 0
        casement_count = 0
        handle_count = 0
        hinge_count = 0
        mesh_sq_ft = 0.0

        for r, row in enumerate(config.grid):
            for c, cell in enumerate(row):
                cell_w = mm_to_m(col_widths_mm[c])
                cell_h = mm_to_m(row_heights_mm[r])

                if cell.has_mesh:
                    mesh_sq_ft += (cell_w * M_TO_FT) * (cell_h * M_TO_FT)
                for fitting in cell.fittings:
                    if fitting.type == FittingType.HANDLE:
                        handle_count += 1
                    elif fitting.type == FittingType.HINGE:
                        hinge_count += 1

                if cell.type == WindowCellType.SLIDING:
                    total_weight += 2 * cell_w * top_bottom.weight_kg_per_meter
                    total_weight += cell_h * handle.weight_kg_per_meter
                    total_weight += cell_h * interlock.weight_kg_per_meter
                    sliding_count += 1
                elif cell.type in CASEMENT_LIKE:
                    total_weight += self.perimeter_m(cell_w, cell_h) * casement.weight_kg_per_meter
                    casement_count += 1
                elif cell.type == WindowCellType.FIXED:
                    # fixed panels are framed in the casement sash section
                    total_weight += self.perimeter_m(cell_w, cell_h) * casement.weight_kg_per_meter
                # glass: pane sits directly in the frame, no sash

        hardware = self.hardware_lines(
            width_m, height_m, sliding_count, casement_count,
            handle_count, hinge_count, mesh_sq_ft,
        )
        return self.make_result(width_mm, height_mm, total_weight, hardware)

    def hardware_lines(self, width_m: float, height_m: float, sliding: int, casement: int,
                       handles: int, hinges: int, mesh_sq_ft: float) -> List[HardwareLine]:
        lines = []
        if sliding > 0:
            lines.append(self.make_hardware_line("Sliding Rollers", sliding * 2, "pcs"))
            lines.append(self.make_hardware_line("Sliding Lock", sliding, "pcs"))
        if casement > 0:
            lines.append(self.make_hardware_line("Casement Lock/Handle", casement, "pcs"))
            lines.append(self.make_hardware_line("Friction Hinges", casement * 2, "pcs"))
        if handles > 0:
            lines.append(self.make_hardware_line("Window Handle", handles, "pcs"))
        if hinges > 0:
            lines.append(self.make_hardware_line("Window Hinge", hinges, "pcs"))
        if mesh_sq_ft > 0:
            lines.append(self.make_hardware_line("SS Insect Mesh", round(mesh_sq_ft, 2), "sq ft"))
        lines.append(self.make_hardware_line(
            "Gasket/Sealant", math.ceil(width_m + height_m) * 2, "meters"))
        lines.append(self.make_hardware_line("Screws & Fasteners", 1, "lot"))
        return lines


def compute_window_quote(config: WindowConfig, window_profiles) -> CalculationResult:
    """Functional entry point; `window_profiles` is a WindowProfileCatalog or a list."""
    if not isinstance(window_profiles, WindowProfileCatalog):
        window_profiles = WindowProfileCatalog(window_profiles)
    return WindowCalculator(window_profiles).calculate(config)
