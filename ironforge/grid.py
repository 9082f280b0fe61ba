"""
Window grid editing, plus the security grill and door design shortcuts.

Every operation takes a config and returns a new one; the input is never
modified. Row/column weights and the cell grid always change together
so the grid shape keeps matching the size arrays.
"""

import logging
import uuid
from typing import List, Tuple

from .schemas import (
    DoorDesign,
    Fitting,
    FittingType,
    GateConfig,
    GridCell,
    WindowCellType,
    WindowConfig,
    default_gate_config,
)

logger = logging.getLogger(__name__)


def _clamp_unit(value: float) -> float:
    return min(1.0, max(0.0, float(value)))


def _resize_sizes(sizes: List[float], count: int) -> List[float]:
    sizes = list(sizes)
    while len(sizes) < count:
        sizes.append(1)  # new rows/columns start at unit weight
    while len(sizes) > count:
        sizes.pop()
    return sizes


def resize_grid(config: WindowConfig, rows: int, cols: int) -> WindowConfig:
    """
    Resize to `rows` x `cols` (at least 1 x 1). Cells that still exist keep
    their type, mesh and fittings; new cells start as plain fixed panels.
    """
    rows = max(1, int(rows))
    cols = max(1, int(cols))
    new = config.model_copy(deep=True)
    old_grid = new.grid

    def keep_or_default(r: int, c: int) -> GridCell:
        if r < len(old_grid) and c < len(old_grid[r]):
            return old_grid[r][c]
        return GridCell.default(r, c)

    new.row_sizes = _resize_sizes(new.row_sizes, rows)
    new.col_sizes = _resize_sizes(new.col_sizes, cols)
    new.grid = [[keep_or_default(r, c) for c in range(cols)] for r in range(rows)]
    logger.debug("window grid resized from %dx%d to %dx%d",
                 len(config.row_sizes), len(config.col_sizes), rows, cols)
    return new


def change_dimension(config: WindowConfig, dimension: str, delta: int) -> WindowConfig:
    """Grow or shrink "rows" or "cols" by `delta`, never below one."""
    if dimension == "rows":
        return resize_grid(config, len(config.row_sizes) + delta, len(config.col_sizes))
    if dimension == "cols":
        return resize_grid(config, len(config.row_sizes), len(config.col_sizes) + delta)
    raise ValueError(f"Unknown grid dimension: {dimension!r}. Use 'rows' or 'cols'.")


def add_row(config: WindowConfig) -> WindowConfig:
    return change_dimension(config, "rows", 1)


def remove_row(config: WindowConfig) -> WindowConfig:
    return change_dimension(config, "rows", -1)


def add_column(config: WindowConfig) -> WindowConfig:
    return change_dimension(config, "cols", 1)


def remove_column(config: WindowConfig) -> WindowConfig:
    return change_dimension(config, "cols", -1)


def _locate(config: WindowConfig, cell_id: str) -> Tuple[int, int]:
    for r, row in enumerate(config.grid):
        for c, cell in enumerate(row):
            if cell.id == cell_id:
                return r, c
    raise KeyError(f"No cell {cell_id!r} in window grid")


def find_cell(config: WindowConfig, cell_id: str) -> GridCell:
    r, c = _locate(config, cell_id)
    return config.grid[r][c]


def _edit_cell(config: WindowConfig, cell_id: str):
    r, c = _locate(config, cell_id)
    new = config.model_copy(deep=True)
    return new, new.grid[r][c]


def set_cell_type(config: WindowConfig, cell_id: str, cell_type) -> WindowConfig:
    new, cell = _edit_cell(config, cell_id)
    cell.type = WindowCellType(cell_type)
    return new


def set_cell_mesh(config: WindowConfig, cell_id: str, has_mesh: bool) -> WindowConfig:
    new, cell = _edit_cell(config, cell_id)
    cell.has_mesh = bool(has_mesh)
    return new


def add_fitting(config: WindowConfig, cell_id: str, fitting_type,
                x: float = 0.5, y: float = 0.5) -> WindowConfig:
    """Drop a handle or hinge on a panel at relative position (x, y)."""
    fitting_type = FittingType(fitting_type)
    new, cell = _edit_cell(config, cell_id)
    cell.fittings.append(Fitting(
        id=f"{fitting_type.value}_{uuid.uuid4().hex[:8]}",
        type=fitting_type,
        x=_clamp_unit(x),
        y=_clamp_unit(y),
    ))
    return new


def _fitting_index(cell: GridCell, fitting_id: str) -> int:
    for i, fitting in enumerate(cell.fittings):
        if fitting.id == fitting_id:
            return i
    raise KeyError(f"No fitting {fitting_id!r} on cell {cell.id!r}")


def move_fitting(config: WindowConfig, cell_id: str, fitting_id: str,
                 x: float, y: float) -> WindowConfig:
    """Positions outside the panel are clamped onto its edge."""
    new, cell = _edit_cell(config, cell_id)
    fitting = cell.fittings[_fitting_index(cell, fitting_id)]
    fitting.x = _clamp_unit(x)
    fitting.y = _clamp_unit(y)
    return new


def remove_fitting(config: WindowConfig, cell_id: str, fitting_id: str) -> WindowConfig:
    new, cell = _edit_cell(config, cell_id)
    del cell.fittings[_fitting_index(cell, fitting_id)]
    return new


# --- Security grill ---

def attach_grill(config: WindowConfig) -> WindowConfig:
    """
    Put an iron security grill on the window: the default gate design, sized
    to the window in the window's unit. An existing grill is kept as it is.
    """
    new = config.model_copy(deep=True)
    if new.grill_config is None:
        new.grill_config = default_gate_config().model_copy(update={
            "width": config.width,
            "height": config.height,
            "unit": config.unit,
            "left_door_width": None,
        })
        logger.debug("security grill attached (%g x %g %s)",
                     config.width, config.height, config.unit.value)
    return new


def detach_grill(config: WindowConfig) -> WindowConfig:
    return config.model_copy(update={"grill_config": None}, deep=True)


def set_grill_design(config: WindowConfig, design: DoorDesign) -> WindowConfig:
    """A grill is one leaf, so both door designs follow the edit."""
    if config.grill_config is None:
        raise ValueError("Window has no security grill")
    new = config.model_copy(deep=True)
    new.grill_config.left_door_design = design.model_copy(deep=True)
    new.grill_config.right_door_design = design.model_copy(deep=True)
    return new


# --- Gate door designs ---

COPY_DIRECTIONS = ("left-to-right", "right-to-left")


def copy_door_design(config: GateConfig, direction: str) -> GateConfig:
    """
    Copy one leaf's inner design onto the other. With no right design set,
    the right door already shows the left one, so "right-to-left" is a no-op.
    """
    new = config.model_copy(deep=True)
    if direction == "left-to-right":
        new.right_door_design = new.left_door_design.model_copy(deep=True)
    elif direction == "right-to-left":
        if new.right_door_design is not None:
            new.left_door_design = new.right_door_design.model_copy(deep=True)
    else:
        raise ValueError(
            f"Unknown copy direction: {direction!r}. Use one of {', '.join(COPY_DIRECTIONS)}."
        )
    return new
