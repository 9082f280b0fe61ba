"""
Window grid editing tests.

Tests:
1-6.  Resize (grow, shrink, minimum size, cells kept by position, input untouched)
7-9.  Cell edits (type, mesh, unknown cell)
10-14. Fittings (add, clamp, move, remove, unknown fitting)
15-18. Security grill (attach sized to the window, keep existing, detach, design edit)
19-21. Gate door design copy (both directions, unknown direction)
"""

import pytest

from ironforge import grid
from ironforge.schemas import (
    FittingType,
    GateType,
    InnerDesign,
    Unit,
    WindowCellType,
    default_gate_config,
)


# ============================================================
# Resize
# ============================================================

def test_add_row_appends_unit_weight(window_config):
    grown = grid.add_row(window_config)
    assert grown.row_sizes == [1, 1]
    assert len(grown.grid) == 2
    assert [c.id for c in grown.grid[1]] == ["r1c0", "r1c1", "r1c2"]
    assert all(c.type == WindowCellType.FIXED for c in grown.grid[1])


def test_resize_preserves_cells_by_position(window_config):
    config = grid.set_cell_mesh(window_config, "r0c2", True)
    config = grid.add_fitting(config, "r0c1", "handle")
    grown = grid.resize_grid(config, 2, 4)
    assert [c.type for c in grown.grid[0][:3]] == [
        WindowCellType.FIXED, WindowCellType.SLIDING, WindowCellType.SLIDING]
    assert grown.grid[0][2].has_mesh
    assert len(grown.grid[0][1].fittings) == 1
    assert grown.grid[0][3].id == "r0c3"
    assert grown.col_sizes == [1, 1, 1, 1]


def test_shrink_drops_the_tail(window_config):
    config = window_config.model_copy(deep=True)
    config.col_sizes = [2, 1, 3]
    shrunk = grid.remove_column(config)
    assert shrunk.col_sizes == [2, 1]
    assert [c.id for c in shrunk.grid[0]] == ["r0c0", "r0c1"]
    assert shrunk.grid[0][1].type == WindowCellType.SLIDING


def test_resize_never_below_one(window_config):
    tiny = grid.resize_grid(window_config, 0, -3)
    assert tiny.row_sizes == [1]
    assert tiny.col_sizes == [1]
    assert len(tiny.grid) == 1 and len(tiny.grid[0]) == 1
    assert grid.remove_row(tiny).row_sizes == [1]


def test_change_dimension(window_config):
    assert len(grid.change_dimension(window_config, "cols", 2).col_sizes) == 5
    assert len(grid.change_dimension(window_config, "rows", 1).row_sizes) == 2
    with pytest.raises(ValueError):
        grid.change_dimension(window_config, "depth", 1)


def test_resize_leaves_input_untouched(window_config):
    grid.resize_grid(window_config, 3, 1)
    assert window_config.row_sizes == [1]
    assert window_config.col_sizes == [1, 1, 1]
    assert len(window_config.grid[0]) == 3


# ============================================================
# Cell edits
# ============================================================

def test_set_cell_type(window_config):
    edited = grid.set_cell_type(window_config, "r0c0", "casement")
    assert grid.find_cell(edited, "r0c0").type == WindowCellType.CASEMENT
    assert grid.find_cell(window_config, "r0c0").type == WindowCellType.FIXED


def test_set_cell_mesh(window_config):
    edited = grid.set_cell_mesh(window_config, "r0c1", True)
    assert grid.find_cell(edited, "r0c1").has_mesh
    assert not grid.find_cell(window_config, "r0c1").has_mesh


def test_unknown_cell(window_config):
    with pytest.raises(KeyError):
        grid.find_cell(window_config, "r9c9")
    with pytest.raises(KeyError):
        grid.set_cell_type(window_config, "r9c9", "glass")


# ============================================================
# Fittings
# ============================================================

def test_add_fitting(window_config):
    edited = grid.add_fitting(window_config, "r0c1", FittingType.HINGE, x=0.1, y=0.9)
    fitting = grid.find_cell(edited, "r0c1").fittings[0]
    assert fitting.type == FittingType.HINGE
    assert fitting.id.startswith("hinge_")
    assert (fitting.x, fitting.y) == (0.1, 0.9)
    assert grid.find_cell(window_config, "r0c1").fittings == []


def test_add_fitting_clamps_position(window_config):
    edited = grid.add_fitting(window_config, "r0c0", "handle", x=1.7, y=-0.2)
    fitting = grid.find_cell(edited, "r0c0").fittings[0]
    assert (fitting.x, fitting.y) == (1.0, 0.0)


def test_move_fitting(window_config):
    edited = grid.add_fitting(window_config, "r0c0", "handle")
    fitting_id = grid.find_cell(edited, "r0c0").fittings[0].id
    moved = grid.move_fitting(edited, "r0c0", fitting_id, 0.25, 2.0)
    fitting = grid.find_cell(moved, "r0c0").fittings[0]
    assert (fitting.x, fitting.y) == (0.25, 1.0)
    assert grid.find_cell(edited, "r0c0").fittings[0].x == 0.5


def test_remove_fitting(window_config):
    edited = grid.add_fitting(window_config, "r0c0", "handle")
    edited = grid.add_fitting(edited, "r0c0", "hinge")
    first, second = grid.find_cell(edited, "r0c0").fittings
    removed = grid.remove_fitting(edited, "r0c0", first.id)
    assert [f.id for f in grid.find_cell(removed, "r0c0").fittings] == [second.id]


def test_unknown_fitting(window_config):
    with pytest.raises(KeyError):
        grid.remove_fitting(window_config, "r0c0", "handle_missing")


def _split_gate():
    """Sliding-openable gate: bars on the left, sheet on the right."""
    config = default_gate_config().model_copy(update={"gate_type": GateType.SLIDING_OPENABLE})
    config.right_door_design.inner_design = InnerDesign.SHEET
    return config


# ============================================================
# Security grill
# ============================================================

def test_attach_grill_sized_to_window(window_config):
    config = window_config.model_copy(update={"width": 240, "height": 120, "unit": Unit.CM})
    with_grill = grid.attach_grill(config)
    grill = with_grill.grill_config
    assert (grill.width, grill.height, grill.unit) == (240, 120, Unit.CM)
    assert grill.frame_profile_id == "p26"
    assert grill.left_door_design.inner_design == InnerDesign.VERTICAL_BARS
    assert grill.effective_left_door_width() == 120
    assert config.grill_config is None


def test_attach_grill_keeps_existing(window_config):
    with_grill = grid.attach_grill(window_config)
    with_grill.grill_config.frame_profile_id = "p29"
    again = grid.attach_grill(with_grill)
    assert again.grill_config.frame_profile_id == "p29"


def test_detach_grill(window_config):
    with_grill = grid.attach_grill(window_config)
    without = grid.detach_grill(with_grill)
    assert without.grill_config is None
    assert with_grill.grill_config is not None


def test_set_grill_design_updates_both_doors(window_config):
    with_grill = grid.attach_grill(window_config)
    design = with_grill.grill_config.left_door_design.model_copy(
        update={"inner_design": InnerDesign.CRISS_CROSS})
    edited = grid.set_grill_design(with_grill, design)
    assert edited.grill_config.left_door_design.inner_design == InnerDesign.CRISS_CROSS
    assert edited.grill_config.right_door_design.inner_design == InnerDesign.CRISS_CROSS
    assert with_grill.grill_config.left_door_design.inner_design == InnerDesign.VERTICAL_BARS
    with pytest.raises(ValueError):
        grid.set_grill_design(window_config, design)


# ============================================================
# Door design copy
# ============================================================

def test_copy_left_design_to_right():
    config = _split_gate()
    copied = grid.copy_door_design(config, "left-to-right")
    assert copied.right_door_design == copied.left_door_design
    assert copied.right_door_design is not copied.left_door_design
    assert config.right_door_design.inner_design == InnerDesign.SHEET


def test_copy_right_design_to_left():
    copied = grid.copy_door_design(_split_gate(), "right-to-left")
    assert copied.left_door_design.inner_design == InnerDesign.SHEET
    assert copied.effective_right_design().inner_design == InnerDesign.SHEET
    unset = default_gate_config().model_copy(update={"right_door_design": None})
    assert grid.copy_door_design(unset, "right-to-left") == unset


def test_copy_unknown_direction():
    with pytest.raises(ValueError):
        grid.copy_door_design(_split_gate(), "top-to-bottom")
