"""
Window grid editing endpoints. Stateless: the client sends its current
config and gets the edited copy back.

POST /api/window/grid/resize   set rows/cols, or grow/shrink one dimension by delta
POST /api/window/grid/cell     change a panel's type or mesh flag
POST /api/window/grid/grill    attach or remove the iron security grill
"""

from typing import Optional

from fastapi import APIRouter, HTTPException

from .. import grid
from ..schemas import CamelModel, WindowCellType, WindowConfig

router = APIRouter(prefix="/window/grid", tags=["window-grid"])


class GridResizeRequest(CamelModel):
    config: WindowConfig
    rows: Optional[int] = None
    cols: Optional[int] = None
    dimension: Optional[str] = None   # "rows" | "cols", used with delta
    delta: int = 0


class CellUpdateRequest(CamelModel):
    config: WindowConfig
    cell_id: str
    type: Optional[WindowCellType] = None
    has_mesh: Optional[bool] = None


class GrillToggleRequest(CamelModel):
    config: WindowConfig
    attached: bool = True


@router.post("/resize", response_model=WindowConfig)
def resize(req: GridResizeRequest):
    if req.dimension is not None:
        try:
            return grid.change_dimension(req.config, req.dimension, req.delta)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
    rows = req.rows if req.rows is not None else len(req.config.row_sizes)
    cols = req.cols if req.cols is not None else len(req.config.col_sizes)
    return grid.resize_grid(req.config, rows, cols)


@router.post("/cell", response_model=WindowConfig)
def update_cell(req: CellUpdateRequest):
    config = req.config
    try:
        if req.type is not None:
            config = grid.set_cell_type(config, req.cell_id, req.type)
        if req.has_mesh is not None:
            config = grid.set_cell_mesh(config, req.cell_id, req.has_mesh)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Cell {req.cell_id} not found")
    return config


@router.post("/grill", response_model=WindowConfig)
def toggle_grill(req: GrillToggleRequest):
    if req.attached:
        return grid.attach_grill(req.config)
    return grid.detach_grill(req.config)
