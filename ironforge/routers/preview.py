from fastapi import APIRouter, Depends

from ..catalog import ProfileCatalog, WindowProfileCatalog
from ..dependencies import get_gate_catalog, get_window_catalog
from ..preview import PreviewGeometry, build_gate_preview, build_window_preview
from ..schemas import GateConfig, WindowConfig

router = APIRouter(prefix="/preview", tags=["preview"])


@router.post("/gate", response_model=PreviewGeometry)
def preview_gate(config: GateConfig, catalog: ProfileCatalog = Depends(get_gate_catalog)):
    return build_gate_preview(config, catalog)


@router.post("/window", response_model=PreviewGeometry)
def preview_window(
    config: WindowConfig,
    window_catalog: WindowProfileCatalog = Depends(get_window_catalog),
    gate_catalog: ProfileCatalog = Depends(get_gate_catalog),
):
    return build_window_preview(config, window_catalog, gate_catalog)
