"""
Weight/area calculation endpoints.

POST /api/calculate/gate     GateConfig -> CalculationResult
POST /api/calculate/window   WindowConfig -> window result plus grill result
"""

from typing import Optional

from fastapi import APIRouter, Depends

from ..calculators.registry import get_calculator
from ..catalog import ProfileCatalog, WindowProfileCatalog
from ..dependencies import get_gate_catalog, get_window_catalog
from ..schemas import CalculationResult, CamelModel, GateConfig, WindowConfig

router = APIRouter(prefix="/calculate", tags=["calculate"])


class WindowCalculationResponse(CamelModel):
    calculations: CalculationResult
    grill_calculations: Optional[CalculationResult] = None


@router.post("/gate", response_model=CalculationResult)
def calculate_gate(config: GateConfig, catalog: ProfileCatalog = Depends(get_gate_catalog)):
    return get_calculator("gate", catalog).calculate(config)


@router.post("/window", response_model=WindowCalculationResponse)
def calculate_window(
    config: WindowConfig,
    window_catalog: WindowProfileCatalog = Depends(get_window_catalog),
    gate_catalog: ProfileCatalog = Depends(get_gate_catalog),
):
    grill = None
    if config.grill_config is not None:
        grill = get_calculator("gate", gate_catalog).calculate(config.grill_config)
    return WindowCalculationResponse(
        calculations=get_calculator("window", window_catalog).calculate(config),
        grill_calculations=grill,
    )
