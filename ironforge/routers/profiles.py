"""
Reference data endpoints.

GET /api/profiles/gate           gate/grill sections and sheet stock
GET /api/profiles/window         aluminium sections, optionally ?category=
GET /api/defaults/gate|window    starting configurations for a new design
"""

from typing import List, Optional

from fastapi import APIRouter, Depends

from ..catalog import ProfileCatalog, WindowProfileCatalog
from ..dependencies import get_gate_catalog, get_window_catalog
from ..schemas import (
    GateConfig,
    Profile,
    WindowConfig,
    WindowProfile,
    WindowProfileCategory,
    default_gate_config,
    default_window_config,
)

router = APIRouter(tags=["profiles"])


@router.get("/profiles/gate", response_model=List[Profile])
def list_gate_profiles(catalog: ProfileCatalog = Depends(get_gate_catalog)):
    return catalog.all()


@router.get("/profiles/window", response_model=List[WindowProfile])
def list_window_profiles(
    category: Optional[WindowProfileCategory] = None,
    catalog: WindowProfileCatalog = Depends(get_window_catalog),
):
    if category is None:
        return catalog.all()
    return catalog.by_category(category)


@router.get("/defaults/gate", response_model=GateConfig)
def gate_defaults():
    return default_gate_config()


@router.get("/defaults/window", response_model=WindowConfig)
def window_defaults():
    return default_window_config()
