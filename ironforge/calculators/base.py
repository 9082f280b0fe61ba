"""
Abstract base class for the product calculators.

Input: a validated product config (GateConfig / WindowConfig)
Output: CalculationResult (dimensions in mm, area, weight, optional hardware)
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from ..schemas import CalculationResult, HardwareLine
from ..units import mm_to_m, sq_m_to_sq_ft, to_mm

logger = logging.getLogger(__name__)


class BaseCalculator(ABC):
    """All product calculators inherit from this."""

    product_type: str = ""

    def __init__(self, catalog):
        self.catalog = catalog

    @abstractmethod
    def calculate(self, config) -> CalculationResult:
        """
        Takes a product config in its display unit.
        Returns the material weight and overall area.
        """
        pass

    # --- Helper methods for all calculators ---

    def overall_mm(self, config) -> tuple:
        """Overall (width, height) of a config converted to millimeters."""
        return to_mm(config.width, config.unit), to_mm(config.height, config.unit)

    def perimeter_m(self, width_m: float, height_m: float) -> float:
        return 2 * width_m + 2 * height_m

    def lookup(self, profile_id: Optional[str], role: str):
        """Catalog lookup that logs a warning instead of raising."""
        profile = self.catalog.get(profile_id)
        if profile is None:
            logger.warning("%s calculator: %s profile %r not found in catalog",
                           self.product_type, role, profile_id)
        return profile

    def make_hardware_line(self, name: str, quantity: float, unit: str) -> HardwareLine:
        return HardwareLine(name=name, quantity=quantity, unit=unit)

    def make_result(self, width_mm: float, height_mm: float, total_weight_kg: float,
                    hardware: Optional[List[HardwareLine]] = None) -> CalculationResult:
        """Build the CalculationResult; area always comes from the overall size."""
        area_sq_m = mm_to_m(width_mm) * mm_to_m(height_mm)
        return CalculationResult(
            width_mm=width_mm,
            height_mm=height_mm,
            area_sq_m=area_sq_m,
            area_sq_ft=sq_m_to_sq_ft(area_sq_m),
            total_weight_kg=total_weight_kg,
            hardware=hardware,
        )
