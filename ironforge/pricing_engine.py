"""
Quotation aggregation.

Turns calculator output into priced quotation items and sums a quote.
Pure math, no AI. Rate x basis per item, quantity x rate per hardware line,
then installation on top.

Input: product config + rate choices (per item), QuoteDetails (per quote)
Output: frozen QuotationItem, QuoteTotals
"""

import logging
import uuid
from typing import Optional

from .calculators.gate import GateCalculator
from .calculators.window import WindowCalculator
from .catalog import default_gate_catalog, default_window_catalog
from .schemas import (
    CalculationResult,
    GateConfig,
    GateQuotationItem,
    InstallationUnit,
    ProductType,
    QuoteDetails,
    QuoteTotals,
    RateUnit,
    WindowConfig,
    WindowQuotationItem,
)

logger = logging.getLogger(__name__)

DEFAULT_DESCRIPTIONS = {
    "gate": "Custom Iron Gate",
    "window": "Aluminium Window",
    "window_with_grill": "Aluminium Window with Security Grill",
}


def rate_basis(calculations: CalculationResult, rate_unit) -> float:
    """The quantity a rate is charged against: area in sq ft or sq m, or weight in kg."""
    rate_unit = RateUnit(rate_unit)
    if rate_unit == RateUnit.SQFT:
        return calculations.area_sq_ft
    if rate_unit == RateUnit.SQM:
        return calculations.area_sq_m
    return calculations.total_weight_kg


def _part_cost(calculations: Optional[CalculationResult], rate: Optional[float], rate_unit) -> float:
    if calculations is None or not rate or rate <= 0 or rate_unit is None:
        return 0.0
    return rate * rate_basis(calculations, rate_unit)


def structure_cost(calculations: CalculationResult, rate: float, rate_unit,
                   grill_calculations: Optional[CalculationResult] = None,
                   grill_rate: Optional[float] = None, grill_rate_unit=None,
                   quantity: int = 1) -> float:
    """
    (structure part + grill part) x quantity. Each part is priced on its own
    rate and unit; a non-positive rate contributes nothing.
    """
    main = _part_cost(calculations, rate, rate_unit)
    grill = _part_cost(grill_calculations, grill_rate, grill_rate_unit)
    return (main + grill) * quantity


class QuotationBuilder:
    """
    Snapshots a live configuration into an immutable quotation item.
    The config is deep-copied so later edits in the configurator leave
    quoted items untouched.
    """

    def __init__(self, gate_catalog=None, window_catalog=None):
        self.gate_catalog = gate_catalog if gate_catalog is not None else default_gate_catalog()
        self.window_catalog = window_catalog if window_catalog is not None else default_window_catalog()

    def build_item(self, product_type, config, quantity: int = 1, rate: float = 0.0,
                   rate_unit=RateUnit.SQFT, grill_rate: Optional[float] = None,
                   grill_rate_unit=None, description: str = "",
                   preview_image: Optional[str] = None):
        product_type = ProductType(product_type)
        snapshot = config.model_copy(deep=True)
        item_id = f"{product_type.value}_{uuid.uuid4().hex[:12]}"

        if product_type == ProductType.GATE:
            if not isinstance(snapshot, GateConfig):
                raise ValueError("Gate quotation items need a GateConfig")
            calculations = GateCalculator(self.gate_catalog).calculate(snapshot)
            cost = structure_cost(calculations, rate, rate_unit, quantity=quantity)
            logger.info("Quoted gate %s: %.2f kg x %d = %.2f",
                        item_id, calculations.total_weight_kg, quantity, cost)
            return GateQuotationItem(
                id=item_id,
                config=snapshot,
                calculations=calculations,
                quantity=quantity,
                rate=rate,
                rate_unit=rate_unit,
                structure_cost=cost,
                description=description or DEFAULT_DESCRIPTIONS["gate"],
                preview_image=preview_image,
            )

        if not isinstance(snapshot, WindowConfig):
            raise ValueError("Window quotation items need a WindowConfig")
        calculations = WindowCalculator(self.window_catalog).calculate(snapshot)
        has_grill = snapshot.grill_config is not None
        grill_calculations = None
        if has_grill:
            grill_calculations = GateCalculator(self.gate_catalog).calculate(snapshot.grill_config)
        cost = structure_cost(
            calculations, rate, rate_unit,
            grill_calculations, grill_rate, grill_rate_unit,
            quantity=quantity,
        )
        logger.info("Quoted window %s (grill=%s) x %d = %.2f", item_id, has_grill, quantity, cost)
        return WindowQuotationItem(
            id=item_id,
            config=snapshot,
            calculations=calculations,
            grill_calculations=grill_calculations,
            quantity=quantity,
            rate=rate,
            rate_unit=rate_unit,
            grill_rate=grill_rate if has_grill else None,
            grill_rate_unit=grill_rate_unit if has_grill else None,
            structure_cost=cost,
            description=description or DEFAULT_DESCRIPTIONS[
                "window_with_grill" if has_grill else "window"],
            preview_image=preview_image,
        )


def add_item(details: QuoteDetails, item) -> QuoteDetails:
    return details.model_copy(update={"items": list(details.items) + [item]})


def remove_item(details: QuoteDetails, item_id: str) -> QuoteDetails:
    """Unknown ids leave the quote unchanged."""
    return details.model_copy(update={"items": [i for i in details.items if i.id != item_id]})


def _item_sum(details: QuoteDetails, attr: str) -> float:
    """Quantity-weighted sum of a CalculationResult field, grill included."""
    total = 0.0
    for item in details.items:
        value = getattr(item.calculations, attr)
        if item.grill_calculations is not None:
            value += getattr(item.grill_calculations, attr)
        total += value * item.quantity
    return total


def _calculate_structure_subtotal(details: QuoteDetails) -> float:
    return sum(item.structure_cost for item in details.items)


def _calculate_hardware_subtotal(details: QuoteDetails) -> float:
    return sum(h.quantity * h.rate for h in details.hardware)


def _calculate_installation_subtotal(details: QuoteDetails, weight_kg: float,
                                     area_sq_ft: float, area_sq_m: float) -> float:
    installation = details.installation
    if installation is None or installation.rate <= 0:
        return 0.0
    if installation.unit == InstallationUnit.LUMPSUM:
        return installation.rate
    if installation.unit == InstallationUnit.KG:
        return weight_kg * installation.rate
    if installation.unit == InstallationUnit.SQFT:
        return area_sq_ft * installation.rate
    return area_sq_m * installation.rate


def compute_totals(details: QuoteDetails) -> QuoteTotals:
    """Totals are derived on demand and never stored on the quote."""
    weight_kg = _item_sum(details, "total_weight_kg")
    area_sq_ft = _item_sum(details, "area_sq_ft")
    area_sq_m = _item_sum(details, "area_sq_m")

    structure = _calculate_structure_subtotal(details)
    hardware = _calculate_hardware_subtotal(details)
    installation = _calculate_installation_subtotal(details, weight_kg, area_sq_ft, area_sq_m)

    return QuoteTotals(
        structure_total=structure,
        hardware_total=hardware,
        installation_total=installation,
        grand_total=structure + hardware + installation,
        total_weight_kg=weight_kg,
        total_area_sq_ft=area_sq_ft,
        total_area_sq_m=area_sq_m,
    )
