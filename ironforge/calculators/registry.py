"""
Calculator registry: maps product_type strings to calculator classes.
"""

from .base import BaseCalculator
from .gate import GateCalculator
from .window import WindowCalculator

CALCULATOR_REGISTRY: dict[str, type] = {
    "gate": GateCalculator,
    "window": WindowCalculator,
}


def get_calculator(product_type, catalog) -> BaseCalculator:
    """Returns a calculator bound to `catalog`, or raises ValueError."""
    key = getattr(product_type, "value", product_type)
    if key not in CALCULATOR_REGISTRY:
        raise ValueError(
            f"No calculator registered for product type: {product_type}. "
            f"Available: {list(CALCULATOR_REGISTRY.keys())}"
        )
    return CALCULATOR_REGISTRY[key](catalog)


def has_calculator(product_type) -> bool:
    """Check if a calculator exists for a product type."""
    return getattr(product_type, "value", product_type) in CALCULATOR_REGISTRY


def list_calculators() -> list[str]:
    """List all registered product types."""
    return list(CALCULATOR_REGISTRY.keys())
