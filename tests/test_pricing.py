"""
Quotation aggregation tests.

Tests:
1-3.   Rate basis and structure cost
4-9.   QuotationBuilder (gate item, window + grill item, default descriptions,
       snapshot isolation, frozen items, config/type mismatch)
10-11. Adding and removing items
12-16. Totals (multi-item grand total, installation by unit, non-positive rates)

No AI, pure math.
"""

import pytest
from pydantic import ValidationError

from ironforge.pricing_engine import (
    QuotationBuilder,
    add_item,
    compute_totals,
    rate_basis,
    remove_item,
    structure_cost,
)
from ironforge.schemas import (
    CalculationResult,
    HardwareItem,
    InstallationCharge,
    QuoteDetails,
    default_gate_config,
    default_window_config,
)


def _calc(weight=10.0, sq_m=2.0):
    return CalculationResult(width_mm=2000, height_mm=1000, area_sq_m=sq_m,
                             area_sq_ft=sq_m * 10.7639, total_weight_kg=weight)


def _window_with_grill():
    config = default_window_config()
    grill = default_gate_config()
    grill.width, grill.height = 2400, 1200
    config.grill_config = grill
    return config


def _sample_quote(builder):
    gate = builder.build_item("gate", default_gate_config(), quantity=2, rate=100, rate_unit="kg")
    window = builder.build_item("window", _window_with_grill(), rate=450, rate_unit="sqft",
                                grill_rate=120, grill_rate_unit="kg")
    details = QuoteDetails(
        items=[gate, window],
        hardware=[
            HardwareItem(id="hw1", name="Gate Lock", quantity=2, rate=850),
            HardwareItem(id="hw2", name="Wheel Track", quantity=6, unit="m", rate=120),
        ],
    )
    return details, gate, window


# ============================================================
# Rate basis
# ============================================================

def test_rate_basis():
    calc = _calc()
    assert rate_basis(calc, "kg") == 10.0
    assert rate_basis(calc, "sqm") == 2.0
    assert rate_basis(calc, "sqft") == pytest.approx(21.5278)


def test_structure_cost_with_grill():
    cost = structure_cost(_calc(), 100, "sqm", _calc(weight=5), 40, "kg", quantity=3)
    assert cost == pytest.approx((100 * 2.0 + 40 * 5) * 3)


def test_non_positive_rates_contribute_nothing():
    assert structure_cost(_calc(), 0, "kg") == 0
    assert structure_cost(_calc(), -50, "kg") == 0
    assert structure_cost(_calc(), 10, "kg", _calc(), -5, "kg") == pytest.approx(100)
    assert structure_cost(_calc(), 10, "kg", None, 99, "kg") == pytest.approx(100)


# ============================================================
# QuotationBuilder
# ============================================================

def test_gate_item():
    item = QuotationBuilder().build_item("gate", default_gate_config(), quantity=2,
                                         rate=100, rate_unit="kg")
    assert item.product_type == "gate"
    assert item.id.startswith("gate_")
    assert item.calculations.total_weight_kg == pytest.approx(58.065)
    assert item.structure_cost == pytest.approx(58.065 * 100 * 2)
    assert item.grill_calculations is None
    assert item.description == "Custom Iron Gate"


def test_window_item_with_grill():
    item = QuotationBuilder().build_item("window", _window_with_grill(), rate=450,
                                         rate_unit="sqft", grill_rate=120, grill_rate_unit="kg")
    assert item.product_type == "window"
    assert item.grill_calculations is not None
    expected = (450 * item.calculations.area_sq_ft
                + 120 * item.grill_calculations.total_weight_kg)
    assert item.structure_cost == pytest.approx(expected)
    assert item.description == "Aluminium Window with Security Grill"


def test_window_item_without_grill_drops_grill_rate():
    item = QuotationBuilder().build_item("window", default_window_config(), rate=450,
                                         grill_rate=120, grill_rate_unit="kg")
    assert item.description == "Aluminium Window"
    assert item.grill_rate is None
    assert item.structure_cost == pytest.approx(450 * item.calculations.area_sq_ft)


def test_item_is_a_snapshot():
    """Editing the live config after quoting leaves the item alone."""
    config = default_gate_config()
    item = QuotationBuilder().build_item("gate", config, rate=100, rate_unit="kg")
    config.width = 5000
    config.left_door_design.inner_design_sequence[0].gap = 50
    assert item.config.width == 3000
    assert item.config.left_door_design.inner_design_sequence[0].gap == 100
    assert item.calculations.width_mm == 3000


def test_items_are_frozen():
    item = QuotationBuilder().build_item("gate", default_gate_config())
    with pytest.raises(ValidationError):
        item.rate = 999


def test_config_type_mismatch():
    with pytest.raises(ValueError):
        QuotationBuilder().build_item("gate", default_window_config())
    with pytest.raises(ValueError):
        QuotationBuilder().build_item("railing", default_gate_config())


# ============================================================
# Adding and removing items
# ============================================================

def test_add_item_returns_new_quote():
    details = QuoteDetails()
    item = QuotationBuilder().build_item("gate", default_gate_config())
    updated = add_item(details, item)
    assert len(updated.items) == 1
    assert details.items == []


def test_remove_item():
    details, gate, window = _sample_quote(QuotationBuilder())
    after = remove_item(details, gate.id)
    assert [i.id for i in after.items] == [window.id]
    assert len(remove_item(details, "gate_missing").items) == 2


# ============================================================
# Totals
# ============================================================

def test_grand_total_is_sum_of_parts():
    details, gate, window = _sample_quote(QuotationBuilder())
    details.installation = InstallationCharge(rate=2500, unit="lumpsum")
    totals = compute_totals(details)
    assert totals.structure_total == pytest.approx(gate.structure_cost + window.structure_cost)
    assert totals.hardware_total == 2 * 850 + 6 * 120
    assert totals.installation_total == 2500
    assert totals.grand_total == (
        totals.structure_total + totals.hardware_total + totals.installation_total)


def test_totals_weight_and_area_include_quantity_and_grill():
    details, gate, window = _sample_quote(QuotationBuilder())
    totals = compute_totals(details)
    assert totals.total_weight_kg == pytest.approx(
        2 * gate.calculations.total_weight_kg
        + window.calculations.total_weight_kg
        + window.grill_calculations.total_weight_kg)
    assert totals.total_area_sq_m == pytest.approx(2 * 4.5 + 2 * 2.88)


def test_installation_per_kg_and_area():
    details, _, _ = _sample_quote(QuotationBuilder())
    totals = compute_totals(details)
    details.installation = InstallationCharge(rate=15, unit="kg")
    assert compute_totals(details).installation_total == pytest.approx(15 * totals.total_weight_kg)
    details.installation = InstallationCharge(rate=20, unit="sqft")
    assert compute_totals(details).installation_total == pytest.approx(20 * totals.total_area_sq_ft)
    details.installation = InstallationCharge(rate=200, unit="sqm")
    assert compute_totals(details).installation_total == pytest.approx(200 * totals.total_area_sq_m)


def test_non_positive_installation_rate():
    details, _, _ = _sample_quote(QuotationBuilder())
    details.installation = InstallationCharge(rate=0, unit="lumpsum")
    assert compute_totals(details).installation_total == 0
    details.installation = InstallationCharge(rate=-10, unit="kg")
    assert compute_totals(details).installation_total == 0


def test_empty_quote_totals():
    totals = compute_totals(QuoteDetails())
    assert totals.grand_total == 0
    assert totals.total_weight_kg == 0
