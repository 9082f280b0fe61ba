"""
Length unit conversion.

Every dimension a user types (overall size, door width, bar gap) is in the
structure's display unit. The engines work in millimeters and meters only,
so everything passes through to_mm() first.
"""

# Millimeters per display unit
UNIT_FACTORS = {
    "mm": 1.0,
    "cm": 10.0,
    "in": 25.4,
    "ft": 304.8,
}

SQM_TO_SQFT = 10.7639
M_TO_FT = 3.28084


class ConfigError(ValueError):
    """Raised for configuration values the engine cannot interpret."""


def factor(unit) -> float:
    """Millimeters per one `unit`. Accepts the Unit enum or its string value."""
    key = getattr(unit, "value", unit)
    try:
        return UNIT_FACTORS[key]
    except (KeyError, TypeError):
        raise ConfigError(
            f"Unknown length unit: {unit!r}. Available: {list(UNIT_FACTORS.keys())}"
        )


def to_mm(value: float, unit) -> float:
    """Convert a display-unit length to millimeters."""
    return value * factor(unit)


def from_mm(value_mm: float, unit) -> float:
    """Convert millimeters back to a display unit."""
    return value_mm / factor(unit)


def mm_to_m(value_mm: float) -> float:
    return value_mm / 1000.0


def sq_m_to_sq_ft(area_sq_m: float) -> float:
    return area_sq_m * SQM_TO_SQFT
