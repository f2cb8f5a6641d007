"""Length unit conversion. Setbacks are always reported in metres."""

UNIT_TO_M = {
    "mm": 0.001,
    "cm": 0.01,
    "m": 1.0,
    "ft": 0.3048,
    "us-ft": 1200.0 / 3937.0,
}

VALID_UNITS = set(UNIT_TO_M.keys())


def to_m(value: float, unit: str) -> float:
    """Convert a value from the given unit to metres."""
    if unit not in UNIT_TO_M:
        raise ValueError(f"Unknown unit '{unit}'. Valid: {VALID_UNITS}")
    return value * UNIT_TO_M[unit]
