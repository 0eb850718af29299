"""
Unit handling for provider quantities.

Only the units Apple Health writes for the quantity kinds we read are known.
Each unit maps to a dimension and a factor to that dimension's base unit.
"""

from dataclasses import dataclass

# unit -> (dimension, factor to base unit)
UNITS = {
    # energy, base kcal
    "kcal": ("energy", 1.0),
    "Cal": ("energy", 1.0),
    "cal": ("energy", 0.001),
    "kJ": ("energy", 1 / 4.184),
    "J": ("energy", 1 / 4184.0),
    # length, base m
    "m": ("length", 1.0),
    "km": ("length", 1000.0),
    "cm": ("length", 0.01),
    "mi": ("length", 1609.344),
    "yd": ("length", 0.9144),
    "ft": ("length", 0.3048),
    # count, base count
    "count": ("count", 1.0),
    # frequency, base count/min
    "count/min": ("frequency", 1.0),
    "count/s": ("frequency", 60.0),
    "Hz": ("frequency", 60.0),
    # speed, base m/s
    "m/s": ("speed", 1.0),
    "km/hr": ("speed", 1 / 3.6),
    "mi/hr": ("speed", 0.44704),
    # power, base W
    "W": ("power", 1.0),
    "kW": ("power", 1000.0),
    # time, base s
    "s": ("time", 1.0),
    "min": ("time", 60.0),
    "hr": ("time", 3600.0),
}


def convert(value: float, from_unit: str, to_unit: str) -> float:
    """Convert a value between two units of the same dimension.

    Raises:
        ValueError: If either unit is unknown or the dimensions differ.
    """
    if from_unit == to_unit:
        return float(value)
    try:
        from_dim, from_factor = UNITS[from_unit]
        to_dim, to_factor = UNITS[to_unit]
    except KeyError as e:
        raise ValueError(f"Unknown unit '{e.args[0]}'") from None
    if from_dim != to_dim:
        raise ValueError(f"Cannot convert {from_unit} ({from_dim}) to {to_unit} ({to_dim})")
    return value * from_factor / to_factor


def duration_seconds(value: float, unit: str = "min") -> float:
    """Normalize a provider duration to seconds."""
    return convert(value, unit, "s")


@dataclass(frozen=True)
class Quantity:
    """A provider measurement with its unit."""
    value: float
    unit: str

    def value_in(self, unit: str) -> float:
        return convert(self.value, self.unit, unit)
