"""Builds a PartialReading from loosely-typed AI output.

Nothing in the reply is trusted: each field is read on its own, and a field
that is missing, non-numeric or implausible becomes None instead of failing
the whole extraction.
"""

import math
import re
from datetime import date
from typing import Any

from bodycomp.extraction.models import PartialReading
from bodycomp.logging.logger import Log

# A comma followed by exactly three digits groups thousands ("1,750"); otherwise it is a decimal mark.
_NUMBER_PATTERN = re.compile(r"(?P<whole>-?\d+(?:,\d{3}(?!\d))*)(?:[.,](?P<fraction>\d+))?")

# Plausible (min, max) per field. Values outside are discarded.
FIELD_BOUNDS: dict[str, tuple[float, float]] = {
    "weight": (20.0, 400.0),
    "bmi": (10.0, 80.0),
    "body_fat_percent": (1.0, 75.0),
    "fat_mass": (0.5, 250.0),
    "lean_mass": (10.0, 200.0),
    "muscle_mass": (5.0, 150.0),
    "muscle_rate_percent": (5.0, 90.0),
    "skeletal_muscle_percent": (5.0, 80.0),
    "bone_mass": (0.5, 10.0),
    "protein_mass": (1.0, 40.0),
    "protein_percent": (5.0, 40.0),
    "body_water_percent": (20.0, 85.0),
    "moisture_content": (10.0, 150.0),
    "subcutaneous_fat_percent": (1.0, 70.0),
    "visceral_fat": (1.0, 60.0),
    "bmr": (500.0, 5000.0),
    "metabolic_age": (10.0, 120.0),
    "whr": (0.4, 1.6),
}

_INTEGER_FIELDS = frozenset({"bmr", "metabolic_age"})


def validate_and_build(data: dict[str, Any]) -> PartialReading:
    """Read every known field, dropping unusable values, and derive missing percentages."""
    values: dict[str, Any] = {
        name: _read_field(name, data.get(name)) for name in FIELD_BOUNDS
    }
    values["measurement_date"] = _read_date(data.get("measurement_date"))
    _derive_percent(values, "muscle_rate_percent", "muscle_mass")
    _derive_percent(values, "protein_percent", "protein_mass")
    return PartialReading(**values)


def parse_number(raw: Any) -> float | None:
    """Coerce a loose value to float.

    Strings like "102.0 (54.0-73.1)" yield their first number.
    """
    if isinstance(raw, bool) or raw is None:
        return None
    if isinstance(raw, (int, float)):
        number = float(raw)
    elif isinstance(raw, str):
        match = _NUMBER_PATTERN.search(raw)
        if match is None:
            return None
        whole = match.group("whole").replace(",", "")
        fraction = match.group("fraction")
        number = float(f"{whole}.{fraction}" if fraction else whole)
    else:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def _read_field(name: str, raw: Any) -> float | int | None:
    number = parse_number(raw)
    if number is None:
        if raw is not None:
            Log.debug(f"Discarding non-numeric value for {name}", value=repr(raw))
        return None
    low, high = FIELD_BOUNDS[name]
    if not low <= number <= high:
        Log.warning(f"Discarding out-of-range value for {name}", value=number)
        return None
    if name in _INTEGER_FIELDS:
        return int(round(number))
    return number


def _read_date(raw: Any) -> date | None:
    if not isinstance(raw, str):
        return None
    try:
        return date.fromisoformat(raw.strip()[:10])
    except ValueError:
        Log.debug("Discarding unparseable measurement_date", value=repr(raw))
        return None


def _derive_percent(values: dict[str, Any], percent_field: str, mass_field: str) -> None:
    if values[percent_field] is not None:
        return
    mass = values[mass_field]
    weight = values["weight"]
    if mass is None or weight is None:
        return
    derived = round(mass / weight * 100, 1)
    low, high = FIELD_BOUNDS[percent_field]
    if low <= derived <= high:
        values[percent_field] = derived
