"""Manual-entry form parsing.

Used when extraction fails or reads only part of a report: the caller
collects raw strings and turns them into a MeasurementInput here.
"""

from collections.abc import Mapping
from dataclasses import fields, replace
from datetime import date

from bodycomp.extraction.models import PartialReading
from bodycomp.measurements.exceptions import MeasurementFormError
from bodycomp.measurements.models import MeasurementInput

_INTEGER_FIELDS = frozenset({"bmr", "metabolic_age"})
_READING_FIELDS = tuple(f.name for f in fields(PartialReading) if f.name != "measurement_date")

FORM_FIELDS: tuple[str, ...] = (
    "measurement_date",
    "week_number",
    "medication_dose",
    "status",
    *_READING_FIELDS,
)


def parse_measurement_form(form: Mapping[str, str]) -> MeasurementInput:
    """Parse raw form strings. Blank fields become None.

    Raises:
        MeasurementFormError: naming the first field that cannot be parsed.
    """
    reading_values: dict[str, float | int | None] = {}
    for name in _READING_FIELDS:
        if name in _INTEGER_FIELDS:
            reading_values[name] = _parse_int(form, name)
        else:
            reading_values[name] = _parse_float(form, name)

    status = (form.get("status") or "").strip() or None
    return MeasurementInput(
        measurement_date=_parse_date(form, "measurement_date") or date.today(),
        week_number=_parse_int(form, "week_number"),
        medication_dose=_parse_float(form, "medication_dose"),
        status=status,
        reading=PartialReading(**reading_values),
    )


def prefill_from_extraction(form: Mapping[str, str], extracted: PartialReading) -> MeasurementInput:
    """Parse a form that was pre-filled from an extraction.

    Values typed into the form win. Blank fields keep what the extractor read.
    """
    entered = parse_measurement_form(form)
    merged = (
        replace(entered, reading=PartialReading())
        .merge_extracted(extracted)
        .merge_extracted(entered.reading)
    )
    if _raw(form, "measurement_date") is not None:
        merged = replace(merged, measurement_date=entered.measurement_date)
    return merged


def _raw(form: Mapping[str, str], name: str) -> str | None:
    value = (form.get(name) or "").strip()
    return value or None


def _parse_float(form: Mapping[str, str], name: str) -> float | None:
    raw = _raw(form, name)
    if raw is None:
        return None
    try:
        return float(raw.replace(",", "."))
    except ValueError as exc:
        raise MeasurementFormError(name, raw) from exc


def _parse_int(form: Mapping[str, str], name: str) -> int | None:
    raw = _raw(form, name)
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise MeasurementFormError(name, raw) from exc


def _parse_date(form: Mapping[str, str], name: str) -> date | None:
    raw = _raw(form, name)
    if raw is None:
        return None
    try:
        return date.fromisoformat(raw)
    except ValueError as exc:
        raise MeasurementFormError(name, raw) from exc
