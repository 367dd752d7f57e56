class MeasurementFormError(ValueError):
    """Raised when a manual-entry form value cannot be parsed."""

    def __init__(self, field_name: str, value: str) -> None:
        super().__init__(f"Invalid value for '{field_name}': {value!r}")
        self.field_name = field_name
        self.value = value
