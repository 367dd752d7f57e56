def normalize(
    value: float | None,
    ideal_min: float,
    ideal_max: float,
    risk_max: float,
) -> float:
    """Map a raw metric value onto a 0-100 wellness score.

    - missing value: 0 (worst case)
    - inside [ideal_min, ideal_max]: 100
    - below ideal_min: linear from 0 at value=0 to 100 at ideal_min
    - above ideal_max: linear from 100 at ideal_max down to 0 at risk_max,
      and 0 beyond risk_max

    The result is not rounded.
    """
    if value is None:
        return 0.0

    if ideal_min <= value <= ideal_max:
        return 100.0

    if value < ideal_min:
        ratio = value / ideal_min if ideal_min > 0 else 0.0
        return _clamp(ratio, 0.0, 1.0) * 100.0

    ratio = (risk_max - value) / (risk_max - ideal_max)
    return _clamp(ratio, 0.0, 1.0) * 100.0


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))
