import pytest

from bodycomp.scoring.normalizer import normalize

# BMI band with its radar risk ceiling
IDEAL_MIN, IDEAL_MAX, RISK_MAX = 18.5, 24.9, 35.0


class TestInsideBand:
    @pytest.mark.parametrize("value", [18.5, 20.0, 22.7, 24.9])
    def test_inside_band_scores_100(self, value: float) -> None:
        assert normalize(value, IDEAL_MIN, IDEAL_MAX, RISK_MAX) == 100.0

    def test_degenerate_band_scores_100_at_point(self) -> None:
        assert normalize(5.0, 5.0, 5.0, 10.0) == 100.0


class TestBelowBand:
    def test_zero_scores_zero(self) -> None:
        assert normalize(0.0, IDEAL_MIN, IDEAL_MAX, RISK_MAX) == 0.0

    def test_linear_ramp(self) -> None:
        assert normalize(9.25, IDEAL_MIN, IDEAL_MAX, RISK_MAX) == pytest.approx(50.0)

    def test_monotonically_increasing_and_below_100(self) -> None:
        values = [0.0, 2.0, 5.0, 10.0, 15.0, 18.0, 18.49]
        scores = [normalize(v, IDEAL_MIN, IDEAL_MAX, RISK_MAX) for v in values]
        assert scores == sorted(scores)
        assert all(0.0 <= s < 100.0 for s in scores)

    def test_negative_value_clamped_to_zero(self) -> None:
        assert normalize(-3.0, IDEAL_MIN, IDEAL_MAX, RISK_MAX) == 0.0


class TestAboveBand:
    def test_reaches_zero_at_risk_ceiling(self) -> None:
        assert normalize(RISK_MAX, IDEAL_MIN, IDEAL_MAX, RISK_MAX) == 0.0

    @pytest.mark.parametrize("value", [35.1, 40.0, 100.0])
    def test_stays_zero_beyond_risk_ceiling(self, value: float) -> None:
        assert normalize(value, IDEAL_MIN, IDEAL_MAX, RISK_MAX) == 0.0

    def test_linear_ramp_down(self) -> None:
        # halfway between 20 and 40
        assert normalize(30.0, 10.0, 20.0, 40.0) == pytest.approx(50.0)

    def test_strictly_decreasing_between_ideal_max_and_risk(self) -> None:
        values = [25.0, 27.0, 30.0, 33.0, 34.9]
        scores = [normalize(v, IDEAL_MIN, IDEAL_MAX, RISK_MAX) for v in values]
        assert all(a > b for a, b in zip(scores, scores[1:]))
        assert all(0.0 < s < 100.0 for s in scores)


class TestMissingValue:
    @pytest.mark.parametrize(
        ("ideal_min", "ideal_max", "risk_max"),
        [(18.5, 24.9, 35.0), (1.0, 9.0, 20.0), (50.0, 65.0, 75.0)],
    )
    def test_missing_scores_zero(self, ideal_min: float, ideal_max: float, risk_max: float) -> None:
        assert normalize(None, ideal_min, ideal_max, risk_max) == 0.0


class TestPurity:
    def test_repeated_calls_identical(self) -> None:
        first = normalize(27.3, IDEAL_MIN, IDEAL_MAX, RISK_MAX)
        second = normalize(27.3, IDEAL_MIN, IDEAL_MAX, RISK_MAX)
        assert first == second

    def test_not_rounded(self) -> None:
        score = normalize(27.3, IDEAL_MIN, IDEAL_MAX, RISK_MAX)
        assert score != round(score)
