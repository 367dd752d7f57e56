from bodycomp.scoring.aggregator import round_half_up
from bodycomp.scoring.models import ProteinProfile, ProteinRange

# g of protein per kg of body weight per day
PROTEIN_MULTIPLIERS: dict[ProteinProfile, tuple[float, float]] = {
    ProteinProfile.A: (1.5, 2.0),
    ProteinProfile.B: (1.2, 1.5),
}


def protein_range(weight_kg: float, profile: ProteinProfile) -> ProteinRange:
    """Daily protein intake range in grams for a body weight."""
    mult_min, mult_max = PROTEIN_MULTIPLIERS[profile]
    return ProteinRange(
        min=round_half_up(weight_kg * mult_min),
        max=round_half_up(weight_kg * mult_max),
        recommended=round_half_up(weight_kg * (mult_min + mult_max) / 2),
    )
