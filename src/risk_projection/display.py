"""Display banding for projection probabilities."""

# Display colouring thresholds; risk_factors.risk_label uses 40/70.
HIGH_PROBABILITY = 70
MODERATE_PROBABILITY = 50


def probability_band(probability: float) -> str:
    """Band a projection probability for display colouring."""
    if probability >= HIGH_PROBABILITY:
        return "high"
    if probability >= MODERATE_PROBABILITY:
        return "moderate"
    return "low"
