"""
evidence.py
Distance-to-evidence transform: 1 / (1 + (d / midpoint) ^ curl)
"""
import numpy as np


def evidence_of(distance, midpoint, curl):
    """
    Evidence in (0, 1] for a non-negative distance; 1 at distance 0, 0.5 at
    the midpoint, tending to 0 as the distance grows.
    Args:
        distance: float or np.ndarray of distances >= 0
        midpoint: distance at which evidence is 0.5 (> 0)
        curl: steepness exponent (> 0)
    Returns:
        float, or np.ndarray for array input
    """
    scaled = np.asarray(distance, dtype=np.float64) / midpoint
    if curl == 3:
        scaled = scaled * scaled * scaled
    elif curl == 2:
        scaled = scaled * scaled
    else:
        scaled = np.power(scaled, curl)
    evidence = 1.0 / (1.0 + scaled)
    if evidence.ndim == 0:
        return float(evidence)
    return evidence


def rating_of(distance, midpoint, curl):
    """Match rating: 0 is a perfect match, approaching 1 as distance grows."""
    return 1.0 - evidence_of(distance, midpoint, curl)
