"""
prototype.py
Immutable per-class reference statistics (one cluster of training samples).
"""
import math
import numpy as np

SPHERICAL = 'spherical'
ELLIPTICAL = 'elliptical'
MIXED = 'mixed'
AUTOMATIC = 'automatic'
PROTO_STYLES = (SPHERICAL, ELLIPTICAL, MIXED, AUTOMATIC)

NORMAL = 'normal'
UNIFORM = 'uniform'
RANDOM = 'random'
DISTRIBUTIONS = (NORMAL, UNIFORM, RANDOM)

# Variances below this are treated as this, so weights stay finite
MIN_VARIANCE = 0.0004


def _frozen(values):
    arr = np.array(values, dtype=np.float64).flatten()
    arr.setflags(write=False)
    return arr


class Prototype:
    """
    Mean and per-dimension variance of one prototype cluster.
    Weight is the inverse variance: a tighter cluster penalizes each unit of
    squared deviation more heavily.
    """
    __slots__ = ('significant', 'style', 'num_samples', 'mean', 'variance', 'weight', 'distrib')

    def __init__(self, mean, variance, style=ELLIPTICAL, significant=True, num_samples=0, distrib=None):
        if style not in PROTO_STYLES:
            raise ValueError(f"Unknown prototype style {style!r}; expected one of {', '.join(PROTO_STYLES)}")
        mean = _frozen(mean)
        n = mean.shape[0]
        variance = np.asarray(variance, dtype=np.float64).flatten()
        if style == SPHERICAL and variance.shape[0] == 1:
            variance = np.full(n, variance[0])
        if variance.shape[0] != n:
            raise ValueError(f"Prototype has {n} means but {variance.shape[0]} variances")
        if np.any(variance < 0) or not np.all(np.isfinite(mean)):
            raise ValueError("Prototype variances must be non-negative and means finite")
        variance = _frozen(np.maximum(variance, MIN_VARIANCE))
        if style == MIXED and distrib is None:
            raise ValueError("Mixed prototypes need one distribution per parameter")
        if distrib is not None:
            distrib = tuple(distrib)
            if len(distrib) != n:
                raise ValueError(f"Prototype has {n} means but {len(distrib)} distributions")
            if any(d not in DISTRIBUTIONS for d in distrib):
                raise ValueError(f"Unknown distribution in {distrib}; expected {', '.join(DISTRIBUTIONS)}")
        object.__setattr__(self, 'significant', bool(significant))
        object.__setattr__(self, 'style', style)
        object.__setattr__(self, 'num_samples', int(num_samples))
        object.__setattr__(self, 'mean', mean)
        object.__setattr__(self, 'variance', variance)
        object.__setattr__(self, 'weight', _frozen(1.0 / variance))
        object.__setattr__(self, 'distrib', distrib)

    @classmethod
    def from_weights(cls, mean, weight):
        """
        Build a prototype from precomputed weights instead of variances.
        A zero weight means the dimension never contributes to the distance.
        """
        proto = cls.__new__(cls)
        mean = _frozen(mean)
        weight = _frozen(weight)
        if weight.shape != mean.shape:
            raise ValueError(f"Prototype has {mean.shape[0]} means but {weight.shape[0]} weights")
        if np.any(weight < 0):
            raise ValueError("Prototype weights must be non-negative")
        variance = np.full(mean.shape[0], math.inf)
        variance[weight > 0] = 1.0 / weight[weight > 0]
        variance = _frozen(variance)
        object.__setattr__(proto, 'significant', True)
        object.__setattr__(proto, 'style', ELLIPTICAL)
        object.__setattr__(proto, 'num_samples', 0)
        object.__setattr__(proto, 'mean', mean)
        object.__setattr__(proto, 'variance', variance)
        object.__setattr__(proto, 'weight', weight)
        object.__setattr__(proto, 'distrib', None)
        return proto

    def __setattr__(self, name, value):
        raise AttributeError(f"Prototype is immutable; cannot set {name}")

    @property
    def num_params(self):
        return self.mean.shape[0]

    def standard_deviation(self, index):
        return math.sqrt(self.variance[index])

    def __repr__(self):
        return (f"Prototype(style={self.style}, samples={self.num_samples}, "
                f"mean={np.array2string(self.mean, precision=3)})")
