"""
params.py
Parameter descriptors and the character normalization feature.
"""
from dataclasses import dataclass, field
import numpy as np

# Channel order of the char-norm feature
CHAR_NORM_Y = 0
CHAR_NORM_LENGTH = 1
CHAR_NORM_RX = 2
CHAR_NORM_RY = 3
CHAR_NORM_NUM_PARAMS = 4

PARAM_NAMES = {
    CHAR_NORM_Y: 'CharNormY',
    CHAR_NORM_LENGTH: 'CharNormLength',
    CHAR_NORM_RX: 'CharNormRx',
    CHAR_NORM_RY: 'CharNormRy',
}


@dataclass(frozen=True)
class ParamDescriptor:
    """Static description of one feature dimension."""
    circular: bool
    non_essential: bool
    min: float
    max: float
    range: float = field(init=False)
    half_range: float = field(init=False)
    mid_range: float = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, 'range', self.max - self.min)
        object.__setattr__(self, 'half_range', (self.max - self.min) / 2.0)
        object.__setattr__(self, 'mid_range', (self.max + self.min) / 2.0)


class CharNormFeature:
    """
    Character normalization feature for one blob.
    Holds one value per parameter; the first four channels are the named
    char-norm channels (vertical position, length, horizontal and vertical radius).
    """
    def __init__(self, values):
        values = np.asarray(values, dtype=np.float64).flatten()
        if values.shape[0] < CHAR_NORM_NUM_PARAMS:
            raise ValueError(f"Char-norm feature needs at least {CHAR_NORM_NUM_PARAMS} values, got {values.shape[0]}")
        values.setflags(write=False)
        self.params = values

    @classmethod
    def from_channels(cls, y=0.0, length=0.0, rx=0.0, ry=0.0):
        return cls([y, length, rx, ry])

    @property
    def num_params(self):
        return self.params.shape[0]

    @property
    def y(self):
        return float(self.params[CHAR_NORM_Y])

    @property
    def length(self):
        return float(self.params[CHAR_NORM_LENGTH])

    @property
    def rx(self):
        return float(self.params[CHAR_NORM_RX])

    @property
    def ry(self):
        return float(self.params[CHAR_NORM_RY])

    def __getitem__(self, index):
        return float(self.params[index])

    def __repr__(self):
        channels = ', '.join(f"{PARAM_NAMES.get(i, i)}={v:.4g}" for i, v in enumerate(self.params))
        return f"CharNormFeature({channels})"
