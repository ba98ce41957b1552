"""
config.py
Tunable knobs of the normalization matcher.
"""
import math
import os
from .errors import ConfigError

# Config
NORM_ADJ_MIDPOINT = 32.0
NORM_ADJ_CURL = 2.0
NORM_PROTO_FILE = 'tessdata/normproto'

# Fixed weights of the noise penalty: length, horizontal radius, vertical radius
NOISE_LENGTH_WEIGHT = 500.0
NOISE_RX_WEIGHT = 8000.0
NOISE_RY_WEIGHT = 8000.0


def _positive(name, value):
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{name} must be a number, got {value!r}") from None
    if not math.isfinite(value) or value <= 0:
        raise ConfigError(f"{name} must be a finite value > 0, got {value}")
    return value


class Tunables:
    """
    Shape parameters of the distance-to-evidence transform.
    Values are validated when set; the matcher reads them on every call, so a
    change takes effect on the next score without reloading prototypes.
    """
    PARAM_NAMES = {'NormAdjMidpoint': 'midpoint', 'NormAdjCurl': 'curl'}

    def __init__(self, midpoint=NORM_ADJ_MIDPOINT, curl=NORM_ADJ_CURL):
        self.midpoint = midpoint
        self.curl = curl

    @property
    def midpoint(self):
        return self._midpoint

    @midpoint.setter
    def midpoint(self, value):
        self._midpoint = _positive('NormAdjMidpoint', value)

    @property
    def curl(self):
        return self._curl

    @curl.setter
    def curl(self, value):
        self._curl = _positive('NormAdjCurl', value)

    def set_param(self, name, value):
        """Set a knob by its external name (NormAdjMidpoint, NormAdjCurl)."""
        attr = self.PARAM_NAMES.get(name)
        if attr is None:
            raise ConfigError(f"Unknown tunable {name!r}; known: {', '.join(self.PARAM_NAMES)}")
        setattr(self, attr, value)

    def get_param(self, name):
        attr = self.PARAM_NAMES.get(name)
        if attr is None:
            raise ConfigError(f"Unknown tunable {name!r}; known: {', '.join(self.PARAM_NAMES)}")
        return getattr(self, attr)

    def __repr__(self):
        return f"Tunables(midpoint={self.midpoint}, curl={self.curl})"


def norm_proto_path(data_dir=None, proto_file=NORM_PROTO_FILE):
    """Prototype file path, resolved against data_dir when given."""
    if data_dir:
        return os.path.join(data_dir, proto_file)
    return proto_file
