# normmatch
# Rates a character normalization feature against per-class prototypes
# (nearest prototype on vertical position and horizontal radius)

from .errors import NormMatchError, FormatError, BoundsError, ConfigError, TableNotLoadedError, TableReleasedError
from .symbols import NO_CLASS, MAX_CLASS_ID, class_id_of
from .params import ParamDescriptor, CharNormFeature
from .prototype import Prototype
from .table import PrototypeTable
from .loader import load_norm_protos, write_norm_protos, save_norm_protos
from .evidence import evidence_of, rating_of
from .config import Tunables
from .matcher import NormMatcher

__all__ = [
    'NormMatchError', 'FormatError', 'BoundsError', 'ConfigError', 'TableNotLoadedError', 'TableReleasedError',
    'NO_CLASS', 'MAX_CLASS_ID', 'class_id_of',
    'ParamDescriptor', 'CharNormFeature', 'Prototype', 'PrototypeTable',
    'load_norm_protos', 'write_norm_protos', 'save_norm_protos',
    'evidence_of', 'rating_of', 'Tunables', 'NormMatcher',
]
