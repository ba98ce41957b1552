"""
matcher.py
Nearest-prototype matcher on character normalization features.
"""
import logging
import numpy as np
from .config import Tunables, NOISE_LENGTH_WEIGHT, NOISE_RX_WEIGHT, NOISE_RY_WEIGHT, norm_proto_path
from .errors import TableNotLoadedError
from .evidence import evidence_of, rating_of
from .loader import load_norm_protos
from .params import CharNormFeature, CHAR_NORM_Y, CHAR_NORM_RX, CHAR_NORM_NUM_PARAMS
from .symbols import NO_CLASS, class_id_of, symbol_of

logger = logging.getLogger("NormMatch")


def noise_distance(feature):
    """Fixed penalty for a blob that looks like noise; independent of any trained class."""
    return (feature.length * feature.length * NOISE_LENGTH_WEIGHT +
            feature.rx * feature.rx * NOISE_RX_WEIGHT +
            feature.ry * feature.ry * NOISE_RY_WEIGHT)


def proto_distance(proto, feature):
    """Weighted squared deviation on vertical position and horizontal radius."""
    delta = feature.y - proto.mean[CHAR_NORM_Y]
    match = delta * delta * proto.weight[CHAR_NORM_Y]
    delta = feature.rx - proto.mean[CHAR_NORM_RX]
    match += delta * delta * proto.weight[CHAR_NORM_RX]
    return float(match)


class NormMatcher:
    """
    Scores a char-norm feature against the prototypes of one class.
    Owns the prototype table and the tunables; both are passed in or loaded
    explicitly, nothing is global.
    """
    def __init__(self, tunables=None, table=None):
        if table is not None and table.num_params < CHAR_NORM_NUM_PARAMS:
            raise ValueError(f"Char-norm matching needs {CHAR_NORM_NUM_PARAMS} params, table has {table.num_params}")
        self.tunables = tunables if tunables is not None else Tunables()
        self._table = table
        self._path = None

    @property
    def table(self):
        if self._table is None:
            raise TableNotLoadedError("No normalization prototypes loaded; call load() first")
        return self._table

    @property
    def loaded(self):
        return self._table is not None

    def load(self, path=None, data_dir=None):
        """
        Read prototypes from path (default: NormProtoFile under data_dir).
        The previous table, if any, is released only after the new one is built.
        """
        if path is None:
            path = norm_proto_path(data_dir)
        table = load_norm_protos(path)
        old, self._table, self._path = self._table, table, path
        if old is not None:
            old.release()
        return table

    def reload(self, path=None):
        if path is None:
            path = self._path
        if path is None:
            raise TableNotLoadedError("Nothing to reload; no prototype file was loaded")
        return self.load(path)

    def unload(self):
        if self._table is not None:
            self._table.release()
            logger.info("[NormMatch] Released normalization prototypes")
        self._table = None
        self._path = None

    def compute_match(self, class_id, feature, debug=False):
        """
        Best match rating of feature against the prototypes of class_id.
        Args:
            class_id: class id (int or character); NO_CLASS scores the feature as noise
            feature: CharNormFeature or sequence of feature values
            debug: log the feature, every prototype and its match
        Returns:
            rating in [0, 1]; 0 is a perfect match
        Raises:
            BoundsError: class_id outside the class id space
            TableNotLoadedError: no table loaded for a real class
        """
        class_id = class_id_of(class_id)
        if not isinstance(feature, CharNormFeature):
            feature = CharNormFeature(feature)
        midpoint, curl = self.tunables.midpoint, self.tunables.curl

        if class_id == NO_CLASS:
            match = noise_distance(feature)
            if debug:
                logger.debug(f"[NormMatch] Class NO_CLASS: noise distance {match:.4f}")
            return rating_of(match, midpoint, curl)

        table = self.table
        protos = table.prototypes_for(class_id)
        if debug:
            logger.debug(f"[NormMatch] Class {symbol_of(class_id)!r}: feature = {feature}")

        best_match = float('inf')
        for proto_id, proto in enumerate(protos):
            match = proto_distance(proto, feature)
            if match < best_match:
                best_match = match
            if debug:
                self._log_proto(proto_id, proto, feature, match, midpoint, curl)
        rating = rating_of(best_match, midpoint, curl)
        if debug:
            logger.debug(f"[NormMatch] Best distance {best_match:.4f} over {len(protos)} protos -> rating {rating:.6f}")
        return rating

    def _log_proto(self, proto_id, proto, feature, match, midpoint, curl):
        logger.debug(f"[NormMatch] Proto {proto_id} = {format_floats(proto.mean)}")
        logger.debug(f"[NormMatch]       var = {format_floats(proto.variance)}")
        logger.debug(f"[NormMatch]     match = {format_norm_match(proto, feature, midpoint, curl)}")
        logger.debug(f"[NormMatch]  distance = {match:.4f} rating = {rating_of(match, midpoint, curl):.6f}")


def format_floats(values):
    return ' '.join(f"{v:9.3f}" for v in values)


def format_norm_match(proto, feature, midpoint, curl):
    """
    Per-parameter deviation in standard deviations, then the summed squared
    deviation of the matched dimensions and its evidence.
    """
    n = min(proto.num_params, feature.num_params)
    with np.errstate(divide='ignore', invalid='ignore'):
        z = (feature.params[:n] - proto.mean[:n]) / np.sqrt(proto.variance[:n])
    z = np.nan_to_num(z, nan=0.0, posinf=0.0, neginf=0.0)
    total = float(z[CHAR_NORM_Y] ** 2 + z[CHAR_NORM_RX] ** 2)
    parts = ''.join(f" {v:6.1f}" for v in z)
    return f"{parts} --> {total:6.1f} ({evidence_of(total, midpoint, curl):4.2f})"
