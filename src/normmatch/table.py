"""
table.py
Prototype table: per-class prototype lists plus the shared parameter descriptors.
"""
from types import MappingProxyType
from .errors import TableReleasedError, BoundsError
from .symbols import NO_CLASS, MAX_CLASS_ID, class_id_of


class PrototypeTable:
    """
    Read-only mapping from class id to its ordered prototypes.
    Built once by the loader; release() drops every class list and the
    descriptors together, after which the table refuses access.
    """
    def __init__(self, num_params, param_desc, class_prototypes):
        if num_params < 1:
            raise ValueError(f"num_params must be positive, got {num_params}")
        param_desc = tuple(param_desc)
        if len(param_desc) != num_params:
            raise ValueError(f"Expected {num_params} parameter descriptors, got {len(param_desc)}")
        protos = {}
        for class_id, plist in class_prototypes.items():
            if class_id == NO_CLASS or not 0 < class_id <= MAX_CLASS_ID:
                raise BoundsError(f"Class id {class_id} cannot hold prototypes")
            plist = tuple(plist)
            for proto in plist:
                if proto.num_params != num_params:
                    raise ValueError(f"Prototype for class {class_id} has {proto.num_params} params, table has {num_params}")
            if plist:
                protos[class_id] = plist
        self._num_params = num_params
        self._param_desc = param_desc
        self._protos = protos
        self._released = False

    def _check(self):
        if self._released:
            raise TableReleasedError("Prototype table used after release()")

    @property
    def num_params(self):
        self._check()
        return self._num_params

    @property
    def param_desc(self):
        self._check()
        return self._param_desc

    @property
    def class_prototypes(self):
        self._check()
        return MappingProxyType(self._protos)

    @property
    def released(self):
        return self._released

    def prototypes_for(self, class_id):
        """Prototypes stored for class_id (int or character); empty tuple if none."""
        self._check()
        return self._protos.get(class_id_of(class_id), ())

    def class_ids(self):
        self._check()
        return sorted(self._protos)

    def num_prototypes(self):
        self._check()
        return sum(len(plist) for plist in self._protos.values())

    def release(self):
        """Free every class list and the descriptor table as one operation."""
        self._protos = {}
        self._param_desc = ()
        self._released = True

    def __repr__(self):
        if self._released:
            return "PrototypeTable(released)"
        return f"PrototypeTable(num_params={self._num_params}, classes={len(self._protos)}, prototypes={self.num_prototypes()})"
