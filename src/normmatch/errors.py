"""
errors.py
Exceptions raised by the normalization matcher.
"""


class NormMatchError(Exception):
    """Base class for all matcher errors."""


class FormatError(NormMatchError, ValueError):
    """Structural problem in a prototype source; no table is produced."""
    def __init__(self, message, line=None, expected=None, found=None, source=None):
        self.line = line
        self.expected = expected
        self.found = found
        self.source = source
        where = f"{source or '<stream>'}"
        if line is not None:
            where += f":{line}"
        detail = message
        if expected is not None:
            detail += f" (expected {expected}, found {found!r})" if found is not None else f" (expected {expected}, found end of input)"
        super().__init__(f"{where}: {detail}")


class BoundsError(NormMatchError, IndexError):
    """Class id outside the valid identifier space."""


class ConfigError(NormMatchError, ValueError):
    """Tunable set to a value outside its domain, or unknown tunable name."""


class TableNotLoadedError(NormMatchError, RuntimeError):
    """Scoring a real class before any prototype table was loaded."""


class TableReleasedError(NormMatchError, RuntimeError):
    """Access to a prototype table after release()."""
