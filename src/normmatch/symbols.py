"""
symbols.py
Class identifier space shared by the matcher and the prototype loader.
"""
from .errors import BoundsError

# Class ids are small integers; the file format names a class by one character
MAX_CLASS_ID = 255
NO_CLASS = 0


def class_id_of(symbol):
    """
    Convert a class symbol to its integer class id.
    Args:
        symbol: int class id or one-character string
    Returns:
        int class id in 0..MAX_CLASS_ID
    Raises:
        BoundsError: if the id falls outside the class id space
    """
    if isinstance(symbol, str):
        if len(symbol) != 1:
            raise BoundsError(f"Class symbol must be a single character, got {symbol!r}")
        class_id = ord(symbol)
    elif isinstance(symbol, bool):
        raise BoundsError(f"Class id must be an int or a character, got {symbol!r}")
    else:
        try:
            class_id = int(symbol)
        except (TypeError, ValueError):
            raise BoundsError(f"Class id must be an int or a character, got {symbol!r}") from None
        if class_id != symbol:
            raise BoundsError(f"Class id must be integral, got {symbol!r}")
    if not 0 <= class_id <= MAX_CLASS_ID:
        raise BoundsError(f"Class id {class_id} outside 0..{MAX_CLASS_ID}")
    return class_id


def symbol_of(class_id):
    """Printable form of a class id, used in logs."""
    if class_id == NO_CLASS:
        return 'NO_CLASS'
    return chr(class_id)
