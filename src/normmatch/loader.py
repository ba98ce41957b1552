"""
loader.py
Builds a PrototypeTable from a normalization prototype file, and writes one back.

File layout (whitespace-delimited tokens):
    <NumParams>
    <descriptor> x NumParams
    <classChar> <count>
    <prototype record> x count
    ...
"""
import os
import logging
from .errors import FormatError
from .prototype_io import (TokenReader, read_sample_size, read_param_desc, read_prototype,
                           write_param_desc, write_prototype)
from .params import CHAR_NORM_NUM_PARAMS
from .symbols import NO_CLASS, MAX_CLASS_ID
from .table import PrototypeTable

logger = logging.getLogger("NormProtoLoader")

PROTO_FILE_ENCODING = 'utf-8'


def is_end_of_blocks(token):
    """
    Tolerant end-of-blocks policy: a block header must start with a
    one-character class token. Anything else ends block scanning without
    error and the rest of the input is ignored.
    """
    return len(token) != 1


def load_norm_protos(source, strict_trailer=False):
    """
    Load a prototype table from a path or an open text stream.
    Args:
        source: file path or text stream
        strict_trailer: raise instead of ignoring trailing text that is not a class header
    Returns:
        PrototypeTable
    Raises:
        FormatError: on any structural problem or if the file cannot be read
    """
    if isinstance(source, (str, bytes, os.PathLike)):
        path = os.fsdecode(source)
        try:
            with open(path, 'r', encoding=PROTO_FILE_ENCODING) as f:
                return read_norm_protos(f, source=path, strict_trailer=strict_trailer)
        except OSError as e:
            raise FormatError(f"Cannot read prototype file ({e.strerror or e})", source=path) from e
        except UnicodeDecodeError as e:
            raise FormatError(f"Prototype file is not valid {PROTO_FILE_ENCODING} ({e.reason} at byte {e.start})", source=path) from e
    name = getattr(source, 'name', None)
    try:
        return read_norm_protos(source, source=name, strict_trailer=strict_trailer)
    except UnicodeDecodeError as e:
        raise FormatError(f"Prototype stream is not valid text ({e.reason} at byte {e.start})", source=name) from e


def read_norm_protos(stream, source=None, strict_trailer=False):
    reader = TokenReader(stream, source)
    num_params = read_sample_size(reader)
    if num_params < CHAR_NORM_NUM_PARAMS:
        raise reader.error("Too few parameters for char-norm prototypes",
                           expected=f'>= {CHAR_NORM_NUM_PARAMS}', found=str(num_params))
    param_desc = read_param_desc(reader, num_params)

    class_protos = {}
    while not reader.at_eof():
        token, line = reader.peek()
        if is_end_of_blocks(token):
            if strict_trailer:
                reader.next_token('class header')
                raise reader.error("Malformed class header", expected='one-character class symbol', found=token)
            logger.warning(f"[NormProtoLoader] {source or '<stream>'}:{line}: {token!r} is not a class header, ignoring rest of input")
            break
        reader.next_token('class symbol')
        class_id = ord(token)
        if class_id == NO_CLASS or class_id > MAX_CLASS_ID:
            raise reader.error("Class symbol outside class id space",
                               expected=f'character code 1..{MAX_CLASS_ID}', found=token)
        count = reader.read_int('prototype count', minimum=0)
        # a class may appear in several blocks; later blocks append
        plist = class_protos.setdefault(class_id, [])
        for _ in range(count):
            plist.append(read_prototype(reader, num_params))

    table = PrototypeTable(num_params, param_desc, class_protos)
    logger.info(f"[NormProtoLoader] Loaded {table.num_prototypes()} prototypes for "
                f"{len(table.class_ids())} classes ({num_params} params) from {source or '<stream>'}")
    return table


def write_norm_protos(stream, table):
    """Write table in the format read_norm_protos accepts."""
    stream.write(f"{table.num_params}\n")
    write_param_desc(stream, table.param_desc)
    for class_id in table.class_ids():
        symbol = chr(class_id)
        if not symbol.isprintable() or symbol.isspace():
            raise ValueError(f"Class id {class_id} has no printable symbol and cannot be written")
        plist = table.prototypes_for(class_id)
        stream.write(f"{symbol} {len(plist)}\n")
        for proto in plist:
            write_prototype(stream, proto)


def save_norm_protos(path, table):
    with open(path, 'w', encoding=PROTO_FILE_ENCODING) as f:
        write_norm_protos(f, table)
    logger.info(f"[NormProtoLoader] Saved {table.num_prototypes()} prototypes to {path}")
