from __future__ import annotations
import hashlib
import logging
import numpy as np

from prng128.core.state import State, FALLBACK_STATE

logger = logging.getLogger(__name__)

DIGEST_SIZE = 16
_INT_MIN = -(1 << 63)
_INT_LIMIT = 1 << 64

def hash_to_state(*chunks) -> State:
    """BLAKE2b-128 of the concatenated chunks, read as four little-endian words."""
    h = hashlib.blake2b(digest_size=DIGEST_SIZE)
    for chunk in chunks:
        h.update(chunk)
    state = State.from_bytes(h.digest())
    if state.is_degenerate:
        logger.warning("zero digest for seed material, using fallback state")
        return FALLBACK_STATE
    return state

def is_bytes_like(value) -> bool:
    return isinstance(value, (bytes, bytearray, memoryview))

def value_bytes(value) -> bytes:
    """Byte image of a plain fixed-layout value.

    bool -> 1 byte, int -> 8 bytes two's complement, float -> IEEE-754 double,
    numpy scalars/arrays -> their C-contiguous buffer. All little-endian.
    Values with indirection (str, containers, object arrays) are refused:
    only the bytes would be hashed, not what they refer to.
    """
    if is_bytes_like(value):
        return bytes(value)
    if isinstance(value, str):
        raise TypeError("str has no fixed byte layout, encode it first")
    if isinstance(value, (bool, np.bool_)):
        return b"\x01" if value else b"\x00"
    if isinstance(value, int):
        if not _INT_MIN <= value < _INT_LIMIT:
            raise OverflowError(f"integer {value} does not fit in 64 bits")
        return np.asarray(value & (_INT_LIMIT - 1), dtype="<u8").tobytes()
    if isinstance(value, float):
        return np.asarray(value, dtype="<f8").tobytes()
    if isinstance(value, (np.generic, np.ndarray)):
        arr = np.asarray(value)
        if arr.dtype.hasobject:
            raise TypeError(f"dtype {arr.dtype} holds references, not plain data")
        return np.ascontiguousarray(arr, dtype=arr.dtype.newbyteorder("<")).tobytes()
    raise TypeError(f"cannot take the byte image of {type(value).__name__}")
