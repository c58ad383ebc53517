from __future__ import annotations
from dataclasses import dataclass
import operator
import struct

MASK32 = 0xFFFFFFFF

# four little-endian uint32 words, a..d
_LAYOUT = struct.Struct("<4I")

@dataclass(frozen=True)
class State:
    """128-bit xorshift128 state. Serializes as 16 little-endian bytes (a, b, c, d)."""
    a: int
    b: int
    c: int
    d: int

    def __post_init__(self):
        for name in ("a", "b", "c", "d"):
            object.__setattr__(self, name, operator.index(getattr(self, name)) & MASK32)

    @property
    def words(self) -> tuple[int, int, int, int]:
        return (self.a, self.b, self.c, self.d)

    @property
    def is_degenerate(self) -> bool:
        return not (self.a or self.b or self.c or self.d)

    def to_bytes(self) -> bytes:
        return _LAYOUT.pack(*self.words)

    @classmethod
    def from_bytes(cls, data) -> State:
        data = bytes(data)
        if len(data) != _LAYOUT.size:
            raise ValueError(f"state needs {_LAYOUT.size} bytes, got {len(data)}")
        return cls(*_LAYOUT.unpack(data))

    def hex(self) -> str:
        return self.to_bytes().hex()

    @classmethod
    def from_hex(cls, text: str) -> State:
        return cls.from_bytes(bytes.fromhex(text.strip()))

# Marsaglia's reference xor128 seed, used when a hash would yield all zeros
FALLBACK_STATE = State(123456789, 362436069, 521288629, 88675123)
