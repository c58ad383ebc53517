from __future__ import annotations
import numpy as np

from prng128.core.generator import Generator
from prng128.core.hashing import is_bytes_like, value_bytes

def seed_bytes(seed) -> bytes:
    # int -> 8-byte image, str -> UTF-8, buffers as-is
    if isinstance(seed, str):
        return seed.encode("utf-8")
    if is_bytes_like(seed):
        return bytes(seed)
    return value_bytes(seed)

class Streams:
    """Reproducible generator with deterministic child streams per tag."""
    def __init__(self, seed):
        self.seed = seed
        self.root = Generator(seed_bytes(seed))

    def child(self, tag: str) -> Generator:
        # root is never advanced, so a tag maps to the same stream in any call order
        return self.root.split_parameterized(tag.encode("utf-8"))

    def numpy_child(self, tag: str) -> np.random.Generator:
        return np.random.default_rng(list(self.child(tag).state().words))

    def spawn(self, count: int) -> list[Generator]:
        return [self.root.split() for _ in range(count)]
