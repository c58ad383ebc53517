from __future__ import annotations

from prng128.core.state import State, MASK32
from prng128.core.hashing import hash_to_state, is_bytes_like, value_bytes

UINT32_MAX = MASK32
_INT32_SIGN = 1 << 31
_REAL_SCALE = 1.0 / UINT32_MAX

def to_int32(x: int) -> int:
    """Two's-complement wraparound into [-2**31, 2**31 - 1]."""
    x &= MASK32
    return x - (1 << 32) if x & _INT32_SIGN else x


class Generator:
    """32-bit generator over Marsaglia's xorshift128 ("xor128") recurrence.

    Build one from a seed buffer (hashed into the state) or from an explicit
    State, or derive one from another generator with the split methods.
    Not safe to share between threads; hand each worker its own split instead.
    """

    __slots__ = ("_a", "_b", "_c", "_d")

    def __init__(self, seed=None, *, state: State | None = None):
        if state is None:
            if seed is None:
                raise TypeError("Generator needs a seed buffer or a state")
            if isinstance(seed, State):
                state = seed
            else:
                state = hash_to_state(bytes(memoryview(seed)))
        elif seed is not None:
            raise TypeError("pass either a seed buffer or a state, not both")
        self._a, self._b, self._c, self._d = state.words

    @classmethod
    def from_seed(cls, seed) -> Generator:
        return cls(seed)

    @classmethod
    def from_state(cls, state: State) -> Generator:
        return cls(state=state)

    def state(self) -> State:
        return State(self._a, self._b, self._c, self._d)

    def copy(self) -> Generator:
        return Generator(state=self.state())

    def random32(self) -> int:
        """Advance one step and return the raw 32-bit draw."""
        t = self._d
        s = self._a
        self._d = self._c
        self._c = self._b
        self._b = s
        t ^= (t << 11) & MASK32
        t ^= t >> 8
        self._a = t ^ s ^ (s >> 19)
        return self._a

    def random(self, n: int) -> int:
        """Value in [0, n-1], or 0 when n == 0.

        Scales one draw by a 64-bit multiply-high, so non power-of-two n carry
        a slight bias. One draw is consumed for every n, including 0.
        """
        return ((n & MASK32) * self.random32()) >> 32

    def random_0_to_n(self, n: int) -> int:
        """Value in [0, n] inclusive."""
        n &= MASK32
        if n == UINT32_MAX:
            return self.random32()
        return self.random(n + 1)

    def random_range(self, i: int, j: int) -> int:
        """Signed value in [min(i, j), max(i, j)]; arguments are int32."""
        i, j = to_int32(i), to_int32(j)
        lo, hi = (i, j) if i <= j else (j, i)
        return to_int32(lo + self.random_0_to_n((hi - lo) & MASK32))

    def random_real(self) -> float:
        """Double in [0.0, 1.0]; both endpoints are reachable."""
        return self.random32() * _REAL_SCALE

    def split_no_mutate(self) -> Generator:
        """Child generator hashed from the current state; self is unchanged.

        Calling this twice without advancing self in between returns two
        identical, fully correlated generators. Use split() for repeated forks.
        """
        return Generator(state=hash_to_state(self.state().to_bytes()))

    def split(self) -> Generator:
        """Like split_no_mutate(), then advances self by one step."""
        child = self.split_no_mutate()
        self.random32()
        return child

    def split_parameterized(self, parameters) -> Generator:
        """Child generator keyed by `parameters`; self is unchanged.

        `parameters` is a bytes-like buffer or a plain fixed-layout value
        (bool, int, float, numpy scalar or non-object array), in which case
        its byte image is used.
        """
        if not is_bytes_like(parameters):
            parameters = value_bytes(parameters)
        return Generator(state=hash_to_state(self.state().to_bytes(), parameters))

    def __eq__(self, other):
        if not isinstance(other, Generator):
            return NotImplemented
        return self.state() == other.state()

    __hash__ = None

    def __repr__(self) -> str:
        return f"Generator(state={self.state().hex()})"
