from __future__ import annotations
import numpy as np
import pandas as pd

from prng128.core.generator import Generator, UINT32_MAX, to_int32

DRAW_KINDS = ("random32", "random", "random_0_to_n", "range", "real")

_DTYPES = {
    "random32": np.uint32,
    "random": np.uint32,
    "random_0_to_n": np.uint32,
    "range": np.int32,
    "real": np.float64,
}

def _require(kind: str, params: dict, *names: str) -> list[int]:
    missing = [n for n in names if params.get(n) is None]
    if missing:
        raise ValueError(f"draw kind {kind!r} needs {', '.join(missing)}")
    return [int(params[n]) for n in names]

def _drawer(gen: Generator, kind: str, params: dict):
    if kind == "random32":
        return gen.random32
    if kind == "random":
        n, = _require(kind, params, "n")
        return lambda: gen.random(n)
    if kind == "random_0_to_n":
        n, = _require(kind, params, "n")
        return lambda: gen.random_0_to_n(n)
    if kind == "range":
        lo, hi = _require(kind, params, "lo", "hi")
        return lambda: gen.random_range(lo, hi)
    if kind == "real":
        return gen.random_real
    raise ValueError(f"unknown draw kind {kind!r}, expected one of {DRAW_KINDS}")

def expected_bounds(kind: str, **params) -> tuple:
    """Closed interval every draw of `kind` falls in."""
    if kind == "random32":
        return (0, UINT32_MAX)
    if kind == "random":
        n, = _require(kind, params, "n")
        return (0, max((n & UINT32_MAX) - 1, 0))
    if kind == "random_0_to_n":
        n, = _require(kind, params, "n")
        return (0, n & UINT32_MAX)
    if kind == "range":
        lo, hi = sorted(to_int32(v) for v in _require(kind, params, "lo", "hi"))
        return (lo, hi)
    if kind == "real":
        return (0.0, 1.0)
    raise ValueError(f"unknown draw kind {kind!r}, expected one of {DRAW_KINDS}")

def draw_array(gen: Generator, kind: str, count: int, **params) -> np.ndarray:
    draw = _drawer(gen, kind, params)
    return np.fromiter((draw() for _ in range(count)), dtype=_DTYPES[kind], count=count)

def draw_frame(gen: Generator, stream: str, kind: str, count: int, **params) -> pd.DataFrame:
    values = draw_array(gen, kind, count, **params)
    return pd.DataFrame({
        "stream": [stream]*count,
        "draw_index": np.arange(count, dtype=np.int64),
        "value": values,
    })
