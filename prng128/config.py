from __future__ import annotations
import hashlib
import re
from pathlib import Path
import yaml

from prng128.core.draws import DRAW_KINDS

DEFAULT_SEED = 1337
DEFAULT_COUNT = 1000
SEED_MIN = -(1 << 63)
SEED_LIMIT = 1 << 64
EXPORT_FORMATS = ("parquet", "csv")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_NAME_RE = re.compile(r"^[A-Za-z0-9_.-]+$")
_KIND_PARAMS = {
    "random32": (),
    "random": ("n",),
    "random_0_to_n": ("n",),
    "range": ("lo", "hi"),
    "real": (),
}

class ConfigError(ValueError):
    pass

def sha256_text(s: str) -> str:
    return hashlib.sha256(s.encode("utf-8")).hexdigest()

def _int_field(where: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{where} must be an integer, got {value!r}")
    return value

def _normalize_stream(i: int, raw) -> dict:
    where = f"streams[{i}]"
    if not isinstance(raw, dict):
        raise ConfigError(f"{where} must be a mapping")
    name = raw.get("name")
    if not isinstance(name, str) or not _NAME_RE.match(name):
        raise ConfigError(f"{where}.name must match {_NAME_RE.pattern}, got {name!r}")
    kind = raw.get("kind", "random32")
    if kind not in DRAW_KINDS:
        raise ConfigError(f"{where}.kind must be one of {DRAW_KINDS}, got {kind!r}")
    count = _int_field(f"{where}.count", raw.get("count", DEFAULT_COUNT))
    if count < 0:
        raise ConfigError(f"{where}.count must be >= 0")
    params = {}
    for p in _KIND_PARAMS[kind]:
        if p not in raw:
            raise ConfigError(f"{where}: kind {kind!r} needs {p!r}")
        params[p] = _int_field(f"{where}.{p}", raw[p])
    key = raw.get("key", name)
    if not isinstance(key, str):
        raise ConfigError(f"{where}.key must be a string")
    return {"name": name, "key": key, "kind": kind, "count": count, "params": params}

def normalize_config(cfg) -> dict:
    if cfg is None:
        cfg = {}
    if not isinstance(cfg, dict):
        raise ConfigError("config root must be a mapping")

    seed = cfg.get("seed", DEFAULT_SEED)
    if isinstance(seed, bool) or not isinstance(seed, (int, str)):
        raise ConfigError(f"seed must be an integer or a string, got {seed!r}")
    if isinstance(seed, int) and not SEED_MIN <= seed < SEED_LIMIT:
        raise ConfigError(f"seed must fit in 64 bits, got {seed}")

    raw_streams = cfg.get("streams") or []
    if not isinstance(raw_streams, list):
        raise ConfigError("streams must be a list")
    streams = [_normalize_stream(i, s) for i, s in enumerate(raw_streams)]
    names = [s["name"] for s in streams]
    dupes = sorted({n for n in names if names.count(n) > 1})
    if dupes:
        raise ConfigError(f"duplicate stream names: {', '.join(dupes)}")

    export = dict(cfg.get("export") or {})
    fmt = export.get("format", "parquet")
    if fmt not in EXPORT_FORMATS:
        raise ConfigError(f"export.format must be one of {EXPORT_FORMATS}, got {fmt!r}")

    level = str((cfg.get("logging") or {}).get("level", "INFO")).upper()
    if level not in LOG_LEVELS:
        raise ConfigError(f"logging.level must be one of {LOG_LEVELS}, got {level!r}")

    return {
        "seed": seed,
        "dataset_version": str(cfg.get("dataset_version", "1.0")),
        "streams": streams,
        "export": {
            "format": fmt,
            "write_stats_report": bool(export.get("write_stats_report", True)),
            "write_manifest": bool(export.get("write_manifest", True)),
        },
        "logging": {"level": level},
    }

def load_config(path: Path) -> tuple[dict, str]:
    """Read and validate a YAML config. Returns (config, sha256 of its text)."""
    text = Path(path).read_text(encoding="utf-8")
    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"{path}: {e}") from e
    return normalize_config(raw), sha256_text(text)
