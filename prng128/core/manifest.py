from __future__ import annotations
import hashlib, json
from pathlib import Path
from datetime import datetime, timezone

from prng128.core.tables import SUFFIXES, read_table

def sha256_file(path: Path) -> str:
    h = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(1024*1024), b""):
            h.update(chunk)
    return h.hexdigest()

def write_manifest(out_dir: Path, *, dataset_name: str, dataset_version: str, generator_version: str,
                   config_sha256: str, seed, root_state: str, streams: list[str]) -> Path:
    out_dir = Path(out_dir)
    tables = {}
    for suffix in SUFFIXES.values():
        for p in sorted(out_dir.rglob(f"*{suffix}")):
            rel = p.relative_to(out_dir).as_posix()
            tables[rel] = {"rows": int(len(read_table(p))), "sha256": sha256_file(p)}
    manifest = {
        "dataset_name": dataset_name,
        "dataset_version": dataset_version,
        "generator_version": generator_version,
        "config_sha256": config_sha256,
        "seed": seed,
        "root_state": root_state,
        "created_utc": datetime.now(timezone.utc).isoformat().replace("+00:00","Z"),
        "tables": tables,
        "streams": streams,
    }
    path = out_dir / "manifest.json"
    path.write_text(json.dumps(manifest, indent=2), encoding="utf-8")
    return path
