from __future__ import annotations
from pathlib import Path
import pandas as pd

SUFFIXES = {"parquet": ".parquet", "csv": ".csv"}

def stream_path(out_dir: Path, name: str, fmt: str) -> Path:
    return Path(out_dir) / "streams" / f"{name}{SUFFIXES[fmt]}"

def write_table(df: pd.DataFrame, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    if path.suffix == ".csv":
        df.to_csv(path, index=False)
    else:
        df.to_parquet(path, index=False)
    return path

def read_table(path: Path) -> pd.DataFrame:
    if path.suffix == ".csv":
        return pd.read_csv(path, float_precision="round_trip")
    return pd.read_parquet(path)
