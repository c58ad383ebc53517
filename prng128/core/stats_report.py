from __future__ import annotations
import json
from pathlib import Path
import numpy as np
import pandas as pd

from prng128.core.draws import expected_bounds
from prng128.core.tables import read_table

N_BUCKETS = 16

def uniformity_chi2(values: np.ndarray, lo: float, hi: float, buckets: int = N_BUCKETS,
                    discrete: bool = False) -> tuple[float, int]:
    """Pearson chi-square of `values` against a uniform spread over [lo, hi].

    Returns (statistic, degrees of freedom). Integer streams narrower than
    `buckets` get one bucket per value.
    """
    if discrete:
        buckets = int(min(buckets, hi - lo + 1))
        lo, hi = lo - 0.5, hi + 0.5
    if len(values) == 0 or buckets < 2:
        return 0.0, 0
    counts, _ = np.histogram(np.asarray(values, dtype=float), bins=buckets, range=(float(lo), float(hi)))
    expected = len(values) / buckets
    return float(((counts - expected) ** 2 / expected).sum()), buckets - 1

def stream_summary(index: dict, out_dir: Path) -> pd.DataFrame:
    rows = []
    for s in index["streams"]:
        df = read_table(Path(out_dir) / s["path"])
        lo, hi = expected_bounds(s["kind"], **s["params"])
        values = df["value"].to_numpy()
        chi2, dof = uniformity_chi2(values, lo, hi, discrete=s["kind"] != "real")
        rows.append({
            "stream": s["name"],
            "kind": s["kind"],
            "draws": int(len(values)),
            "min": float(values.min()) if len(values) else np.nan,
            "max": float(values.max()) if len(values) else np.nan,
            "mean": float(values.mean()) if len(values) else np.nan,
            "expected_mean": (float(lo) + float(hi)) / 2,
            "chi2": chi2,
            "dof": dof,
        })
    return pd.DataFrame(rows)

def write_stats_report(out_dir: Path) -> Path:
    out_dir = Path(out_dir)
    index = json.loads((out_dir/"streams.json").read_text(encoding="utf-8"))
    summary = stream_summary(index, out_dir)

    html = []
    html.append("<h1>prng128 Stream Report</h1>")
    html.append(f"<p>Seed: {index['seed']!r}</p>")
    html.append(f"<p>Root state: <code>{index['root_state']}</code></p>")
    html.append(f"<p>Streams: {len(summary):,}</p>")

    html.append(f"<h2>Uniformity (chi-square, up to {N_BUCKETS} buckets)</h2>")
    html.append(summary.to_html(index=False) if len(summary) else "<p>No streams.</p>")

    for s in index["streams"]:
        df = read_table(out_dir / s["path"])
        html.append(f"<h2>{s['name']} ({s['kind']})</h2>")
        html.append(df[["value"]].describe().to_html())

    path = out_dir/"stats_report.html"
    path.write_text("\n".join(html), encoding="utf-8")
    return path
