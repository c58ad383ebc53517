from __future__ import annotations
from pathlib import Path
import json
import logging
import numpy as np

from prng128.core.draws import draw_array, expected_bounds
from prng128.core.streams import Streams
from prng128.core.tables import read_table

logger = logging.getLogger(__name__)

REQUIRED_FILES = ["streams.json"]

def validate_dataset(out_dir: Path) -> dict:
    out_dir = Path(out_dir)
    missing = [f for f in REQUIRED_FILES if not (out_dir / f).exists()]
    report = {"ok": len(missing)==0, "missing_files": missing, "checks": {}}
    if not report["ok"]:
        return report

    index = json.loads((out_dir/"streams.json").read_text(encoding="utf-8"))
    missing += [s["path"] for s in index["streams"] if not (out_dir / s["path"]).exists()]
    report["ok"] = len(missing)==0

    # every stream must re-derive from the recorded seed and key
    streams = Streams(index["seed"])
    root_ok = streams.root.state().hex() == index["root_state"]
    report["checks"]["root_state"] = {"ok": root_ok}
    report["ok"] = report["ok"] and root_ok

    for s in index["streams"]:
        if s["path"] in missing:
            continue
        values = read_table(out_dir / s["path"])["value"].to_numpy()
        lo, hi = expected_bounds(s["kind"], **s["params"])
        child = streams.child(s["key"])
        state_ok = child.state().hex() == s["child_state"]
        expected = draw_array(child, s["kind"], s["count"], **s["params"])
        check = {
            "rows": int(len(values)),
            "rows_ok": len(values) == s["count"],
            "out_of_bounds": int(((values < lo) | (values > hi)).sum()),
            "state_ok": state_ok,
            "reproduced": len(values) == len(expected) and bool(np.array_equal(values, expected)),
        }
        report["checks"][s["name"]] = check
        ok = check["rows_ok"] and check["out_of_bounds"] == 0 and state_ok and check["reproduced"]
        if not ok:
            logger.warning("stream %s failed validation: %s", s["name"], check)
        report["ok"] = report["ok"] and ok

    return report
