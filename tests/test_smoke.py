from pathlib import Path
import subprocess, json, sys

ROOT = Path(__file__).resolve().parent.parent

def test_smoke_generate_and_validate(tmp_path):
    out = tmp_path/"data"
    cfg = ROOT/"configs/templates/small.yaml"
    subprocess.check_call([sys.executable,"-m","prng128.cli","generate", str(cfg), "--out", str(out)], cwd=ROOT)
    subprocess.check_call([sys.executable,"-m","prng128.cli","validate-dataset", str(out)], cwd=ROOT)
    manifest = json.loads((out/"manifest.json").read_text(encoding="utf-8"))
    assert "streams/height.parquet" in manifest["tables"]
    assert (out/"stats_report.html").exists()
