from __future__ import annotations
import argparse, json, logging
from pathlib import Path

from prng128.config import load_config, LOG_LEVELS
from prng128.core.generator import Generator
from prng128.core.state import State
from prng128.core.streams import Streams
from prng128.core.draws import DRAW_KINDS, draw_array, draw_frame
from prng128.core.tables import stream_path, write_table
from prng128.core.manifest import write_manifest
from prng128.core.validation import validate_dataset
from prng128.core.stats_report import write_stats_report

GENERATOR_VERSION = "prng128-1.0.0"

logger = logging.getLogger("prng128")

def cmd_generate(cfg_path: Path, out_dir: Path, log_level: str | None = None) -> None:
    cfg, config_sha = load_config(cfg_path)
    if log_level is None:
        logging.getLogger().setLevel(cfg["logging"]["level"])
    seed = cfg["seed"]
    streams = Streams(seed)
    root_state = streams.root.state().hex()
    logger.info(f"Seed {seed!r} -> root state {root_state}")

    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    fmt = cfg["export"]["format"]

    entries = []
    for s in cfg["streams"]:
        child = streams.child(s["key"])
        child_state = child.state().hex()
        df = draw_frame(child, s["name"], s["kind"], s["count"], **s["params"])
        path = write_table(df, stream_path(out_dir, s["name"], fmt))
        logger.debug(f"Stream {s['name']} (key={s['key']!r}, {s['kind']}) state {child_state}: {s['count']} draws")
        entries.append({
            **s,
            "path": path.relative_to(out_dir).as_posix(),
            "child_state": child_state,
        })

    index = {"seed": seed, "root_state": root_state, "format": fmt, "streams": entries}
    (out_dir/"streams.json").write_text(json.dumps(index, indent=2), encoding="utf-8")

    if cfg["export"]["write_stats_report"]:
        write_stats_report(out_dir)

    if cfg["export"]["write_manifest"]:
        write_manifest(
            out_dir,
            dataset_name="prng128-streams",
            dataset_version=cfg["dataset_version"],
            generator_version=GENERATOR_VERSION,
            config_sha256=config_sha,
            seed=seed,
            root_state=root_state,
            streams=[s["name"] for s in cfg["streams"]],
        )
    logger.info(f"Wrote {len(entries)} streams to {out_dir}")

def cmd_validate_dataset(out_dir: Path) -> None:
    rep = validate_dataset(Path(out_dir))
    print(json.dumps(rep, indent=2))
    if not rep["ok"]:
        raise SystemExit(2)

def generator_from_args(args) -> Generator:
    if args.state:
        return Generator(state=State.from_hex(args.state))
    if args.seed_hex is not None:
        return Generator(bytes.fromhex(args.seed_hex))
    return Generator(args.seed.encode("utf-8"))

def cmd_draw(args) -> None:
    gen = generator_from_args(args)
    if args.split_key is not None:
        gen = gen.split_parameterized(args.split_key.encode("utf-8"))
    logger.info(f"Drawing {args.count} x {args.kind} from state {gen.state().hex()}")
    values = draw_array(gen, args.kind, args.count, n=args.n, lo=args.lo, hi=args.hi)
    for v in values.tolist():
        print(repr(v) if args.kind == "real" else v)

def cmd_state(args) -> None:
    st = generator_from_args(args).state()
    print(st.hex())
    print(" ".join(f"0x{w:08x}" for w in st.words))

def add_source_args(p: argparse.ArgumentParser, with_state: bool) -> None:
    src = p.add_mutually_exclusive_group()
    src.add_argument("--seed", default="", help="seed text (UTF-8); default is the empty seed")
    src.add_argument("--seed-hex", help="seed bytes as hex")
    if with_state:
        src.add_argument("--state", help="explicit 32-hex-digit state")
    else:
        p.set_defaults(state=None)

def main(argv=None):
    ap = argparse.ArgumentParser(prog="prng128")
    ap.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS,
                    help="overrides logging.level from the config; default INFO")
    sub = ap.add_subparsers(dest="cmd", required=True)
    g = sub.add_parser("generate")
    g.add_argument("config")
    g.add_argument("--out", required=True)
    v = sub.add_parser("validate-dataset")
    v.add_argument("out_dir")
    d = sub.add_parser("draw")
    add_source_args(d, with_state=True)
    d.add_argument("--kind", default="random32", choices=DRAW_KINDS)
    d.add_argument("--count", type=int, default=10)
    d.add_argument("--n", type=int)
    d.add_argument("--lo", type=int)
    d.add_argument("--hi", type=int)
    d.add_argument("--split-key")
    s = sub.add_parser("state")
    add_source_args(s, with_state=False)
    args = ap.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level or "INFO", logging.INFO))

    try:
        if args.cmd == "generate":
            cmd_generate(Path(args.config), Path(args.out), args.log_level)
        elif args.cmd == "validate-dataset":
            cmd_validate_dataset(Path(args.out_dir))
        elif args.cmd == "draw":
            cmd_draw(args)
        elif args.cmd == "state":
            cmd_state(args)
    except ValueError as e:  # ConfigError, bad hex, missing draw params
        logger.error(str(e))
        raise SystemExit(2)

if __name__ == "__main__":
    main()
