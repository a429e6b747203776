#!/usr/bin/env python3
"""
gpxtojson: enrich a GPX file with distance, duration and speed, and print JSON.

Usage:
    gpxtojson track.gpx
    cat track.gpx | gpxtojson -
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from gpxtojson.analyze.aggregate import TIME_ORDER_POLICIES, enrich
from gpxtojson.config import load_config
from gpxtojson.errors import GpxToJsonError
from gpxtojson.formats.gpx import decode_gpx
from gpxtojson.formats.serialize import dump_json
from gpxtojson.report import print_report
from gpxtojson.util.logging import log

PROGNAME = "gpxtojson"


def non_negative_int(text: str) -> int:
    try:
        n = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {text!r}")
    if n < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0: {n}")
    return n


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog=PROGNAME,
        description="Enrich a GPX file with per-point and per-track statistics and print JSON.",
    )
    ap.add_argument("gpx",
                    help="GPX file to read, or '-' for standard input.")
    ap.add_argument("--indent", type=non_negative_int, default=None,
                    help="Pretty-print JSON with this indent (default: from config, else compact).")
    ap.add_argument("--time-order", choices=TIME_ORDER_POLICIES, default=None,
                    help="What to do when a point is earlier than the one before it "
                         "(default: from config, else clamp).")
    ap.add_argument("--report", action="store_true",
                    help="Print a per-track summary instead of JSON.")
    ap.add_argument("--tsv", action="store_true",
                    help="Print the summary tab-separated (implies --report).")
    ap.add_argument("--plot", default=None, metavar="PATH",
                    help="Also save a speed-coloured map of the points to PATH.")
    ap.add_argument("--config", default=None, metavar="PATH",
                    help="Config file to read (default: <repo>/config/config.toml).")
    return ap


def run(args: argparse.Namespace) -> int:
    cfg = load_config(
        repo_config_path=Path(args.config).expanduser() if args.config else None,
    )
    time_order = args.time_order or cfg.time_order
    indent = args.indent if args.indent is not None else cfg.indent

    if args.gpx == "-":
        raw = decode_gpx(sys.stdin.buffer)
    else:
        raw = decode_gpx(Path(args.gpx).expanduser())

    doc = enrich(raw, time_order=time_order)

    if args.plot:
        # matplotlib is only needed for --plot
        from gpxtojson.visualize.plot import plot_speed
        log(f"Wrote: {plot_speed(doc, Path(args.plot).expanduser())}")

    if args.report or args.tsv:
        print_report(doc, tsv=args.tsv)
    else:
        dump_json(doc, sys.stdout, indent=indent)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return run(args)
    except (GpxToJsonError, OSError) as e:
        print(f"{PROGNAME}: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
