"""Command-line interface.

Usage:
    python -m acousticzones survey.csv
    python -m acousticzones survey.csv --apply "Layer 1__90__200cm__0:bass_trap" --before
"""
import argparse
import logging
import sys
from typing import List, Optional

from acousticzones.app.state import Store
from acousticzones.config import SAMPLE_SURVEY_PATH
from acousticzones.logging_config import setup_logging
from acousticzones.model.colors import rgb_to_hex
from acousticzones.model.io import IOManager
from acousticzones.model.zones import pretty_zone

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="acousticzones",
        description="Deploy an acoustic survey and report zones, placements and treatments.",
    )
    parser.add_argument(
        "csv",
        nargs="?",
        default=SAMPLE_SURVEY_PATH,
        help="Survey CSV (Angle,dB,Ultrasonic,RT60,Classification,Layer). Defaults to the bundled sample.",
    )
    parser.add_argument(
        "--layer",
        default=None,
        help="Layer name for rows without a Layer column.",
    )
    parser.add_argument(
        "--apply",
        action="append",
        default=[],
        metavar="KEY:TREATMENT",
        help="Apply a treatment to a point; may be repeated.",
    )
    parser.add_argument(
        "--before",
        action="store_true",
        help="Report 'before' colors instead of 'after'.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")
    parser.add_argument("--log-file", default=None, help="Also write the log to this file.")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        log_file=args.log_file,
        stream=sys.stderr,
    )

    try:
        rows = IOManager.load_rows(args.csv, layer=args.layer)
    except IOError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    store = Store()
    store.deploy_rows(rows)
    logger.info(f"Deployed {len(store.state.points)} point(s) from {args.csv}")

    for item in args.apply:
        key, sep, treatment_id = item.rpartition(":")
        if not sep or not key:
            print(f"error: expected KEY:TREATMENT, got '{item}'", file=sys.stderr)
            return 2
        store.apply_treatment(key, treatment_id)

    if args.before:
        store.set_show_after(False)

    state = store.state
    check = state.room_check
    print(f"Room check: {'OK' if check.ok else 'NOT OK'} - {check.reason}")

    for view in store.point_views():
        p = view.position
        severity = "-" if view.severity is None else f"{view.severity}/100"
        print(
            f"{view.key:<32} {pretty_zone(view.zone):<9} "
            f"({p.x:6.2f}, {p.y:5.2f}, {p.z:6.2f})  {rgb_to_hex(view.color)}  "
            f"severity {severity}{'  satisfied' if view.satisfied else ''}"
        )

    b = state.bounds
    print(f"Room bounds: N {b.north:.2f}  S {b.south:.2f}  E {b.east:.2f}  W {b.west:.2f}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
