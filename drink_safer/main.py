"""
Drink Safer CLI. Run from project root: python -m drink_safer.main
Log drinks to a local database, print the current BAC and driving guidance,
and optionally save a gauge image.
"""

import argparse
import math
import os
import sys

from drink_safer.app_logging import configure_logging, log_level_from_env
from drink_safer.calculations import estimate_bac, total_alcohol_grams
from drink_safer.drink_log import DrinkLog
from drink_safer.drinks import (
    DEFAULT_DRINK_TYPE,
    MAX_DRINK_TYPE_LENGTH,
    MAX_VOLUME_OZ,
    get_drink_type,
    list_drink_types,
)
from drink_safer.drive import classify
from drink_safer.gauge import DEFAULT_MAX_BAC, gauge_data, save_gauge_image
from drink_safer.health import HealthBridge
from drink_safer.profile import DEFAULT_AGE, DEFAULT_WEIGHT_LBS, UserProfile, load_profile

DEFAULT_DB_PATH = os.path.join("instance", "drinks.db")


def _finite_float(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {raw!r}")
    if not math.isfinite(value):
        raise argparse.ArgumentTypeError(f"not a finite number: {raw!r}")
    return value


def _positive_float(raw: str) -> float:
    value = _finite_float(raw)
    if value <= 0:
        raise argparse.ArgumentTypeError("must be > 0")
    return value


def _volume(raw: str) -> float:
    value = _positive_float(raw)
    if value > MAX_VOLUME_OZ:
        raise argparse.ArgumentTypeError(f"must be at most {MAX_VOLUME_OZ:g} oz")
    return value


def _abv(raw: str) -> float:
    value = _finite_float(raw)
    if not 0 <= value <= 100:
        raise argparse.ArgumentTypeError("must be between 0 and 100")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Drink Safer: log drinks and check your estimated BAC")
    parser.add_argument("--db", default=os.environ.get("DRINK_LOG_DB_PATH", DEFAULT_DB_PATH), help="Drink log database")
    parser.add_argument("--weight", type=_positive_float, default=DEFAULT_WEIGHT_LBS, help="Body weight (lb)")
    parser.add_argument("--age", type=int, default=DEFAULT_AGE, help="Age (years)")
    parser.add_argument("--female", action="store_true", help="Female (default male)")
    parser.add_argument(
        "--health-db",
        metavar="FILE",
        help="Read weight, age and sex from this health store instead of the flags",
    )
    parser.add_argument("--log-level", default=log_level_from_env("WARNING"))

    sub = parser.add_subparsers(dest="command", required=True)

    add = sub.add_parser("add", help="Log a drink")
    add.add_argument("drink_type", nargs="?", default=DEFAULT_DRINK_TYPE)
    add.add_argument("--volume", type=_volume, help="Volume (fl oz)")
    add.add_argument("--abv", type=_abv, help="Alcohol content (%% ABV)")

    sub.add_parser("list", help="List logged drinks")

    delete = sub.add_parser("delete", help="Delete drinks by list position")
    delete.add_argument("indices", type=int, nargs="+")

    sub.add_parser("status", help="Show BAC and guidance")
    sub.add_parser("reset", help="Delete every logged drink")
    sub.add_parser("types", help="List drink presets")

    gauge = sub.add_parser("gauge", help="Save the BAC gauge as an image")
    gauge.add_argument("output", metavar="FILE")
    gauge.add_argument("--max", type=_positive_float, default=DEFAULT_MAX_BAC, help="Gauge maximum BAC")
    return parser


def _profile(args) -> UserProfile:
    profile = UserProfile(
        weight_lbs=args.weight,
        age=args.age,
        sex="female" if args.female else "male",
    )
    if args.health_db:
        profile = load_profile(HealthBridge(args.health_db), profile)
    return profile


def _print_drinks(log: DrinkLog) -> None:
    entries = log.entries()
    if not entries:
        print("No drinks logged.")
        return
    for i, e in enumerate(entries):
        print(f"[{i}] {e.timestamp:%Y-%m-%d %H:%M} {e.drink_type}: {e.volume:.1f} oz - {e.alcohol_content:.1f}% ABV")


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)
    log = DrinkLog(args.db)

    if args.command == "add":
        if not args.drink_type.strip() or len(args.drink_type) > MAX_DRINK_TYPE_LENGTH:
            parser.error(f"drink type must be 1 to {MAX_DRINK_TYPE_LENGTH} characters")
        preset = get_drink_type(args.drink_type)
        volume = args.volume if args.volume is not None else (preset.default_oz if preset else None)
        abv = args.abv if args.abv is not None else (preset.abv if preset else None)
        if volume is None or abv is None:
            parser.error(f"--volume and --abv are required for drink type {args.drink_type!r}")
        entry = log.add_drink(args.drink_type, volume, abv)
        print(f"Added {entry.drink_type}: {entry.volume:.1f} oz - {entry.alcohol_content:.1f}% ABV")
    elif args.command == "list":
        _print_drinks(log)
    elif args.command == "delete":
        removed = log.delete_drinks(args.indices)
        print(f"Deleted {len(removed)} drink(s).")
    elif args.command == "reset":
        log.clear()
        print("Drink log cleared.")
    elif args.command == "types":
        for t in list_drink_types():
            print(f"{t['name']}: {t['default_oz']:.1f} oz - {t['abv']:.1f}% ABV")
    elif args.command == "status":
        profile = _profile(args)
        entries = log.entries()
        bac = estimate_bac(profile, entries)
        guidance = classify(bac)
        gauge = gauge_data(bac)
        print(f"Weight: {profile.weight_lbs} lb, sex: {profile.sex}, drinks: {len(entries)}")
        print(f"Alcohol: {total_alcohol_grams(entries):.1f} g")
        print(f"Current BAC: {bac:.3f}")
        print(f"Gauge: {gauge['fraction'] * 100:.0f}% ({gauge['band']})")
        print(guidance["message"])
    elif args.command == "gauge":
        bac = estimate_bac(_profile(args), log.entries())
        path = save_gauge_image(bac, output_path=args.output, max_value=args.max)
        print(f"Gauge saved: {path}")

    return 0


if __name__ == "__main__":
    sys.exit(main() or 0)
