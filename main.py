# main.py
from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass, field
from typing import Iterable, List, Sequence, TextIO

from debug import COMPONENTS, Debug
from errors import ConfigError, EnigmaError
from machine import Machine
from suites import SUITES, build_suite
from utilities import (
    apply_setting_line,
    group,
    is_setting_line,
    load_catalog,
    preprocess_message,
)

# ────────────────────────────────────────────────────────────────────────
#  0. Configuration & logging
# ────────────────────────────────────────────────────────────────────────


debug = Debug()
debug.toggle_global(False)


@dataclass(slots=True)
class Config:
    """Runtime switches that influence input handling and output layout."""

    block: int = 5                  # display group size
    debug: List[str] = field(default_factory=list)   # components to trace
    log_file: str | None = None     # mirror debug log here


# ────────────────────────────────────────────────────────────────────────
#  1. Message stream processing
# ────────────────────────────────────────────────────────────────────────


def process(machine: Machine, lines: Iterable[str], out: TextIO, cfg: Config) -> None:
    """Run every message line through MACHINE, reconfiguring it at each
    ``*`` setting line, and write the results to OUT in groups."""
    configured = False
    for raw in lines:
        line = raw.rstrip("\r\n")
        if is_setting_line(line):
            apply_setting_line(machine, line)
            configured = True
            continue
        if not configured:
            if not line.strip():
                continue
            raise ConfigError("Input must start with a setting line ('* ...')")
        out.write(group(machine.convert(preprocess_message(line)), cfg.block) + "\n")


# ────────────────────────────────────────────────────────────────────────
#  2. CLI helpers
# ────────────────────────────────────────────────────────────────────────


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Encrypt or decrypt with a rotor machine")
    p.add_argument("config", nargs="?", metavar="CONFIG", help=f"Rotor catalog (text or .json). Default: built-in {next(iter(SUITES))} catalog.")
    p.add_argument("input", nargs="?", metavar="INPUT", help="Message file. Default: standard input.")
    p.add_argument("output", nargs="?", metavar="OUTPUT", help="Result file. Default: standard output.")
    p.add_argument("--block", type=int, default=5, help="Symbols per output group. Default: 5")
    p.add_argument("--debug", action="append", default=None, choices=COMPONENTS, metavar="COMPONENT", help=f"Trace a component (repeatable): {', '.join(COMPONENTS)}")
    p.add_argument("--log-file", metavar="FILE", help="Also write the trace to FILE.")
    return p.parse_args(argv)


def build_machine(path: str | None) -> Machine:
    return load_catalog(path) if path else build_suite()


# ────────────────────────────────────────────────────────────────────────
#  3. Main entry point
# ────────────────────────────────────────────────────────────────────────


def run(args: argparse.Namespace) -> None:
    cfg = Config(block=args.block, debug=args.debug or [], log_file=args.log_file)
    if cfg.block < 1:
        raise ConfigError("--block must be at least 1")
    if cfg.debug:
        debug.toggle_global(True)
        debug.enable(*cfg.debug)
    if cfg.log_file:
        Debug.add_file(cfg.log_file)

    machine = build_machine(args.config)

    src = open(args.input, encoding="utf-8") if args.input else sys.stdin
    try:
        dst = open(args.output, "w", encoding="utf-8") if args.output else sys.stdout
        try:
            process(machine, src, dst, cfg)
        finally:
            if dst is not sys.stdout:
                dst.close()
    finally:
        if src is not sys.stdin:
            src.close()


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        run(args)
    except (EnigmaError, OSError, UnicodeDecodeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
