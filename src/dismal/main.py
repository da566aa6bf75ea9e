"""Command-line runner for Dismal."""

from __future__ import annotations

import argparse
import os
import sys
import traceback
from dataclasses import replace
from typing import Any, Sequence

import yaml

from dismal import __version__, logging
from dismal.config.options import OPTIONS
from dismal.errors import InvariantError
from dismal.logging import VERBOSE_CODES, VERBOSE_NAMES
from dismal.reporting import format_config
from dismal.simulation import Simulation

DEFAULT_LOG_FILE = "updates.dat"

log = logging.getLogger(__name__)


def _verbose_help() -> str:
    flags = ",".join(
        f"{code}={VERBOSE_NAMES[flag]}" for code, flag in VERBOSE_CODES.items()
    )
    return f"verbose: {flags}"


def _parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="dismal",
        description="Run the Dismal closed-economy market simulation.",
    )
    for opt in OPTIONS:
        if opt.flag is None:
            continue
        p.add_argument(
            f"-{opt.flag}",
            f"--{opt.key.replace('_', '-')}",
            dest=opt.key,
            type=opt.type,
            default=None,
            help=opt.help,
        )
    p.add_argument("-v", "--verbose-flags", dest="verbose_flags", help=_verbose_help())
    p.add_argument("--config", help="YAML file with configuration overrides")
    p.add_argument(
        "--log-file",
        dest="log_file",
        help=f"append the configuration echo to this file (default {DEFAULT_LOG_FILE})",
    )
    p.add_argument(
        "--no-log-file",
        dest="no_log_file",
        action="store_true",
        help="do not write the configuration echo to a file",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p


def _overrides(args: argparse.Namespace) -> dict[str, Any]:
    """Keyword overrides for the options actually given on the command line."""
    keys = [opt.key for opt in OPTIONS] + ["verbose_flags", "log_file"]
    return {k: getattr(args, k) for k in keys if getattr(args, k, None) is not None}


def _failure(err: InvariantError) -> str:
    """``file:line FAILURE: message`` for the frame that raised *err*."""
    frames = traceback.extract_tb(err.__traceback__)
    if not frames:
        return f"FAILURE: {err}"
    origin = frames[-1]
    return f"{os.path.basename(origin.filename)}:{origin.lineno} FAILURE: {err}"


def main(argv: Sequence[str] | None = None) -> int:
    parser = _parser()
    args = parser.parse_args(argv)

    print(f"DISMAL ECONOMIC MODEL (Version {__version__})")

    try:
        sim = Simulation.init(config=args.config, **_overrides(args))
    except (ValueError, TypeError, OSError, yaml.YAMLError) as err:
        parser.print_usage(sys.stderr)
        print(f"{parser.prog}: error: {err}", file=sys.stderr)
        return 2

    if args.no_log_file:
        sim.config = replace(sim.config, log_file=None)
    elif sim.config.log_file is None:
        sim.config = replace(sim.config, log_file=DEFAULT_LOG_FILE)

    for line in format_config(sim.config, comment=" "):
        print(line)

    try:
        sim.run()
    except InvariantError as err:
        sys.stdout.flush()
        print(_failure(err))
        log.debug("Invariant violation", exc_info=err)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
