#!/usr/bin/env python3
"""Command line entry point: ``chip8 ROM``."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .errors import ExecutionError, RomLoadError
from .run_chip8 import run_emulator

# Lines of recent execution printed with a fatal error.
HISTORY_LINES = 8


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chip8", description="CHIP-8 virtual machine"
    )
    parser.add_argument("rom", help="Path to a raw CHIP-8 ROM image")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s"
    )

    try:
        run_emulator(args.rom)
    except RomLoadError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except ExecutionError as exc:
        print(f"Execution error: {exc}", file=sys.stderr)
        for line in exc.history[-HISTORY_LINES:]:
            print(f"  {line}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 0
    return 0


if __name__ == "__main__":
    sys.exit(main())
