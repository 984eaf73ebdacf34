from __future__ import annotations

import argparse
from pathlib import Path

from dumpfile.app import run_app
from dumpfile.core.config import DEFAULT_WIDTH, DUMP_WIDTHS, OFFSET_DIGITS, DumpConfig
from dumpfile.utils.logger import LOG_LEVELS


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="dumpfile",
        description="Dump files in hexadecimal and as text. With no file names an interactive shell starts.",
    )
    p.add_argument("files", nargs="*", type=Path, help="Files to dump")
    p.add_argument("-w", "--width", type=int, choices=DUMP_WIDTHS, default=DEFAULT_WIDTH,
                   help=f"Input bytes per dump line (default: {DEFAULT_WIDTH})")

    text = p.add_mutually_exclusive_group()
    text.add_argument("-e", "--eight-bit", dest="eight_bit", action="store_true",
                      help="Display bytes 0x80-0xFF as 8-bit text")
    text.add_argument("--seven-bit", dest="eight_bit", action="store_false",
                      help="Display only 7-bit plain text (default)")

    p.add_argument("--offset-digits", type=int, default=OFFSET_DIGITS,
                   help=f"Hex digits in the offset column (default: {OFFSET_DIGITS})")
    p.add_argument("-o", "--output", type=Path, help="Write the dump to this file instead of stdout")

    # Interactive use
    p.add_argument("--shell", action="store_true", help="Start the interactive shell after dumping")
    p.add_argument("--cmd", type=str, default="", help='Semicolon-separated shell commands, e.g. "width 8; open a.bin; wait"')
    p.add_argument("--cfg", help="Path to a semicolon/newline-separated startup script to run before --cmd")

    # Logging
    p.add_argument("--log-level", default="WARNING", choices=list(LOG_LEVELS))
    p.add_argument("--quiet", action="store_true", help="Log messages only, without level and logger name")
    return p


def main(argv: list[str] | None = None) -> None:
    p = build_parser()
    args = p.parse_args(argv)

    try:
        config = DumpConfig(
            bytes_per_line=args.width,
            eight_bit_text=args.eight_bit,
            offset_digits=args.offset_digits,
        )
    except ValueError as e:
        p.error(str(e))

    try:
        run_app(
            files=args.files,
            config=config,
            output=args.output,
            shell=args.shell,
            cmd=args.cmd,
            cfg=args.cfg,
            log_level=args.log_level,
            quiet=args.quiet,
        )
    except OSError as e:
        p.error(str(e))


if __name__ == "__main__":
    main()
