"""
Main Entry Point for css-modules-typings CLI.

This module handles argument parsing and dispatches to the command handlers
defined in `css_modules_typings.cli.handlers`.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from css_modules_typings import __version__
from css_modules_typings.cli import handlers
from css_modules_typings.config import parse_cli_key_values


def main(argv: Optional[List[str]] = None) -> int:
  """
  Main CLI entry point.

  Args:
      argv: Optional list of command line arguments (defaults to sys.argv).

  Returns:
      int: Exit code (0 for success, non-zero for failure).
  """
  parser = argparse.ArgumentParser(
    prog="css-modules-typings",
    description="css-modules-typings: TypeScript declarations for CSS Modules",
  )
  parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

  subparsers = parser.add_subparsers(dest="command", required=True)

  # --- Command: GENERATE ---
  cmd_gen = subparsers.add_parser("generate", help="Write the .d.ts for a compiled CSS Modules stylesheet")
  cmd_gen.add_argument("fragment", help="File holding the css-loader output ('-' reads stdin)")
  cmd_gen.add_argument(
    "--resource",
    type=Path,
    required=True,
    help="Stylesheet the fragment was compiled from; the .d.ts is written next to it",
  )
  cmd_gen.add_argument("--banner", default=None, help="Text prefixed to the generated file")
  cmd_gen.add_argument(
    "--eol",
    default=None,
    help="Line ending: lf, crlf, cr or a literal sequence (default: from toml, else OS)",
  )
  cmd_gen.add_argument(
    "--formatter",
    choices=["prettier", "none"],
    default=None,
    help="Formatter to apply (default: prettier when installed)",
  )
  cmd_gen.add_argument(
    "--config",
    nargs="*",
    help="Raw loader options in key=value format (e.g. banner='// generated')",
  )

  args = parser.parse_args(argv)

  if args.command == "generate":
    try:
      extra = parse_cli_key_values(args.config)
    except ValueError as e:
      parser.error(str(e))
    return handlers.handle_generate(args.fragment, args.resource, args.eol, args.banner, args.formatter, extra)

  return 0


if __name__ == "__main__":
  sys.exit(main())
