"""
Generate Command Handler.

Implements ``css-modules-typings generate``: runs the loader over a compiled
css-loader module saved to disk (or piped on stdin) and writes the declaration
next to the stylesheet it came from.
"""

import asyncio
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from css_modules_typings.config import LoaderOptions
from css_modules_typings.core.loader import LoaderContext, loader
from css_modules_typings.utils.console import log_error, log_info, log_warning

STDIN_MARKER = "-"


def handle_generate(
  fragment_path: str,
  resource_path: Path,
  eol: Optional[str],
  banner: Optional[str],
  formatter: Optional[str],
  extra_options: Dict[str, Any],
) -> int:
  """
  Handles the 'generate' command execution.

  Args:
      fragment_path: File holding the compiled module, or '-' for stdin.
      resource_path: The stylesheet the module was compiled from.
      eol: Override for the newline sequence.
      banner: Override for the banner text.
      formatter: Override for the formatter choice.
      extra_options: Raw options from ``--config key=value`` flags.

  Returns:
      int: Exit code (0 for success or nothing to do, 1 for failure, 2 for bad options).
  """
  if fragment_path == STDIN_MARKER:
    content = sys.stdin.read()
  else:
    source = Path(fragment_path)
    if not source.is_file():
      log_error(f"Input not found: {source}")
      return 1
    with open(source, "rt", encoding="utf-8") as f:
      content = f.read()

  try:
    options = LoaderOptions.load(
      search_path=resource_path.parent,
      eol=eol,
      banner=banner,
      formatter=formatter,
      extra=extra_options,
    )
  except ValueError as e:
    log_error(str(e))
    return 2

  context = LoaderContext(
    resource_path=str(resource_path),
    options=options.model_dump(exclude_none=True),
  )
  result = asyncio.run(loader(context, content))

  if not result.keys:
    log_warning(f"No CSS Modules exports found for [path]{resource_path}[/path]; nothing written.")
    return 0

  if context.errors:
    return 1

  log_info(f"{len(result.keys)} class names typed as [code]{result.interface_name}[/code]")
  return 0
