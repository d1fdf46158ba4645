"""
Declaration Post-Processing.

Applies, in order:

1.  **Banner**: ``options.banner`` plus a newline is prefixed to the text.
2.  **Prettier**: when ``options.formatter == "prettier"``, or when no formatter
    is configured and a prettier executable can be found, the text is piped
    through prettier with the TypeScript parser. Prettier resolves its own
    configuration (including ``.editorconfig``) from the working directory.
3.  **EOL normalization**: otherwise every line ending becomes ``options.eol``,
    or ``os.linesep`` when no eol is configured.

Prettier and EOL normalization are mutually exclusive.
"""

import asyncio
import os
import re
import shutil
from functools import lru_cache
from pathlib import Path
from typing import Optional, Protocol, Sequence

from css_modules_typings.config import LoaderOptions

PRETTIER_EXECUTABLE = "prettier"
PRETTIER_PARSER = "typescript"
PRETTIER_TIMEOUT = 30.0

_LINE_ENDING = re.compile(r"\r?\n")


class FormatterError(RuntimeError):
  """Raised when the pretty-printer cannot be run or rejects its input."""


class Formatter(Protocol):
  async def format(self, text: str) -> str: ...


def find_prettier(cwd: Optional[Path] = None) -> Optional[str]:
  """
  Locates a prettier executable.

  A project-local ``node_modules/.bin/prettier`` takes precedence over one on PATH.

  Args:
      cwd (Optional[Path]): Project directory. Defaults to the working directory.

  Returns:
      Optional[str]: Path to the executable, or None when prettier is not installed.
  """
  root = cwd or Path.cwd()
  local_bin = root / "node_modules" / ".bin"
  local = shutil.which(PRETTIER_EXECUTABLE, path=str(local_bin))
  if local:
    return local
  return shutil.which(PRETTIER_EXECUTABLE)


@lru_cache(maxsize=None)
def prettier_available() -> bool:
  """
  Reports whether prettier can be used.

  Computed once per process; availability does not change while a build runs.
  """
  return find_prettier() is not None


class PrettierFormatter:
  """
  Runs the prettier CLI as a subprocess, feeding the text on stdin.

  Attributes:
      cwd (Path): Directory prettier resolves its configuration from.
      timeout (float): Seconds before the subprocess is killed.
  """

  def __init__(self, cwd: Optional[Path] = None, timeout: float = PRETTIER_TIMEOUT, executable: Optional[str] = None):
    self.cwd = cwd or Path.cwd()
    self.timeout = timeout
    self.executable = executable

  def command(self, executable: str) -> Sequence[str]:
    # The stdin path only drives config lookup; nothing is read from it.
    return [
      executable,
      "--parser",
      PRETTIER_PARSER,
      "--stdin-filepath",
      str(self.cwd / "index.d.ts"),
    ]

  async def format(self, text: str) -> str:
    """
    Formats ``text`` with prettier.

    Args:
        text (str): TypeScript declaration source.

    Returns:
        str: The formatted source.

    Raises:
        FormatterError: If prettier is missing, exits non-zero or times out.
    """
    executable = self.executable or find_prettier(self.cwd)
    if executable is None:
      raise FormatterError("prettier was requested as formatter but no prettier executable could be found")

    proc = await asyncio.create_subprocess_exec(
      *self.command(executable),
      stdin=asyncio.subprocess.PIPE,
      stdout=asyncio.subprocess.PIPE,
      stderr=asyncio.subprocess.PIPE,
      cwd=str(self.cwd),
    )
    try:
      stdout, stderr = await asyncio.wait_for(proc.communicate(text.encode("utf-8")), timeout=self.timeout)
    except asyncio.TimeoutError:
      proc.kill()
      await proc.wait()
      raise FormatterError(f"prettier did not finish within {self.timeout:g}s")

    if proc.returncode != 0:
      message = stderr.decode("utf-8", errors="replace").strip()
      raise FormatterError(f"prettier exited with status {proc.returncode}: {message}")

    return stdout.decode("utf-8")


def normalize_eol(text: str, eol: Optional[str] = None) -> str:
  """
  Rewrites every ``\\n`` or ``\\r\\n`` line ending.

  Args:
      text (str): Input text.
      eol (Optional[str]): Replacement. Defaults to ``os.linesep``.

  Returns:
      str: The normalized text.
  """
  return _LINE_ENDING.sub(lambda _: eol or os.linesep, text)


def should_use_prettier(options: LoaderOptions) -> bool:
  if options.formatter == "prettier":
    return True
  return options.formatter is None and prettier_available()


async def apply_formatting(text: str, options: LoaderOptions, formatter: Optional[Formatter] = None) -> str:
  """
  Runs the post-processing steps over a rendered declaration.

  Args:
      text (str): The rendered declaration.
      options (LoaderOptions): Banner, eol and formatter settings.
      formatter (Optional[Formatter]): Pretty-printer to use instead of prettier.

  Returns:
      str: The text to persist.

  Raises:
      FormatterError: If the pretty-printer fails.
  """
  if options.banner:
    text = options.banner + "\n" + text

  if should_use_prettier(options):
    return await (formatter or PrettierFormatter()).format(text)

  return normalize_eol(text, options.eol)
