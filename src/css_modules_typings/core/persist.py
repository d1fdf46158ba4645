"""
Declaration File Writer.
"""

import asyncio
from pathlib import Path
from typing import Union

PathLike = Union[str, Path]


def write_declaration(path: PathLike, text: str) -> None:
  """
  Replaces the file at ``path`` with ``text``, creating it if needed.

  The text is encoded before the file is opened, so an unencodable string
  leaves any existing file untouched. Line endings are written as given.

  Args:
      path (PathLike): Destination file.
      text (str): Full file contents.

  Raises:
      UnicodeEncodeError: If the text is not valid UTF-8 (e.g. lone surrogates).
      OSError: If the file cannot be written.
  """
  data = text.encode("utf-8")
  with open(path, "wb") as f:
    f.write(data)


async def persist(path: PathLike, text: str) -> None:
  await asyncio.to_thread(write_declaration, path, text)
