"""
Output Name Derivation.

Pure functions mapping a stylesheet path to the interface name and the path of
the declaration file generated for it.
"""

import os
import re

TYPINGS_SUFFIX = ".d.ts"
FALLBACK_INTERFACE_NAME = "Styles"

# Prefix used when the PascalCase name would start with a digit.
DIGIT_PREFIX = "I"

_SEPARATORS = re.compile(r"[^A-Za-z0-9]+")


def filename_to_typings_filename(filename: str) -> str:
  """
  Returns the declaration path colocated with ``filename``.

  ``src/button.module.css`` becomes ``src/button.module.css.d.ts``.

  Args:
      filename (str): Path of the stylesheet.

  Returns:
      str: Path of the declaration file.
  """
  dir_name, base_name = os.path.split(filename)
  return os.path.join(dir_name, f"{base_name}{TYPINGS_SUFFIX}")


def filename_to_interface_name(filename: str) -> str:
  """
  Derives a PascalCase type identifier from the file name.

  The directory and the final extension are dropped, the remaining name is
  split on non-alphanumeric characters and every segment is capitalized:
  ``button.module.css`` gives ``ButtonModule``.

  Args:
      filename (str): Path of the stylesheet.

  Returns:
      str: A valid TypeScript identifier.
  """
  stem, _ = os.path.splitext(os.path.basename(filename))
  name = to_pascal_case(stem)
  if not name:
    return FALLBACK_INTERFACE_NAME
  if name[0].isdigit():
    return f"{DIGIT_PREFIX}{name}"
  return name


def to_pascal_case(value: str) -> str:
  return "".join(part[0].upper() + part[1:] for part in _SEPARATORS.split(value) if part)
