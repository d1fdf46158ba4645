"""
Declaration Rendering.

Turns an ordered list of class names into the text of a ``.d.ts`` file::

    export interface ButtonModule {
      root: string;
      "is-active": string;
    }
    declare const styles: ButtonModule;
    export default styles;

Output always uses ``\\n``; line endings are settled by the formatting step.
"""

import json
import re
from typing import List, Sequence

INDENT = "  "
EXPORT_BINDING = "styles"

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def is_valid_identifier(name: str) -> bool:
  return bool(_IDENTIFIER.match(name))


def format_property_name(key: str) -> str:
  """
  Quotes a key unless it can be written as a bare property name.

  Args:
      key (str): The class name.

  Returns:
      str: The property name as it appears in the interface body.
  """
  if is_valid_identifier(key):
    return key
  return json.dumps(key, ensure_ascii=False)


def generate_generic_export_interface(css_module_keys: Sequence[str], interface_name: str) -> str:
  """
  Renders the declaration file for one stylesheet.

  Args:
      css_module_keys (Sequence[str]): Class names in extraction order. Never empty.
      interface_name (str): Name of the exported interface.

  Returns:
      str: The declaration text, terminated by a newline.
  """
  lines: List[str] = [f"export interface {interface_name} {{"]
  for key in css_module_keys:
    lines.append(f"{INDENT}{format_property_name(key)}: string;")
  lines.append("}")
  lines.append(f"declare const {EXPORT_BINDING}: {interface_name};")
  lines.append(f"export default {EXPORT_BINDING};")
  return "\n".join(lines) + "\n"
