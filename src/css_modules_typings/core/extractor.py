"""
Exported Locals Extraction.

Reads the class names a CSS Modules stylesheet exports out of the JavaScript
module css-loader compiles it to. Only the narrow assignment css-loader emits
is recognized::

    ___CSS_LOADER_EXPORT___.locals = {
      "root": "button-module__root--x1",
      "active": "button-module__active--y2"
    };

The scan starts at the first occurrence of the marker. Anything before it,
including the embedded source map, never contributes keys.
"""

from typing import List, Optional

LOCALS_MARKER = "___CSS_LOADER_EXPORT___.locals"

# css-loader < 4 assigned the locals on the CommonJS exports object.
LEGACY_LOCALS_MARKER = "exports.locals"

_OPENERS = {"(": ")", "[": "]", "{": "}"}
_QUOTES = "\"'`"
_KEY_CHARS = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_$.")
_SIMPLE_ESCAPES = {
  "n": "\n",
  "r": "\r",
  "t": "\t",
  "b": "\b",
  "f": "\f",
  "v": "\v",
  "0": "\0",
}


def find_locals_marker(content: str) -> int:
  """
  Locates the exported locals assignment.

  Args:
      content (str): The compiled module source.

  Returns:
      int: Offset of the first marker occurrence, or -1 when absent.
  """
  index = content.find(LOCALS_MARKER)
  if index == -1:
    index = content.find(LEGACY_LOCALS_MARKER)
  return index


def get_css_module_keys(content: str) -> List[str]:
  """
  Extracts the exported class names, in source order and without duplicates.

  Args:
      content (str): The compiled module source.

  Returns:
      List[str]: The top-level keys of the locals object. Empty when the marker
      is missing or the object has no keys.
  """
  index = find_locals_marker(content)
  if index == -1:
    return []

  marker = LOCALS_MARKER if content.startswith(LOCALS_MARKER, index) else LEGACY_LOCALS_MARKER
  return _LocalsScanner(content, index + len(marker)).scan()


class _LocalsScanner:
  """
  Single-pass scanner over ``= { key: value, ... }``.

  Values are skipped by bracket depth, with strings and comments honoured so
  that braces inside them do not count. Scanning stops at the first token it
  does not understand and keeps whatever keys were read up to that point.
  """

  def __init__(self, text: str, pos: int):
    self.text = text
    self.pos = pos
    self.keys: List[str] = []

  def scan(self) -> List[str]:
    self._skip_trivia()
    if not self._consume("=") or self._peek() == "=":
      return []
    self._skip_trivia()
    if not self._consume("{"):
      return []

    while True:
      self._skip_trivia()
      char = self._peek()
      if char is None or char == "}":
        break

      if char == "." and self.text.startswith("...", self.pos):
        # Spread of another object; its keys are not statically known.
        self.pos += 3
        key = None
      else:
        key = self._read_key()
        if key is None and char != "[":
          break

      self._skip_trivia()
      if self._peek() == ":":
        self.pos += 1
      self._skip_value()
      self._add(key)

      self._skip_trivia()
      if not self._consume(","):
        break

    return self.keys

  def _add(self, key: Optional[str]) -> None:
    if key is not None and key not in self.keys:
      self.keys.append(key)

  def _peek(self) -> Optional[str]:
    if self.pos < len(self.text):
      return self.text[self.pos]
    return None

  def _consume(self, expected: str) -> bool:
    if self._peek() == expected:
      self.pos += 1
      return True
    return False

  def _skip_trivia(self) -> None:
    text = self.text
    while self.pos < len(text):
      char = text[self.pos]
      if char.isspace():
        self.pos += 1
      elif text.startswith("//", self.pos):
        end = text.find("\n", self.pos)
        self.pos = len(text) if end == -1 else end + 1
      elif text.startswith("/*", self.pos):
        end = text.find("*/", self.pos + 2)
        self.pos = len(text) if end == -1 else end + 2
      else:
        return

  def _read_key(self) -> Optional[str]:
    char = self._peek()
    if char is None:
      return None
    if char in "\"'":
      return self._read_string()
    if char == "[":
      # Computed key, e.g. [name]: value
      self._skip_balanced()
      return None

    start = self.pos
    while self.pos < len(self.text) and self.text[self.pos] in _KEY_CHARS:
      self.pos += 1
    if self.pos == start:
      return None
    return self.text[start : self.pos]

  def _read_string(self) -> str:
    quote = self.text[self.pos]
    self.pos += 1
    out: List[str] = []
    text = self.text

    while self.pos < len(text):
      char = text[self.pos]
      if char == quote:
        self.pos += 1
        break
      if char == "\\" and self.pos + 1 < len(text):
        out.append(self._read_escape())
        continue
      out.append(char)
      self.pos += 1

    return "".join(out)

  def _read_escape(self) -> str:
    text = self.text
    code = text[self.pos + 1]
    self.pos += 2

    if code in _SIMPLE_ESCAPES:
      return _SIMPLE_ESCAPES[code]
    if code == "\n":
      return ""
    if code in "xu":
      width = 2 if code == "x" else 4
      if code == "u" and self._peek() == "{":
        end = text.find("}", self.pos)
        digits = text[self.pos + 1 : end] if end != -1 else ""
        consumed = len(digits) + 2
      else:
        digits = text[self.pos : self.pos + width]
        consumed = width
      try:
        value = chr(int(digits, 16))
      except (ValueError, OverflowError):
        return code
      self.pos += consumed
      return value
    return code

  def _skip_string(self) -> None:
    quote = self.text[self.pos]
    self.pos += 1
    text = self.text
    while self.pos < len(text):
      char = text[self.pos]
      if char == "\\":
        self.pos += 2
        continue
      self.pos += 1
      if char == quote:
        return

  def _skip_balanced(self) -> None:
    """Skips one bracketed group, starting on its opening bracket."""
    stack = [_OPENERS[self.text[self.pos]]]
    self.pos += 1
    while stack and self.pos < len(self.text):
      self._skip_trivia()
      char = self._peek()
      if char is None:
        return
      if char in _QUOTES:
        self._skip_string()
      elif char in _OPENERS:
        stack.append(_OPENERS[char])
        self.pos += 1
      else:
        if char == stack[-1]:
          stack.pop()
        self.pos += 1

  def _skip_value(self) -> None:
    """Advances to the ``,`` or ``}`` that ends the current member."""
    while True:
      self._skip_trivia()
      char = self._peek()
      if char is None or char in ",}":
        return
      if char in _QUOTES:
        self._skip_string()
      elif char in _OPENERS:
        self._skip_balanced()
      else:
        self.pos += 1
