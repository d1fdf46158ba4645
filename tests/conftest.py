"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- Isolation of the process-wide prettier probe.
- Shared compiled css-loader fixtures.
"""

import sys
from pathlib import Path

import pytest

# Add src to path so we can import 'css_modules_typings' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from css_modules_typings.core.formatting import prettier_available  # noqa: E402

# Shape emitted by css-loader >= 4 with sourceMap enabled. The source map
# embeds the original CSS, whose text must never be read as keys.
COMPILED_WITH_SOURCEMAP = """// Imports
import ___CSS_LOADER_API_IMPORT___ from "../node_modules/css-loader/dist/runtime/api.js";
var ___CSS_LOADER_EXPORT___ = ___CSS_LOADER_API_IMPORT___(true);
// Module
___CSS_LOADER_EXPORT___.push([module.id, ".root { color: red; }\\n.active { color: blue; }", "",{"version":3,"sources":["button.module.css"],"names":[],"mappings":"AAAA","sourcesContent":["\\"ghost\\": \\"x\\""]}]);
// Exports
___CSS_LOADER_EXPORT___.locals = {
\t"root": "button-module__root--x1",
\t"active": "button-module__active--y2"
};
export default ___CSS_LOADER_EXPORT___;
"""


class FakeFormatter:
  """Stands in for prettier; records its input and returns a fixed transform."""

  def __init__(self, output=None, error=None):
    self.calls = []
    self.output = output
    self.error = error

  async def format(self, text):
    self.calls.append(text)
    if self.error is not None:
      raise self.error
    return self.output if self.output is not None else text


@pytest.fixture(autouse=True)
def reset_prettier_probe():
  """Ensures the memoized prettier probe does not leak between tests."""
  prettier_available.cache_clear()
  yield
  prettier_available.cache_clear()


@pytest.fixture
def compiled_module():
  return COMPILED_WITH_SOURCEMAP


@pytest.fixture
def fake_formatter():
  return FakeFormatter()


@pytest.fixture
def make_formatter():
  """Factory for formatters with a fixed output or a raised error."""
  return FakeFormatter
