"""
Typings Loader.

Entry point a build pipeline calls for every compiled CSS Modules stylesheet.
For each invocation it:

1.  Extracts the exported class names from the compiled module.
2.  Returns early when there are none (plain CSS, or no classes).
3.  Derives the interface name and the colocated ``.d.ts`` path.
4.  Renders and post-processes the declaration (banner, prettier or EOL).
5.  Writes it to disk.

The module source is always handed back unchanged. Formatting and write
failures become diagnostics on the result and are forwarded to the host via
``emit_error``; they never abort the build.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Coroutine, Dict, List, Optional

from css_modules_typings.config import LoaderOptions
from css_modules_typings.core.extractor import get_css_module_keys
from css_modules_typings.core.formatting import Formatter, FormatterError, apply_formatting
from css_modules_typings.core.naming import filename_to_interface_name, filename_to_typings_filename
from css_modules_typings.core.persist import persist
from css_modules_typings.core.renderer import generate_generic_export_interface
from css_modules_typings.core.result import LoaderResult
from css_modules_typings.utils.console import log_debug, log_error, log_success

Callback = Callable[..., None]


async def generate_typings(
  content: str,
  resource_path: str,
  options: LoaderOptions,
  formatter: Optional[Formatter] = None,
) -> LoaderResult:
  """
  Generates the declaration file for one compiled stylesheet.

  Args:
      content (str): The compiled module source.
      resource_path (str): Path of the stylesheet the source was compiled from.
      options (LoaderOptions): Validated loader options.
      formatter (Optional[Formatter]): Pretty-printer override, mainly for tests.

  Returns:
      LoaderResult: The unchanged content plus what was generated and any diagnostics.
  """
  result = LoaderResult(content=content)

  keys = get_css_module_keys(content)
  if not keys:
    log_debug(f"No CSS Modules exports in [path]{resource_path}[/path]; skipping typings.")
    return result

  result.keys = keys
  result.interface_name = filename_to_interface_name(resource_path)
  output_path = Path(filename_to_typings_filename(resource_path))
  definition = generate_generic_export_interface(keys, result.interface_name)

  try:
    output = await apply_formatting(definition, options, formatter)
    await persist(output_path, output)
  except (FormatterError, OSError, UnicodeError) as e:
    log_error(f"Failed to generate typings for [path]{resource_path}[/path]: {e}")
    result.errors.append(str(e))
    return result

  result.output_path = output_path
  log_success(f"Generated: [path]{output_path}[/path]")
  return result


@dataclass
class LoaderContext:
  """
  The slice of the host pipeline the loader talks to.

  ``async_`` hands out the completion callback and ``emit_error`` attaches a
  non-fatal diagnostic to the current module. The defaults record what the
  loader did, which is all the CLI and tests need.
  """

  resource_path: str
  options: Optional[Dict[str, Any]] = None
  callback: Optional[Callback] = None
  errors: List[str] = field(default_factory=list)
  is_cacheable: bool = False
  output: Optional[tuple] = None

  def get_options(self) -> Dict[str, Any]:
    return self.options or {}

  def cacheable(self, flag: bool = True) -> None:
    self.is_cacheable = flag

  def async_(self) -> Callback:
    return self.callback or self._record

  def emit_error(self, error: str) -> None:
    self.errors.append(error)

  def _record(self, error: Optional[Exception], *output: Any) -> None:
    self.output = (error, *output)


def loader(
  context: LoaderContext,
  content: str,
  *args: Any,
  formatter: Optional[Formatter] = None,
) -> Coroutine[Any, Any, LoaderResult]:
  """
  Host-facing loader function.

  Options are validated before anything asynchronous starts, so a bad
  configuration fails immediately. The returned coroutine completes the
  invocation by calling the host callback with the original content (and any
  extra arguments such as a source map).

  Args:
      context (LoaderContext): The host pipeline context.
      content (str): The compiled module source.
      *args: Extra values passed through to the callback untouched.
      formatter (Optional[Formatter]): Pretty-printer override.

  Returns:
      Coroutine: Awaitable resolving to the LoaderResult.

  Raises:
      ValueError: If the options do not match the schema.
  """
  options = LoaderOptions.from_raw(context.get_options())
  context.cacheable()
  callback = context.async_()

  async def run() -> LoaderResult:
    try:
      result = await generate_typings(content, context.resource_path, options, formatter)
      for error in result.errors:
        context.emit_error(error)
    finally:
      callback(None, content, *args)
    return result

  return run()
