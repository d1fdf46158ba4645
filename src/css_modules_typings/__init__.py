"""
css-modules-typings Package.

Generates TypeScript declaration files for CSS Modules stylesheets from the
JavaScript module css-loader compiles them to, so that

.. code-block:: typescript

    import styles from "./button.module.css";
    styles.root; // checked against the exported class names

type-checks and autocompletes.

Usage
-----

.. code-block:: python

    import asyncio
    import css_modules_typings as cmt

    compiled = '___CSS_LOADER_EXPORT___.locals = {"root": "a1", "active": "b2"};'
    result = asyncio.run(cmt.generate(compiled, "src/button.module.css"))
    print(result.output_path)
    # src/button.module.css.d.ts

Build hosts call :func:`css_modules_typings.core.loader.loader` with a
:class:`LoaderContext` instead, which reports failures through the context.
"""

from typing import Any, Dict, Optional

from css_modules_typings.config import LoaderOptions
from css_modules_typings.core.loader import LoaderContext, generate_typings, loader
from css_modules_typings.core.result import LoaderResult

__version__ = "0.0.1"


async def generate(
  content: str,
  resource_path: str,
  options: Optional[Dict[str, Any]] = None,
) -> LoaderResult:
  """
  Writes the declaration file for one compiled stylesheet.

  Args:
      content (str): The compiled css-loader module.
      resource_path (str): Path of the stylesheet; the ``.d.ts`` is written next to it.
      options (dict, optional): Raw loader options (``eol``, ``banner``, ``formatter``).

  Returns:
      LoaderResult: Generation outcome. ``content`` is always the input unchanged.

  Raises:
      ValueError: If the options do not match the schema.
  """
  return await generate_typings(content, resource_path, LoaderOptions.from_raw(options))


__all__ = [
  "LoaderContext",
  "LoaderOptions",
  "LoaderResult",
  "generate",
  "loader",
  "__version__",
]
