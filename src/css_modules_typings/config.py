"""
Loader Options Store.

Defines the option schema accepted by the typings loader and the helpers used
to resolve it from ``pyproject.toml`` and command line flags.
"""

import tomllib
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError

LOADER_NAME = "css-modules-typings"
TOML_SECTION = "css_modules_typings"

_EOL_ALIASES = {
  "lf": "\n",
  "crlf": "\r\n",
  "cr": "\r",
}


class LoaderOptions(BaseModel):
  """
  Options for a single loader invocation.

  Unknown keys are rejected, mirroring the strict schema the host applies
  before handing options to the loader.
  """

  model_config = ConfigDict(extra="forbid", frozen=True)

  eol: Optional[str] = Field(
    None,
    description="Newline sequence for generated d.ts files. Uses the OS default. Ignored when prettier formats the output.",
  )
  banner: Optional[str] = Field(None, description="Text prefixed to each generated d.ts file.")
  formatter: Optional[Literal["prettier", "none"]] = Field(
    None,
    description="'prettier' (requires the prettier executable) or 'none'. Defaults to prettier when it can be found.",
  )

  @classmethod
  def from_raw(cls, raw: Optional[Dict[str, Any]]) -> "LoaderOptions":
    """
    Validates a raw option mapping.

    Args:
        raw (Optional[Dict]): Options as supplied by the host. None means no options.

    Returns:
        LoaderOptions: The validated options.

    Raises:
        ValueError: If a key is unknown or a value has the wrong shape.
    """
    try:
      return cls.model_validate(raw or {})
    except ValidationError as e:
      raise ValueError(f"Invalid options object. {LOADER_NAME} has been initialized using an options object that does not match the API schema (options): {e}")

  @classmethod
  def load(
    cls,
    search_path: Optional[Path] = None,
    eol: Optional[str] = None,
    banner: Optional[str] = None,
    formatter: Optional[str] = None,
    extra: Optional[Dict[str, Any]] = None,
  ) -> "LoaderOptions":
    """
    Loads options from pyproject.toml and overrides them with explicit values.

    Args:
        search_path (Optional[Path]): Directory to start searching for TOML config.
        eol (Optional[str]): Override for the newline sequence (aliases allowed).
        banner (Optional[str]): Override for the banner.
        formatter (Optional[str]): Override for the formatter choice.
        extra (Optional[Dict]): Further raw options, e.g. from ``--config key=value``.

    Returns:
        LoaderOptions: The fully resolved options.
    """
    toml_config, _ = _load_toml_settings(search_path or Path.cwd())

    merged: Dict[str, Any] = dict(toml_config)
    merged.update(extra or {})
    overrides = {"eol": eol, "banner": banner, "formatter": formatter}
    merged.update({k: v for k, v in overrides.items() if v is not None})

    if isinstance(merged.get("eol"), str):
      merged["eol"] = resolve_eol(merged["eol"])

    return cls.from_raw(merged)


def resolve_eol(value: str) -> str:
  """
  Maps the ``lf``/``crlf``/``cr`` aliases to literal line endings.

  Args:
      value (str): An alias or a literal newline sequence.

  Returns:
      str: The literal sequence. Unknown values are returned unchanged.
  """
  return _EOL_ALIASES.get(value.lower(), value)


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Searches parents for 'pyproject.toml' and extracts the loader section.

  Args:
      start_path (Path): Directory to start search from.

  Returns:
      Tuple[Dict, Optional[Path]]: The config dict and the directory it was found in.
  """
  current = start_path.resolve()

  for parent in [current, *current.parents]:
    toml_path = parent / "pyproject.toml"
    if toml_path.is_file():
      try:
        with open(toml_path, "rb") as f:
          data = tomllib.load(f)
      except (OSError, tomllib.TOMLDecodeError):
        return {}, None

      tool_section = data.get("tool", {})
      return tool_section.get(TOML_SECTION, {}), parent

  return {}, None


def parse_cli_key_values(items: Optional[List[str]]) -> Dict[str, Any]:
  """
  Parses a list of 'key=value' strings into a dictionary.

  Values stay strings; every loader option is textual.

  Args:
      items (Optional[List[str]]): Raw CLI strings directly from argparse.

  Returns:
      Dict[str, Any]: Parsed dictionary.

  Raises:
      ValueError: If an item has no '='.
  """
  if not items:
    return {}

  config: Dict[str, Any] = {}
  for item in items:
    if "=" not in item:
      raise ValueError(f"Invalid config format: '{item}'. Expected 'key=value'.")

    key, val_str = item.split("=", 1)
    config[key.strip()] = val_str

  return config
