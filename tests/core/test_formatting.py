"""
Tests for declaration post-processing.

Verifies that:
1.  The banner is prefixed before anything else.
2.  Prettier is used when requested, or when unset and installed.
3.  Otherwise line endings are normalized to the configured eol or the OS default.
4.  Pretty-printer failures propagate.
"""

import asyncio
import os
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from css_modules_typings.config import LoaderOptions
from css_modules_typings.core import formatting
from css_modules_typings.core.formatting import (
  FormatterError,
  PrettierFormatter,
  apply_formatting,
  find_prettier,
  normalize_eol,
  prettier_available,
  should_use_prettier,
)

TEXT = "export interface A {\n  a: string;\n}\n"


def run(coro):
  return asyncio.run(coro)


def test_normalize_eol_explicit():
  assert normalize_eol("a\nb\r\nc\n", "\r\n") == "a\r\nb\r\nc\r\n"


def test_normalize_eol_defaults_to_os():
  assert normalize_eol("a\r\nb\n") == f"a{os.linesep}b{os.linesep}"


def test_banner_then_eol():
  options = LoaderOptions(banner="// autogenerated", formatter="none", eol="\r\n")
  out = run(apply_formatting(TEXT, options))
  assert out.startswith("// autogenerated\r\n")
  assert out.replace("\r\n", "").count("\n") == 0
  assert out.count("\r\n") == 4


def test_banner_lines_are_normalized_too():
  options = LoaderOptions(banner="/* a\n b */", formatter="none", eol="\r\n")
  out = run(apply_formatting(TEXT, options))
  assert out.startswith("/* a\r\n b */\r\n")


def test_none_formatter_ignores_available_prettier(fake_formatter):
  with patch.object(formatting, "prettier_available", return_value=True):
    out = run(apply_formatting(TEXT, LoaderOptions(formatter="none", eol="\n"), fake_formatter))
  assert out == TEXT
  assert fake_formatter.calls == []


def test_explicit_prettier_uses_formatter(make_formatter):
  formatter = make_formatter(output="formatted")
  options = LoaderOptions(formatter="prettier", banner="// b", eol="\r\n")
  out = run(apply_formatting(TEXT, options, formatter))
  assert out == "formatted"
  # Banner is applied before prettier, and no manual EOL pass follows it.
  assert formatter.calls == ["// b\n" + TEXT]


def test_auto_uses_prettier_when_available(make_formatter):
  formatter = make_formatter(output="pretty")
  with patch.object(formatting, "prettier_available", return_value=True):
    assert run(apply_formatting(TEXT, LoaderOptions(), formatter)) == "pretty"


def test_auto_falls_back_to_eol_when_unavailable(fake_formatter):
  with patch.object(formatting, "prettier_available", return_value=False):
    out = run(apply_formatting(TEXT, LoaderOptions(eol="\r\n"), fake_formatter))
  assert out == TEXT.replace("\n", "\r\n")
  assert fake_formatter.calls == []


def test_formatter_error_propagates(make_formatter):
  formatter = make_formatter(error=FormatterError("boom"))
  with pytest.raises(FormatterError, match="boom"):
    run(apply_formatting(TEXT, LoaderOptions(formatter="prettier"), formatter))


def test_should_use_prettier():
  assert should_use_prettier(LoaderOptions(formatter="prettier"))
  assert not should_use_prettier(LoaderOptions(formatter="none"))


def test_probe_is_memoized():
  with patch.object(formatting, "find_prettier", return_value="/usr/bin/prettier") as mock_find:
    assert prettier_available() is True
    assert prettier_available() is True
  mock_find.assert_called_once()


def test_find_prettier_prefers_local_bin(tmp_path):
  local_bin = str(tmp_path / "node_modules" / ".bin")

  def fake_which(name, path=None):
    return os.path.join(path, name) if path == local_bin else "/usr/bin/prettier"

  with patch.object(formatting.shutil, "which", side_effect=fake_which):
    assert find_prettier(tmp_path) == os.path.join(local_bin, "prettier")


def test_find_prettier_falls_back_to_path(tmp_path):
  def fake_which(name, path=None):
    return None if path else "/usr/bin/prettier"

  with patch.object(formatting.shutil, "which", side_effect=fake_which):
    assert find_prettier(tmp_path) == "/usr/bin/prettier"


def test_find_prettier_missing(tmp_path):
  with patch.object(formatting.shutil, "which", return_value=None):
    assert find_prettier(tmp_path) is None


def test_prettier_command_line(tmp_path):
  formatter = PrettierFormatter(cwd=tmp_path)
  cmd = formatter.command("prettier")
  assert cmd[:3] == ["prettier", "--parser", "typescript"]
  assert cmd[-1] == str(tmp_path / "index.d.ts")


def _fake_process(returncode=0, stdout=b"", stderr=b""):
  proc = MagicMock()
  proc.returncode = returncode
  proc.communicate = AsyncMock(return_value=(stdout, stderr))
  proc.wait = AsyncMock(return_value=returncode)
  return proc


def test_prettier_formatter_success(tmp_path):
  proc = _fake_process(stdout=b"pretty\n")
  with patch.object(formatting.asyncio, "create_subprocess_exec", AsyncMock(return_value=proc)) as mock_exec:
    out = run(PrettierFormatter(cwd=tmp_path, executable="prettier").format(TEXT))

  assert out == "pretty\n"
  proc.communicate.assert_awaited_once_with(TEXT.encode("utf-8"))
  assert mock_exec.call_args.kwargs["cwd"] == str(tmp_path)


def test_prettier_formatter_failure(tmp_path):
  proc = _fake_process(returncode=2, stderr=b"SyntaxError: ';' expected")
  with patch.object(formatting.asyncio, "create_subprocess_exec", AsyncMock(return_value=proc)):
    with pytest.raises(FormatterError, match="SyntaxError"):
      run(PrettierFormatter(cwd=tmp_path, executable="prettier").format(TEXT))


def test_prettier_formatter_timeout_kills_process(tmp_path):
  proc = _fake_process()

  async def never_finishes(_input):
    await asyncio.sleep(10)

  proc.communicate = never_finishes
  with patch.object(formatting.asyncio, "create_subprocess_exec", AsyncMock(return_value=proc)):
    with pytest.raises(FormatterError, match="did not finish"):
      run(PrettierFormatter(cwd=tmp_path, timeout=0.01, executable="prettier").format(TEXT))
  proc.kill.assert_called_once()


def test_prettier_formatter_requires_executable(tmp_path):
  with patch.object(formatting, "find_prettier", return_value=None):
    with pytest.raises(FormatterError, match="no prettier executable"):
      run(PrettierFormatter(cwd=Path(tmp_path)).format(TEXT))
