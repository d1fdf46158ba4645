"""
Data structures describing the outcome of one loader invocation.

The passed-through module source and the diagnostics of the typings side
artifact are reported together; a failed generation never replaces the content.
"""

from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field


class LoaderResult(BaseModel):
  """
  Container for the results of a typings generation.
  """

  content: str = Field(description="The module source, exactly as received.")
  keys: List[str] = Field(default_factory=list, description="Exported class names, in source order.")
  interface_name: Optional[str] = Field(None, description="Name of the generated interface.")
  output_path: Optional[Path] = Field(None, description="Declaration file that was written.")
  errors: List[str] = Field(default_factory=list, description="Diagnostics reported to the host.")

  @property
  def generated(self) -> bool:
    """
    Check if a declaration file was written.

    Returns:
        True if the declaration was persisted without error.
    """
    return self.output_path is not None and not self.errors

  @property
  def has_errors(self) -> bool:
    return len(self.errors) > 0
