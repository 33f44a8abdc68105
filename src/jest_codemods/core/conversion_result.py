"""
Data structures representing the output of the codemod.

This module defines the `ConversionResult` Pydantic model, which carries the
printed code of one file together with its warnings and errors.
"""

from typing import List

from pydantic import BaseModel, Field


class ConversionResult(BaseModel):
  """
  Container for the results of transforming a single file.
  """

  code: str = Field(default="", description="The resulting source code.")
  warnings: List[str] = Field(default_factory=list, description="Formatted jest-codemods warnings, in source order.")
  errors: List[str] = Field(default_factory=list, description="Fatal problems (e.g. unparsable input).")
  changed: bool = Field(default=False, description="True if the output differs from the input.")
  success: bool = Field(
    default=True,
    description="False if the file could not be processed at all.",
  )

  @property
  def has_errors(self) -> bool:
    """
    Returns:
        True if one or more errors are present.
    """
    return len(self.errors) > 0
