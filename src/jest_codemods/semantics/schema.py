"""
Pydantic Schemas for the Rule Table.

This module defines the structure of the JSON mapping files shipped in
`jest_codemods/semantics/` (currently `ava.json`): which package is being
migrated away from, what the target framework calls its registration and hook
functions, and how every legacy assertion method is rendered.

All models are frozen; a loaded table is shared read-only by every conversion.
"""

from typing import Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

from jest_codemods.enums import ArgTransform, ArityKind


class RuleEntry(BaseModel):
  """
  Mapping of one legacy context method (e.g. ``t.is``) to its target shape.
  """

  model_config = ConfigDict(frozen=True)

  matcher: Optional[str] = Field(None, description="Matcher called on expect(...), e.g. 'toBe'.")
  alt_matcher: Optional[str] = Field(
    None, description="Matcher used instead when the optional expected argument is present (throws)."
  )
  arity: ArityKind = Field(ArityKind.NONE, description="How `args` is enforced.")
  args: int = Field(0, ge=0, description="Number of arguments the legacy method requires.")
  negate: bool = Field(False, description="Insert `.not` before the matcher.")
  expected: Optional[str] = Field(None, description="Literal passed to the matcher, e.g. 'true' for t.true(a).")
  transform: ArgTransform = Field(ArgTransform.MATCHER, description="Rendering strategy.")
  target: Optional[str] = Field(
    None, description="Callee template for 'call' and 'completion' transforms ({expect} and {token} placeholders)."
  )

  @model_validator(mode="after")
  def _check_shape(self) -> "RuleEntry":
    if self.transform in (ArgTransform.MATCHER, ArgTransform.THROWS, ArgTransform.SNAPSHOT) and not self.matcher:
      raise ValueError(f"'{self.transform.value}' rules need a matcher")
    if self.transform in (ArgTransform.CALL, ArgTransform.COMPLETION) and not self.target:
      raise ValueError(f"'{self.transform.value}' rules need a target")
    return self

  @property
  def required_args(self) -> int:
    return 0 if self.arity == ArityKind.NONE else self.args


class FrameworkInfo(BaseModel):
  """
  Identity of the legacy framework.
  """

  model_config = ConfigDict(frozen=True)

  package: str = Field(description="npm package name that gates the migration, e.g. 'ava'.")
  display_name: str = Field(description="Name used in diagnostics, e.g. 'AVA'.")
  default_binding: str = Field("test", description="Conventional local name of the default export.")
  root_exports: Tuple[str, ...] = Field(
    ("default",), description="Exported names that refer to the registration function itself."
  )


class TargetInfo(BaseModel):
  """
  Names used by the target framework.
  """

  model_config = ConfigDict(frozen=True)

  test: str = "test"
  expect: str = "expect"
  completion_token: str = "done"
  hooks: Dict[str, str] = Field(default_factory=dict, description="Legacy hook name -> target hook function.")


class RuleTable(BaseModel):
  """
  The complete, immutable mapping for one legacy framework.
  """

  model_config = ConfigDict(frozen=True)

  framework: FrameworkInfo
  target: TargetInfo = Field(default_factory=TargetInfo)
  incompatible_packages: Tuple[str, ...] = ()
  assertions: Dict[str, RuleEntry] = Field(default_factory=dict)

  def lookup(self, method: str) -> Optional[RuleEntry]:
    """
    Finds the rule for a context method.

    Args:
        method: Legacy member name (e.g. 'deepEqual').

    Returns:
        The RuleEntry, or None if the method is not mapped.
    """
    return self.assertions.get(method)

  def hook_target(self, hook: str) -> Optional[str]:
    return self.target.hooks.get(hook)
