"""
Enumerations for jest-codemods.

This module defines the closed vocabularies shared across the codebase:
import styles recognised by the usage detector, the shape of rule-table
entries, and the modifier tags produced when walking a registration chain.
"""

from enum import Enum


class ImportStyle(str, Enum):
  """
  How a module-level binding was introduced.
  """

  DEFAULT = "default"  # import test from 'ava'
  NAMED = "named"  # import { test } from 'ava'
  NAMESPACE = "namespace"  # import * as ava from 'ava'
  REQUIRE = "require"  # const test = require('ava')


class ArityKind(str, Enum):
  """
  Argument count requirement of a rule-table entry.
  """

  EXACT = "exact"
  MIN = "min"
  NONE = "none"


class ArgTransform(str, Enum):
  """
  Strategy used to render the target call for a legacy assertion.
  """

  MATCHER = "matcher"  # expect(a)[.not].matcher(b...)
  THROWS = "throws"  # toThrow() vs toThrowError(b)
  SNAPSHOT = "snapshot"  # toMatchSnapshot([msg])
  CALL = "call"  # plain call to `target` with the original arguments
  REMOVE = "remove"  # statement deleted
  COMPLETION = "completion"  # member collapses onto the completion token


class ModifierKind(str, Enum):
  """
  Tags for the members of a registration chain (e.g. ``test.serial.skip``).

  The value of each member is the legacy property name it is parsed from.
  """

  SERIAL = "serial"
  SKIP = "skip"
  ONLY = "only"
  TODO = "todo"
  CALLBACK = "cb"
  BEFORE = "before"
  AFTER = "after"
  BEFORE_EACH = "beforeEach"
  AFTER_EACH = "afterEach"
  ALWAYS = "always"
  UNKNOWN = "unknown"


class ReferenceKind(str, Enum):
  """
  Classification of a single reference to a test context parameter.
  """

  ASSERTION = "assertion"  # t.is(...) / is(...) with a mapped method
  COMPLETION = "completion"  # t.end, t.fail
  REMOVE = "remove"  # t.pass(...) as a statement
  UNMAPPED = "unmapped"  # t.unknownAssert(...)
  UNSUPPORTED = "unsupported"  # mapped method in a shape that cannot be rewritten
  OTHER = "other"  # bare use, t.context, t.title, ...
