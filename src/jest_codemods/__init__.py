"""
jest-codemods Package.

A scope-aware codemod that migrates test files written against AVA to Jest
(`test` / `expect`), leaving every construct it does not understand untouched
and describing it in a warning instead.

This package exposes the conversion engine and configuration utilities for
programmatic usage.

Usage
-----

Simple String Conversion
^^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    import jest_codemods
    code = "import test from 'ava'\\ntest(t => { t.is(a, 1) })\\n"
    print(jest_codemods.convert(code))
    # test(() => { expect(a).toBe(1) })

Advanced Usage (Engine)
^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    from jest_codemods import CodemodEngine, RuntimeConfig

    engine = CodemodEngine(config=RuntimeConfig(skip_import_detection=True))
    res = engine.run(source, filename="login.test.js")

    if res.success:
        print(res.code)
        print("\\n".join(res.warnings))
    else:
        print(f"Errors: {res.errors}")
"""

from typing import Optional

from jest_codemods.config import RuntimeConfig
from jest_codemods.core.conversion_result import ConversionResult
from jest_codemods.core.engine import CodemodEngine

__version__ = "0.1.0"


def convert(
  code: str,
  filename: str = "test.js",
  skip_import_detection: bool = False,
  framework_name: Optional[str] = None,
) -> str:
  """
  Migrates a string of AVA test code to Jest.

  This is a high-level convenience wrapper around the `CodemodEngine`. Warnings
  are written to the log; use the engine directly to collect them.

  Args:
      code (str): The source code to convert.
      filename (str): Name used in warnings.
      skip_import_detection (bool): Transform even without an `ava` import.
      framework_name (str, optional): Global treated as the registration
          function when detection is skipped (default ``test``).

  Returns:
      str: The converted source code (identical to `code` if nothing applied).

  Raises:
      ValueError: If the code cannot be parsed.
  """
  config = RuntimeConfig(skip_import_detection=skip_import_detection, framework_name=framework_name)
  result = CodemodEngine(config=config).run(code, filename=filename)

  if not result.success:
    error_msg = "\n".join(result.errors)
    raise ValueError(f"Conversion failed:\n{error_msg}")

  return result.code


__all__ = [
  "CodemodEngine",
  "ConversionResult",
  "RuntimeConfig",
  "convert",
  "__version__",
]
