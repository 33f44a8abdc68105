"""
Core Package.

Contains the conversion backend:
- Parser binding and span editor
- Codemod Engine
- Rewriters and Mixins
- Diagnostics and result models
"""
