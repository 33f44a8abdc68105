"""
Static Analysis Package.

This package contains the passes that inspect a JavaScript tree before any
edit is recorded.

Modules:
    - ``imports``: Detecting the legacy framework import and companion packages.
    - ``scopes``: Scope arena and reference resolution.
    - ``modifiers``: Normalizing registration modifier chains.
    - ``registrations``: Finding registrations and classifying context parameter uses.
"""
