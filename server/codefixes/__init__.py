"""
ng-codefix code fixes.

Each module in this package defines one code fix implementing the
`CodeActionMeta` protocol from `ngfix.types`, and exposes a ready-made
instance. `ALL_CODE_FIXES` lists every instance for `ngfix.registry.CodeFixes`.
"""

from .fix_unused_standalone_imports import fix_unused_standalone_imports_meta

ALL_CODE_FIXES = [
    fix_unused_standalone_imports_meta,
]

__all__ = ["ALL_CODE_FIXES", "fix_unused_standalone_imports_meta"]
