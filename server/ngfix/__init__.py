"""
ng-codefix engine package.

This package provides the tree-sitter based source layer, the array printer
and the code-fix registry used by the fixes in the `codefixes` package.
"""

from .types import (
    SourceFile, Diagnostic, DiagnosticRelatedInformation, TextSpan, TextChange,
    FileTextChanges, CombinedCodeActions, CodeFixAction, FormatOptions,
    CodeActionContext, CodeFixAllContext, CodeActionMeta, EmptyArray,
    FilterElements, ArrayEdit, ErrorCode, FixIdForCodeFixesAll, ng_error_code,
)

from .registry import CodeFixes

from .config import (
    CodeFixConfig, load_config, get_default_config, save_config, find_config_file
)

from .typescript_adapter import TypeScriptAdapter, default_typescript_adapter

__all__ = [
    # Types
    "SourceFile", "Diagnostic", "DiagnosticRelatedInformation", "TextSpan", "TextChange",
    "FileTextChanges", "CombinedCodeActions", "CodeFixAction", "FormatOptions",
    "CodeActionContext", "CodeFixAllContext", "CodeActionMeta", "EmptyArray",
    "FilterElements", "ArrayEdit", "ErrorCode", "FixIdForCodeFixesAll", "ng_error_code",

    # Registry
    "CodeFixes",

    # Config
    "CodeFixConfig", "load_config", "get_default_config", "save_config", "find_config_file",

    # Adapter
    "TypeScriptAdapter", "default_typescript_adapter",
]
