"""
Tests for the code-fix registry.
"""

import pytest

from codefixes import ALL_CODE_FIXES, fix_unused_standalone_imports_meta
from ngfix.config import CodeFixConfig
from ngfix.registry import CodeFixes
from ngfix.types import (
    CodeFixAction, CombinedCodeActions, Diagnostic, ErrorCode, FileTextChanges,
    FixIdForCodeFixesAll, FormatOptions, ng_error_code,
)

UNUSED_IMPORTS = ng_error_code(ErrorCode.UNUSED_STANDALONE_IMPORTS)
FIX_ID = FixIdForCodeFixesAll.FIX_UNUSED_STANDALONE_IMPORTS


class RecordingFix:
    """Code fix that records the contexts it receives."""

    def __init__(self, error_codes, fix_ids):
        self.error_codes = error_codes
        self.fix_ids = fix_ids
        self.contexts = []

    def get_code_actions(self, context):
        self.contexts.append(context)
        return [CodeFixAction(fix_name="record", description="Record", changes=[])]

    def get_all_code_actions(self, context):
        self.contexts.append(context)
        return CombinedCodeActions(changes=[FileTextChanges(file_name="x.ts", text_changes=[])])


class TestCodeFixes:

    def test_error_code(self):
        assert ng_error_code(ErrorCode.UNUSED_STANDALONE_IMPORTS) == -998113

    def test_registers_default_fixes(self):
        code_fixes = CodeFixes(ALL_CODE_FIXES)

        assert code_fixes.has_fix_for_code(UNUSED_IMPORTS)
        assert not code_fixes.has_fix_for_code(1234)
        assert code_fixes.get_fix_ids() == [FIX_ID]
        assert code_fixes.get_meta(FIX_ID) is fix_unused_standalone_imports_meta

    def test_duplicate_fix_id_rejected(self):
        with pytest.raises(ValueError, match="Duplicate fix id"):
            CodeFixes([RecordingFix([1], ["same"]), RecordingFix([2], ["same"])])

    def test_disabled_fix_is_not_registered(self):
        config = CodeFixConfig(enabled_fixes=["somethingElse*"])

        code_fixes = CodeFixes(ALL_CODE_FIXES, config)

        assert code_fixes.get_fix_ids() == []
        assert code_fixes.get_all_code_actions(FIX_ID, []).changes == []

    def test_fix_all_filters_diagnostics_by_error_code(self):
        fix = RecordingFix([100], ["recording"])
        code_fixes = CodeFixes([fix])
        matching = Diagnostic(code=100, file=None, start=0, length=1)
        other = Diagnostic(code=200, file=None, start=0, length=1)

        result = code_fixes.get_all_code_actions("recording", [other, matching], FormatOptions(indent_size=2))

        assert [change.file_name for change in result.changes] == ["x.ts"]
        context = fix.contexts[0]
        assert list(context.diagnostics) == [matching]
        assert context.fix_id == "recording"
        assert context.format_options.indent_size == 2

    def test_unknown_fix_id_returns_empty_changes(self):
        code_fixes = CodeFixes([RecordingFix([100], ["recording"])])

        assert code_fixes.get_all_code_actions("nope", []) == CombinedCodeActions(changes=[])

    def test_fixes_at_position_dispatch_by_error_code(self):
        fix = RecordingFix([100], ["recording"])
        code_fixes = CodeFixes([fix, *ALL_CODE_FIXES])

        actions = code_fixes.get_code_fixes_at_position("a.ts", 3, 9, [100, UNUSED_IMPORTS, 999])

        # The unused-imports fix offers no single-diagnostic action
        assert [action.fix_name for action in actions] == ["record"]
        context = fix.contexts[0]
        assert (context.file_name, context.start, context.end, context.error_code) == ("a.ts", 3, 9, 100)
