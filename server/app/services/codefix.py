"""
Code-fix service for the HTTP layer.

Turns request payloads into engine snapshots (parsed source files and
diagnostics), runs the registry, and converts results back to response models.
Offsets on the wire are UTF-16 code units, as TypeScript hosts count them;
the engine works in characters.
"""

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from ngfix.config import CodeFixConfig
from ngfix.registry import CodeFixes
from ngfix.typescript_adapter import TypeScriptAdapter, default_typescript_adapter
from ngfix.types import (
    CodeFixAction, Diagnostic, DiagnosticRelatedInformation, FileTextChanges,
    FormatOptions, SourceFile,
)

from ..models import (
    CodeFixActionOutput, CodeFixInfo, DiagnosticInput, FileChangeOutput,
    FixAllRequest, FixAllResponse, FixesAtPositionRequest, FixesAtPositionResponse,
    FormatOptionsInput, SourceFileInput, TextChangeOutput, TextSpanOutput,
)

logger = logging.getLogger(__name__)


class InvalidRequestError(ValueError):
    """The request cannot be turned into a consistent snapshot."""


class CodeFixService:
    """Service for running code fixes over request snapshots."""

    def __init__(self, code_fixes: CodeFixes, config: CodeFixConfig,
                 adapter: Optional[TypeScriptAdapter] = None):
        self.code_fixes = code_fixes
        self.config = config
        self.adapter = adapter or default_typescript_adapter

    def list_fixes(self) -> List[CodeFixInfo]:
        return [
            CodeFixInfo(fix_ids=list(meta.fix_ids), error_codes=list(meta.error_codes))
            for meta in self.code_fixes.get_all_metas()
        ]

    def fix_all(self, request: FixAllRequest) -> FixAllResponse:
        """Run the fix named by ``request.fix_id`` over the request's diagnostics."""
        source_files = self._parse_files(request.files)
        diagnostics = self._to_diagnostics(request.diagnostics, source_files)
        result = self.code_fixes.get_all_code_actions(
            request.fix_id, diagnostics, self._format_options(request.format_options)
        )
        logger.info("fix-all %s: %d diagnostic(s) -> %d change(s)",
                    request.fix_id, len(diagnostics), len(result.changes))
        return FixAllResponse(changes=_to_file_changes(result.changes, source_files))

    def fixes_at_position(self, request: FixesAtPositionRequest) -> FixesAtPositionResponse:
        source_files = self._parse_files(request.files)
        diagnostics = self._to_diagnostics(request.diagnostics, source_files)
        target = source_files.get(request.file_name)
        start, end = request.start, request.end
        if target is not None:
            start, end = target.utf16_to_char(start), target.utf16_to_char(end)
        actions = self.code_fixes.get_code_fixes_at_position(
            request.file_name,
            start,
            end,
            request.error_codes,
            diagnostics,
            self._format_options(request.format_options),
        )
        return FixesAtPositionResponse(fixes=[_to_action_output(action, source_files) for action in actions])

    def _parse_files(self, files: Sequence[SourceFileInput]) -> Dict[str, SourceFile]:
        source_files: Dict[str, SourceFile] = {}
        for file_input in files:
            if not file_input.file_name.endswith(self.adapter.file_extensions):
                raise InvalidRequestError(f"Not a TypeScript file: {file_input.file_name}")
            source_file = self.adapter.parse_source_file(file_input.file_name, file_input.text)
            if source_file is None:
                raise InvalidRequestError(f"Could not parse {file_input.file_name}")
            source_files[file_input.file_name] = source_file
        return source_files

    def _to_diagnostics(self, inputs: Sequence[DiagnosticInput],
                        source_files: Dict[str, SourceFile]) -> List[Diagnostic]:
        diagnostics = []
        for diag in inputs:
            file = None
            if diag.file is not None:
                if diag.file not in source_files:
                    raise InvalidRequestError(f"Diagnostic refers to unknown file: {diag.file}")
                file = source_files[diag.file]

            related = None
            if diag.related_information is not None:
                related = []
                for info in diag.related_information:
                    related_file = _resolve_related_file(info.file, source_files)
                    start, length = _to_char_span(related_file, info.start, info.length)
                    related.append(DiagnosticRelatedInformation(
                        file=related_file,
                        start=start,
                        length=length,
                        message_text=info.message_text,
                    ))

            start, length = _to_char_span(file, diag.start, diag.length)
            diagnostics.append(Diagnostic(
                code=diag.code,
                file=file,
                start=start,
                length=length,
                message_text=diag.message_text,
                related_information=related,
            ))
        return diagnostics

    def _format_options(self, options: Optional[FormatOptionsInput]) -> FormatOptions:
        defaults = self.config.to_format_options()
        if options is None:
            return defaults
        return FormatOptions(
            indent_size=options.indent_size if options.indent_size is not None else defaults.indent_size,
            new_line_character=options.new_line_character or defaults.new_line_character,
        )


def _resolve_related_file(file_name: Optional[str], source_files: Dict[str, SourceFile]) -> Optional[SourceFile]:
    """Related locations may point at files the client did not send."""
    if file_name is None:
        return None
    if file_name in source_files:
        return source_files[file_name]
    # Only the name is ever inspected for these
    return SourceFile(file_name, "", None)


def _to_char_span(source_file: Optional[SourceFile], start: Optional[int],
                  length: Optional[int]) -> Tuple[Optional[int], Optional[int]]:
    """Convert a UTF-16 (start, length) pair into characters of ``source_file``."""
    if source_file is None or start is None:
        return start, length
    char_start = source_file.utf16_to_char(start)
    if length is None:
        return char_start, None
    return char_start, source_file.utf16_to_char(start + length) - char_start


def _to_span_output(source_file: Optional[SourceFile], start: int, length: int) -> TextSpanOutput:
    if source_file is None:
        return TextSpanOutput(start=start, length=length)
    utf16_start = source_file.char_to_utf16(start)
    return TextSpanOutput(start=utf16_start, length=source_file.char_to_utf16(start + length) - utf16_start)


def _to_file_changes(changes: Sequence[FileTextChanges],
                     source_files: Dict[str, SourceFile]) -> List[FileChangeOutput]:
    return [
        FileChangeOutput(
            file_name=change.file_name,
            text_changes=[
                TextChangeOutput(
                    span=_to_span_output(source_files.get(change.file_name),
                                         text_change.span.start, text_change.span.length),
                    new_text=text_change.new_text,
                )
                for text_change in change.text_changes
            ],
        )
        for change in changes
    ]


def _to_action_output(action: CodeFixAction, source_files: Dict[str, SourceFile]) -> CodeFixActionOutput:
    return CodeFixActionOutput(
        fix_name=action.fix_name,
        description=action.description,
        changes=_to_file_changes(action.changes, source_files),
        fix_id=action.fix_id,
        fix_all_description=action.fix_all_description,
    )
