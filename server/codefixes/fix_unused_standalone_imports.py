"""
Code fix: fixUnusedStandaloneImports

Removes unused entries from a standalone component's `imports` array. The
diagnostic points at the `imports` property name; each related-information
entry points at one unused element. With no related information every
element is unused and the array is emptied.
"""

import logging
from typing import Any, FrozenSet, List, Optional, Sequence

from ngfix.printer import EMPTY_ARRAY_TEXT, Printer
from ngfix.ts_utils import (
    array_elements, find_first_matching_node, is_array_literal,
    is_property_assignment, property_initializer, property_name,
)
from ngfix.types import (
    ArrayEdit, CodeActionContext, CodeFixAction, CodeFixAllContext,
    CombinedCodeActions, DiagnosticRelatedInformation, EmptyArray, ErrorCode,
    FileTextChanges, FilterElements, FixIdForCodeFixesAll, RangeKey,
    SourceFile, TextChange, TextSpan, ng_error_code,
)

logger = logging.getLogger(__name__)


def find_imports_property(source_file: SourceFile, start: int, length: int) -> Optional[Any]:
    """Find the `name: [...]` property whose name spans exactly (start, length)."""

    def matches(node: Any) -> bool:
        if not is_property_assignment(node) or not is_array_literal(property_initializer(node)):
            return False
        name = property_name(node)
        return name is not None and source_file.node_key(name) == (start, length)

    return find_first_matching_node(source_file, matches)


def build_exclusion_set(
    source_file: SourceFile,
    related_information: Optional[Sequence[DiagnosticRelatedInformation]],
) -> FrozenSet[RangeKey]:
    """(start, width) keys of the elements to delete.

    When the compiler can't resolve an unused import to an identifier within
    the array it reports the class declaration instead, possibly in another
    file. Only entries from ``source_file`` are kept.
    """
    ranges = set()
    for info in related_information or ():
        if info.file is None or info.file.file_name != source_file.file_name:
            logger.debug("Ignoring related information from another file: %s", info.file)
            continue
        if info.start is None or info.length is None:
            continue
        ranges.add((info.start, info.length))
    return frozenset(ranges)


def select_array_edit(
    source_file: SourceFile,
    related_information: Optional[Sequence[DiagnosticRelatedInformation]],
) -> ArrayEdit:
    """No related information means every import is unused."""
    if not related_information:
        return EmptyArray()
    return FilterElements(exclude=build_exclusion_set(source_file, related_information))


def print_array_edit(edit: ArrayEdit, array_node: Any, source_file: SourceFile, printer: Printer) -> str:
    """Replacement text for ``array_node`` under ``edit``."""
    if isinstance(edit, EmptyArray):
        return EMPTY_ARRAY_TEXT

    kept = [
        element for element in array_elements(array_node)
        if source_file.node_key(element) not in edit.exclude
    ]
    return printer.print_array_literal(array_node, kept, source_file)


class FixUnusedStandaloneImports:
    """Fix for unused standalone imports (NG8113)."""

    error_codes = [ng_error_code(ErrorCode.UNUSED_STANDALONE_IMPORTS)]
    fix_ids = [FixIdForCodeFixesAll.FIX_UNUSED_STANDALONE_IMPORTS]

    def get_code_actions(self, context: CodeActionContext) -> List[CodeFixAction]:
        """Only offered through "fix all"."""
        return []

    def get_all_code_actions(self, context: CodeFixAllContext) -> CombinedCodeActions:
        printer = Printer(context.format_options)
        changes: List[FileTextChanges] = []

        for diag in context.diagnostics:
            source_file, start, length = diag.file, diag.start, diag.length
            if source_file is None or start is None or length is None:
                logger.debug("Skipping diagnostic without a location: %s", diag.message_text)
                continue

            node = find_imports_property(source_file, start, length)
            if node is None:
                logger.debug("No imports array at %s:%d+%d", source_file.file_name, start, length)
                continue

            imports_array = property_initializer(node)
            edit = select_array_edit(source_file, diag.related_information)
            new_text = print_array_edit(edit, imports_array, source_file, printer)

            changes.append(FileTextChanges(
                file_name=source_file.file_name,
                text_changes=[TextChange(
                    span=TextSpan(
                        start=source_file.node_start(imports_array),
                        length=source_file.node_width(imports_array),
                    ),
                    new_text=new_text,
                )],
            ))

        logger.debug("%s produced %d change(s) for %d diagnostic(s)",
                     context.fix_id, len(changes), len(context.diagnostics))
        return CombinedCodeActions(changes=changes)


fix_unused_standalone_imports_meta = FixUnusedStandaloneImports()
