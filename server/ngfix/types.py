"""
Core types for the ng-codefix engine.

This module provides the shared dataclasses used by the TypeScript adapter,
the code-fix registry and the individual code fixes. Diagnostics come in,
text changes go out; both are immutable snapshots.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Callable, FrozenSet, List, Optional, Protocol, Sequence, Tuple, Union


# Type aliases for clarity
RangeKey = Tuple[int, int]  # (start, width) in characters, 0-based


class ErrorCode(IntEnum):
    """Template/compiler error codes that have an associated code fix."""
    UNUSED_STANDALONE_IMPORTS = 8113


def ng_error_code(code: int) -> int:
    """Convert an `ErrorCode` to the negative form reported by diagnostics (8113 -> -998113)."""
    return int(f"-99{int(code)}")


class FixIdForCodeFixesAll:
    """Fix ids understood by the "apply all fixes of this kind" command."""
    FIX_UNUSED_STANDALONE_IMPORTS = "fixUnusedStandaloneImports"


class SourceFile:
    """A parsed TypeScript file: name, text and tree-sitter tree.

    Tree-sitter reports UTF-8 byte offsets while diagnostics carry character
    offsets into ``text``. All public position helpers return character offsets;
    ``utf16_to_char``/``char_to_utf16`` translate for clients that count UTF-16
    code units.
    """

    def __init__(self, file_name: str, text: str, tree: Any):
        self.file_name = file_name
        self.text = text
        self.tree = tree
        self._byte_to_char: Optional[List[int]] = None
        self._utf16_to_char: Optional[List[int]] = None
        self._bmp: Optional[bool] = None

    def __repr__(self) -> str:
        return f"SourceFile({self.file_name!r})"

    @property
    def root_node(self) -> Any:
        return self.tree.root_node if hasattr(self.tree, "root_node") else self.tree

    def char_offset(self, byte_offset: int) -> int:
        """Convert a UTF-8 byte offset into a character offset."""
        if self.text.isascii():
            return byte_offset
        if self._byte_to_char is None:
            table: List[int] = []
            for index, ch in enumerate(self.text):
                table.extend([index] * len(ch.encode("utf-8")))
            table.append(len(self.text))
            self._byte_to_char = table
        return self._byte_to_char[min(byte_offset, len(self._byte_to_char) - 1)]

    def _is_bmp(self) -> bool:
        if self._bmp is None:
            self._bmp = all(ord(ch) < 0x10000 for ch in self.text)
        return self._bmp

    def utf16_to_char(self, offset: int) -> int:
        """Convert a UTF-16 code-unit offset (what TypeScript hosts send) into a character offset."""
        if self._is_bmp():
            return offset
        if self._utf16_to_char is None:
            table: List[int] = []
            for index, ch in enumerate(self.text):
                table.extend([index] * (2 if ord(ch) >= 0x10000 else 1))
            table.append(len(self.text))
            self._utf16_to_char = table
        return self._utf16_to_char[min(offset, len(self._utf16_to_char) - 1)]

    def char_to_utf16(self, offset: int) -> int:
        """Convert a character offset into a UTF-16 code-unit offset."""
        if self._is_bmp():
            return offset
        return len(self.text[:offset].encode("utf-16-le")) // 2

    def node_start(self, node: Any) -> int:
        """Start of the node, leading trivia excluded."""
        return self.char_offset(node.start_byte)

    def node_end(self, node: Any) -> int:
        return self.char_offset(node.end_byte)

    def node_width(self, node: Any) -> int:
        return self.node_end(node) - self.node_start(node)

    def node_key(self, node: Any) -> RangeKey:
        """Positional identity of a node."""
        return (self.node_start(node), self.node_width(node))

    def node_text(self, node: Any) -> str:
        return self.text[self.node_start(node):self.node_end(node)]

    def line_start(self, offset: int) -> int:
        """Character offset of the first column on the line containing ``offset``."""
        return self.text.rfind("\n", 0, offset) + 1


@dataclass(frozen=True)
class DiagnosticRelatedInformation:
    """A secondary location attached to a diagnostic."""
    file: Optional[SourceFile]
    start: Optional[int]
    length: Optional[int]
    message_text: str = ""


@dataclass(frozen=True)
class Diagnostic:
    """An analyzer finding with a primary location and optional related locations."""
    code: int
    file: Optional[SourceFile]
    start: Optional[int]
    length: Optional[int]
    message_text: str = ""
    related_information: Optional[List[DiagnosticRelatedInformation]] = None


@dataclass(frozen=True)
class TextSpan:
    start: int
    length: int


@dataclass(frozen=True)
class TextChange:
    """Replace ``span`` with ``new_text``."""
    span: TextSpan
    new_text: str


@dataclass(frozen=True)
class FileTextChanges:
    file_name: str
    text_changes: List[TextChange]


@dataclass(frozen=True)
class CombinedCodeActions:
    """Result of a fix-all request."""
    changes: List[FileTextChanges] = field(default_factory=list)


@dataclass(frozen=True)
class CodeFixAction:
    """A single code action offered at a position."""
    fix_name: str
    description: str
    changes: List[FileTextChanges]
    fix_id: Optional[str] = None
    fix_all_description: Optional[str] = None


@dataclass(frozen=True)
class FormatOptions:
    """Printer settings.

    Attributes:
        indent_size: Spaces per indentation level in multi-line output
        new_line_character: Newline sequence; None means "use the file's own"
    """
    indent_size: int = 4
    new_line_character: Optional[str] = None


@dataclass(frozen=True)
class CodeActionContext:
    """Context for a single-diagnostic code action request."""
    file_name: str
    start: int
    end: int
    error_code: int
    diagnostics: Sequence[Diagnostic] = ()
    format_options: FormatOptions = FormatOptions()


@dataclass(frozen=True)
class CodeFixAllContext:
    """Context for a fix-all request; ``diagnostics`` are pre-filtered by error code."""
    fix_id: str
    diagnostics: Sequence[Diagnostic]
    format_options: FormatOptions = FormatOptions()


# Array edit modes. Kept as distinct types so the "no related information"
# path never degrades into a filter with an empty exclusion set.
@dataclass(frozen=True)
class EmptyArray:
    """Replace the whole array with the canonical empty literal."""


@dataclass(frozen=True)
class FilterElements:
    """Drop every element whose (start, width) key is in ``exclude``."""
    exclude: FrozenSet[RangeKey]


ArrayEdit = Union[EmptyArray, FilterElements]


class CodeActionMeta(Protocol):
    """Protocol for all code fixes registered with `CodeFixes`.

    Code fixes are stateless; both entry points are pure functions of their context.
    """
    error_codes: List[int]
    fix_ids: List[str]

    def get_code_actions(self, context: CodeActionContext) -> List[CodeFixAction]:
        ...

    def get_all_code_actions(self, context: CodeFixAllContext) -> CombinedCodeActions:
        ...


NodePredicate = Callable[[Any], bool]
