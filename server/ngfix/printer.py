"""
Canonical printer for rebuilt TypeScript array literals.

Tree-sitter trees are read-only, so "rebuilding" an array means printing a
new one from the surviving element nodes. Output follows the shape the
TypeScript printer gives an updated array literal: one line when the
original array was single-line, one element per line otherwise.
"""

from typing import Any, Dict, List, Optional, Sequence, Tuple

from .ts_utils import is_trivia
from .types import FormatOptions, RangeKey, SourceFile

EMPTY_ARRAY_TEXT = "[]"


class Printer:
    """Prints array literals scoped to a source file."""

    def __init__(self, format_options: Optional[FormatOptions] = None):
        self.format_options = format_options or FormatOptions()

    def new_line(self, source_file: SourceFile) -> str:
        if self.format_options.new_line_character:
            return self.format_options.new_line_character
        return "\r\n" if "\r\n" in source_file.text else "\n"

    def print_array_literal(self, array_node: Any, elements: Sequence[Any], source_file: SourceFile) -> str:
        """Print ``array_node`` as if its element list were ``elements``.

        Args:
            array_node: The original tree-sitter ``array`` node
            elements: Element nodes to keep, in output order
            source_file: File the nodes belong to

        Returns:
            Replacement text for the full extent of ``array_node``
        """
        leading, trailing = self._collect_comments(array_node, source_file)
        items: List[Tuple[List[str], str, List[str]]] = []
        for element in elements:
            key = source_file.node_key(element)
            items.append((leading.get(key, []), source_file.node_text(element), trailing.get(key, [])))

        multi_line = self.is_multi_line(array_node, source_file) or any(
            comment.startswith("//")
            for before, _, after in items
            for comment in before + after
        )
        new_line = self.new_line(source_file)

        if not items:
            return "[" + new_line + "]" if multi_line else EMPTY_ARRAY_TEXT

        if not multi_line:
            pieces = []
            for index, (before, text, after) in enumerate(items):
                piece = " ".join(before + [text])
                if index < len(items) - 1:
                    piece += ","
                if after:
                    piece += " " + " ".join(after)
                pieces.append(piece)
            return "[" + " ".join(pieces) + "]"

        indent = " " * self.format_options.indent_size
        lines = []
        for index, (before, text, after) in enumerate(items):
            element = elements[index]
            lines.extend(indent + comment for comment in before)
            line = indent + self._reindent(text, self._original_indent(element, source_file), indent, new_line)
            if index < len(items) - 1:
                line += ","
            if after:
                line += " " + " ".join(after)
            lines.append(line)
        return "[" + new_line + new_line.join(lines) + new_line + "]"

    def is_multi_line(self, array_node: Any, source_file: SourceFile) -> bool:
        """True when a line break precedes the first token after ``[``."""
        children = array_node.children
        for index, child in enumerate(children):
            if child.type != "[":
                continue
            for following in children[index + 1:]:
                if is_trivia(following):
                    continue
                gap = source_file.text[source_file.node_end(child):source_file.node_start(following)]
                return "\n" in gap
        return False

    def _collect_comments(self, array_node: Any, source_file: SourceFile) -> Tuple[Dict[RangeKey, List[str]], Dict[RangeKey, List[str]]]:
        """Map element keys to the comments that lead and trail them."""
        leading: Dict[RangeKey, List[str]] = {}
        trailing: Dict[RangeKey, List[str]] = {}
        pending: List[str] = []
        previous = None  # element not yet followed by its comma
        separated = None  # element the last comma belongs to
        separator_end = 0

        for child in array_node.children:
            if is_trivia(child):
                text = source_file.node_text(child)
                if previous is not None:
                    trailing.setdefault(source_file.node_key(previous), []).append(text)
                elif separated is not None and "\n" not in source_file.text[separator_end:source_file.node_start(child)]:
                    # Same line as the comma: `One, // why One`
                    trailing.setdefault(source_file.node_key(separated), []).append(text)
                    separator_end = source_file.node_end(child)
                else:
                    pending.append(text)
            elif child.type == ",":
                separated = previous
                separator_end = source_file.node_end(child)
                previous = None
            elif child.is_named:
                leading[source_file.node_key(child)] = pending
                pending = []
                previous = child
                separated = None

        return leading, trailing

    def _original_indent(self, node: Any, source_file: SourceFile) -> str:
        start = source_file.node_start(node)
        prefix = source_file.text[source_file.line_start(start):start]
        return prefix[:len(prefix) - len(prefix.lstrip())]

    def _reindent(self, text: str, old_indent: str, new_indent: str, new_line: str) -> str:
        """Shift continuation lines of a multi-line element under ``new_indent``."""
        lines = [line.rstrip("\r") for line in text.split("\n")]
        if len(lines) == 1:
            return text
        shifted = [lines[0]]
        for line in lines[1:]:
            if line.startswith(old_indent):
                line = line[len(old_indent):]
            shifted.append(new_indent + line if line else line)
        return new_line.join(shifted)
