"""
TypeScript language adapter for tree-sitter.
"""
import logging
from typing import Any, Dict, Optional, Tuple

from .types import SourceFile

logger = logging.getLogger(__name__)


class TypeScriptAdapter:
    """Tree-sitter adapter for TypeScript language."""

    def __init__(self):
        """Initialize TypeScript adapter; parsers are created on first use."""
        self._ts_parser = None  # Parser for .ts files
        self._tsx_parser = None  # Parser for .tsx files

    @property
    def file_extensions(self) -> Tuple[str, ...]:
        """Return supported file extensions."""
        return (".ts", ".tsx")

    def _get_ts_parser(self):
        """Get or create the TypeScript parser for .ts files."""
        if self._ts_parser is None:
            try:
                import tree_sitter
                from tree_sitter_typescript import language_typescript

                TYPESCRIPT_LANGUAGE = tree_sitter.Language(language_typescript())

                self._ts_parser = tree_sitter.Parser()
                self._ts_parser.language = TYPESCRIPT_LANGUAGE
                logger.debug("TypeScript parser initialized successfully")
            except ImportError as e:
                logger.warning("tree-sitter-typescript not available: %s", e)
                self._ts_parser = None
            except Exception as e:
                logger.warning("Could not initialize TypeScript parser: %s", e)
                self._ts_parser = None

        return self._ts_parser

    def _get_tsx_parser(self):
        """Get or create the TSX parser for .tsx files."""
        if self._tsx_parser is None:
            try:
                import tree_sitter
                from tree_sitter_typescript import language_tsx

                TSX_LANGUAGE = tree_sitter.Language(language_tsx())

                self._tsx_parser = tree_sitter.Parser()
                self._tsx_parser.language = TSX_LANGUAGE
                logger.debug("TSX parser initialized successfully")
            except ImportError as e:
                logger.warning("tree-sitter-typescript (TSX) not available: %s", e)
                self._tsx_parser = None
            except Exception as e:
                logger.warning("Could not initialize TSX parser: %s", e)
                self._tsx_parser = None

        return self._tsx_parser

    def _get_parser(self, file_path: Optional[str] = None):
        """Get the appropriate parser based on file extension."""
        if file_path and file_path.endswith('.tsx'):
            return self._get_tsx_parser()
        return self._get_ts_parser()

    def is_available(self) -> bool:
        return self._get_ts_parser() is not None

    def parse(self, text: str, file_path: Optional[str] = None) -> Any:
        """Parse text and return a Tree-sitter tree."""
        parser = self._get_parser(file_path)
        if parser is None:
            return None

        # Handle both str and bytes input
        if isinstance(text, bytes):
            text_bytes = text
        elif isinstance(text, str):
            text_bytes = text.encode('utf-8')
        else:
            return None

        return parser.parse(text_bytes)

    def parse_source_file(self, file_name: str, text: str) -> Optional[SourceFile]:
        """Parse ``text`` into a `SourceFile`, or None if no parser is available."""
        tree = self.parse(text, file_name)
        if tree is None:
            return None
        return SourceFile(file_name, text, tree)

    def parse_source_files(self, files: Dict[str, str]) -> Dict[str, SourceFile]:
        """Parse a ``{file_name: text}`` mapping. Files that fail to parse are left out."""
        source_files = {}
        for file_name, text in files.items():
            source_file = self.parse_source_file(file_name, text)
            if source_file is None:
                logger.warning("Could not parse %s", file_name)
                continue
            source_files[file_name] = source_file
        return source_files


# Create default instance
default_typescript_adapter = TypeScriptAdapter()
