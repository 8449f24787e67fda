"""
Registry for code fixes.

This module maps diagnostic error codes and fix ids to the code fixes that
handle them, and routes "at position" and "fix all" requests to those fixes.
"""

import logging
from typing import Dict, Iterable, List, Optional, Sequence

from .config import CodeFixConfig
from .types import (
    CodeActionContext, CodeActionMeta, CodeFixAction, CodeFixAllContext,
    CombinedCodeActions, Diagnostic, FormatOptions,
)

logger = logging.getLogger(__name__)


class CodeFixes:
    """Central registry for code fixes."""

    def __init__(self, code_action_metas: Iterable[CodeActionMeta], config: Optional[CodeFixConfig] = None):
        self._metas: List[CodeActionMeta] = []
        self._error_code_to_fixes: Dict[int, List[CodeActionMeta]] = {}
        self._fix_id_to_registration: Dict[str, CodeActionMeta] = {}
        self._config = config

        for meta in code_action_metas:
            self.register(meta)

    def register(self, meta: CodeActionMeta) -> None:
        """Register a code fix. Disabled fixes are skipped; duplicate fix ids are an error."""
        if self._config is not None and not any(self._config.is_fix_enabled(fix_id) for fix_id in meta.fix_ids):
            logger.debug("Skipping disabled code fix %s", meta.fix_ids)
            return

        for fix_id in meta.fix_ids:
            if fix_id in self._fix_id_to_registration:
                raise ValueError(f"Duplicate fix id '{fix_id}'")

        self._metas.append(meta)
        for error_code in meta.error_codes:
            self._error_code_to_fixes.setdefault(error_code, []).append(meta)
        for fix_id in meta.fix_ids:
            self._fix_id_to_registration[fix_id] = meta

    def has_fix_for_code(self, code: int) -> bool:
        return code in self._error_code_to_fixes

    def get_fix_ids(self) -> List[str]:
        return list(self._fix_id_to_registration.keys())

    def get_meta(self, fix_id: str) -> Optional[CodeActionMeta]:
        return self._fix_id_to_registration.get(fix_id)

    def get_all_metas(self) -> List[CodeActionMeta]:
        return self._metas.copy()

    def get_code_fixes_at_position(
        self,
        file_name: str,
        start: int,
        end: int,
        error_codes: Sequence[int],
        diagnostics: Sequence[Diagnostic] = (),
        format_options: Optional[FormatOptions] = None,
    ) -> List[CodeFixAction]:
        """Collect single-diagnostic actions from every fix registered for ``error_codes``."""
        actions: List[CodeFixAction] = []
        for error_code in error_codes:
            for meta in self._error_code_to_fixes.get(error_code, []):
                context = CodeActionContext(
                    file_name=file_name,
                    start=start,
                    end=end,
                    error_code=error_code,
                    diagnostics=diagnostics,
                    format_options=format_options or FormatOptions(),
                )
                actions.extend(meta.get_code_actions(context))
        return actions

    def get_all_code_actions(
        self,
        fix_id: str,
        diagnostics: Sequence[Diagnostic],
        format_options: Optional[FormatOptions] = None,
    ) -> CombinedCodeActions:
        """Run the fix registered for ``fix_id`` over every diagnostic it handles."""
        meta = self._fix_id_to_registration.get(fix_id)
        if meta is None:
            logger.debug("No code fix registered for fix id %s", fix_id)
            return CombinedCodeActions(changes=[])

        relevant = [diag for diag in diagnostics if diag.code in meta.error_codes]
        logger.debug("Fix %s: %d of %d diagnostics match its error codes", fix_id, len(relevant), len(diagnostics))

        context = CodeFixAllContext(
            fix_id=fix_id,
            diagnostics=relevant,
            format_options=format_options or FormatOptions(),
        )
        return meta.get_all_code_actions(context)
