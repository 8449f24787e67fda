"""
Shared fixtures for the ng-codefix test suite.
"""

import os
import sys

import pytest

# Add server to path so we can import modules
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from ngfix.typescript_adapter import TypeScriptAdapter


@pytest.fixture(scope="session")
def adapter():
    """TypeScript adapter; skips the test when the grammar is unavailable."""
    ts_adapter = TypeScriptAdapter()
    if not ts_adapter.is_available():
        pytest.skip("Tree-sitter TypeScript parser not available")
    return ts_adapter
