"""Tests that the analyzers stay independent of the service layer."""

import ast
from pathlib import Path

import pytest

import foia_intel.engine.patterns

ENGINE_DIR = Path(foia_intel.engine.patterns.__file__).parent


def imported_modules(path):
    tree = ast.parse(path.read_text(encoding="utf-8"))
    for node in ast.walk(tree):
        if isinstance(node, ast.ImportFrom) and node.module:
            yield node.module
        elif isinstance(node, ast.Import):
            for alias in node.names:
                yield alias.name


@pytest.mark.parametrize("path", sorted(ENGINE_DIR.glob("*.py")), ids=lambda p: p.name)
def test_engine_module_imports_only_core_and_logic(path):
    project_imports = [m for m in imported_modules(path) if m.startswith("foia_intel")]

    assert not [m for m in project_imports if m.startswith("foia_intel.service")]
    assert all(
        m.split(".")[1] in {"core", "logic", "engine"} for m in project_imports
    )
