"""Static checks for public API invocation logging decorators.

Every blob operation declared on the provider contract must be decorated with
shared public API instrumentation in each concrete substrate.
"""

from __future__ import annotations

import ast
from pathlib import Path

_REPO_ROOT = Path(__file__).resolve().parents[2]
_DECORATORS = {"public_api_instrumented", "public_api_logged"}
_UNINSTRUMENTED = {"close"}


def test_filesystem_substrate_public_methods_are_instrumented() -> None:
    """Require instrumentation on every provider contract method."""
    contract_methods = _public_method_names(
        file_path=_REPO_ROOT / "packages/stowage_shared/blobs.py",
        class_name="BlobStorageProvider",
    )
    decorated_methods = _decorated_public_api_methods(
        file_path=_REPO_ROOT / "resources/substrates/filesystem/filesystem_substrate.py",
        class_name="LocalFilesystemBlobSubstrate",
    )

    missing = sorted(contract_methods - _UNINSTRUMENTED - decorated_methods)
    assert not missing, f"Missing @public_api_logged on substrate methods: {missing}"


def _public_method_names(*, file_path: Path, class_name: str) -> set[str]:
    """Return non-private method names declared directly on one class."""
    class_node = _class_node(file_path=file_path, class_name=class_name)
    return {
        node.name
        for node in class_node.body
        if isinstance(node, ast.FunctionDef) and not node.name.startswith("_")
    }


def _decorated_public_api_methods(*, file_path: Path, class_name: str) -> set[str]:
    """Return method names decorated with a public API decorator."""
    class_node = _class_node(file_path=file_path, class_name=class_name)
    names: set[str] = set()
    for node in class_node.body:
        if not isinstance(node, ast.FunctionDef):
            continue
        if node.name.startswith("_"):
            continue
        if _has_public_api_decorator(node):
            names.add(node.name)
    return names


def _class_node(*, file_path: Path, class_name: str) -> ast.ClassDef:
    """Load and return one named class node from a Python module."""
    module = ast.parse(file_path.read_text(encoding="utf-8"))
    for node in module.body:
        if isinstance(node, ast.ClassDef) and node.name == class_name:
            return node
    raise AssertionError(f"Class not found: {class_name} in {file_path}")


def _has_public_api_decorator(node: ast.FunctionDef) -> bool:
    """Return whether method decorators include a public API decorator."""
    for decorator in node.decorator_list:
        if isinstance(decorator, ast.Name) and decorator.id in _DECORATORS:
            return True
        if (
            isinstance(decorator, ast.Call)
            and isinstance(decorator.func, ast.Name)
            and decorator.func.id in _DECORATORS
        ):
            return True
    return False
