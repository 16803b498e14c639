"""
Import-boundary enforcement.

1. Kernel purity      -- payroll_kernel/** may not import config, engines
                          or modules.
2. Engine purity      -- payroll_engines/** may not import modules or any
                          I/O-bound library.
3. Config centralisation -- outside payroll_config/, only the package root
                          ``payroll_config`` may be imported (loader and
                          validator stay internal).
4. Dependency direction -- config may import only the kernel.

All scanning is done via AST; these tests are read-only.
"""

import ast
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _python_files(package: str) -> list[Path]:
    """Return all .py files under *package*, sorted for deterministic order."""
    return sorted((ROOT / package).rglob("*.py"))


def _extract_imports(filepath: Path) -> list[tuple[int, str]]:
    """Return (line_number, module_string) for every import in *filepath*."""
    try:
        tree = ast.parse(filepath.read_text(), filename=str(filepath))
    except (SyntaxError, UnicodeDecodeError):
        return []

    results: list[tuple[int, str]] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                results.append((node.lineno, alias.name))
        elif isinstance(node, ast.ImportFrom):
            if node.module:
                results.append((node.lineno, node.module))
    return results


def _matches_any(module: str, prefixes: tuple[str, ...]) -> bool:
    """True if *module* equals or is a child of any prefix."""
    return any(module == prefix or module.startswith(f"{prefix}.") for prefix in prefixes)


def _violations(package: str, forbidden: tuple[str, ...]) -> list[str]:
    found: list[str] = []
    for filepath in _python_files(package):
        for lineno, module in _extract_imports(filepath):
            if _matches_any(module, forbidden):
                found.append(f"  {filepath.relative_to(ROOT)}:{lineno} imports '{module}'")
    return found


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------

class TestKernelPurity:

    def test_kernel_has_no_upward_imports(self):
        violations = _violations(
            "payroll_kernel", ("payroll_config", "payroll_engines", "payroll_modules"),
        )
        assert not violations, (
            "payroll_kernel/** must not import config, engines or modules:\n"
            + "\n".join(violations)
        )


class TestEnginePurity:

    FORBIDDEN_PREFIXES = (
        "payroll_modules",
        "yaml",
        "sqlite3",
        "requests",
        "os",
    )

    def test_engine_files_have_no_forbidden_imports(self):
        violations = _violations("payroll_engines", self.FORBIDDEN_PREFIXES)
        assert not violations, (
            "Engine purity violation: payroll_engines/** must not import "
            "modules or I/O libraries:\n" + "\n".join(violations)
        )


class TestConfigCentralisation:

    INTERNAL = ("payroll_config.loader", "payroll_config.validator")

    def test_internal_config_modules_not_imported_elsewhere(self):
        violations: list[str] = []
        for package in ("payroll_kernel", "payroll_engines", "payroll_modules"):
            violations.extend(_violations(package, self.INTERNAL))
        assert not violations, (
            "Only payroll_config may use its loader and validator:\n"
            + "\n".join(violations)
        )

    def test_config_depends_only_on_kernel(self):
        violations = _violations("payroll_config", ("payroll_engines", "payroll_modules"))
        assert not violations, (
            "payroll_config/** must not import engines or modules:\n"
            + "\n".join(violations)
        )
