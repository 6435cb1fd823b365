from __future__ import annotations

from pathlib import Path
import tomllib


def _pyproject() -> dict:
    pyproject_path = Path(__file__).resolve().parents[2] / "pyproject.toml"
    return tomllib.loads(pyproject_path.read_text(encoding="utf-8"))


def test_test_extra_includes_pytest() -> None:
    test_dependencies = _pyproject().get("project", {}).get("optional-dependencies", {}).get("test", [])
    assert any(str(item).startswith("pytest") for item in test_dependencies)


def test_console_script_points_at_cli() -> None:
    scripts = _pyproject().get("project", {}).get("scripts", {})
    assert scripts.get("globaldefs") == "globaldefs.cli:main"
