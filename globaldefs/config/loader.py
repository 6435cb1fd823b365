"""Settings loading and global_defs file parsing.

Settings files are YAML mappings. String values may reference the
environment as ``${NAME}`` (required) or ``${NAME:-fallback}``; references
are expanded before the mapping is validated by :func:`parse_settings`.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

import yaml

from globaldefs.config.schema import AppSettings, parse_settings
from globaldefs.core.builder import ConfigSnapshot
from globaldefs.core.parser import GlobalDefsParser, ParseResult
from globaldefs.core.reader import read_global_defs


DEFAULT_SETTINGS_PATH = Path(__file__).with_name("defaults.yml")
ENV_REFERENCE = re.compile(r"\$\{(?P<name>[A-Za-z_][A-Za-z0-9_]*)(?::-(?P<fallback>[^}]*))?\}")


def _env_value(match: re.Match[str]) -> str:
    value = os.environ.get(match["name"], match["fallback"])
    if value is None:
        raise ValueError(
            f"missing required environment variable '{match['name']}' referenced by '{match.group(0)}'"
        )
    return value


def _expand_env(node: Any) -> Any:
    if isinstance(node, str):
        return ENV_REFERENCE.sub(_env_value, node)
    if isinstance(node, list):
        return [_expand_env(item) for item in node]
    if isinstance(node, dict):
        return {key: _expand_env(item) for key, item in node.items()}
    return node


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise FileNotFoundError(f"settings file does not exist: {path}") from exc
    document = yaml.safe_load(text)
    if document is None:
        return {}
    if not isinstance(document, dict):
        raise ValueError(f"{path}: settings must be a mapping, not {type(document).__name__}")
    return document


def load_settings(path: Path | None = None) -> AppSettings:
    """Read, expand and validate a settings file (the bundled defaults when ``path`` is None)."""
    return parse_settings(_expand_env(_read_yaml(path or DEFAULT_SETTINGS_PATH)))


def initialize_settings(path: Path, force: bool = False) -> Path:
    if path.exists() and not force:
        raise FileExistsError(f"settings already exist: {path}")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(DEFAULT_SETTINGS_PATH.read_text(encoding="utf-8"), encoding="utf-8")
    return path


def load_global_defs(
    path: Path,
    settings: AppSettings | None = None,
    previous: ConfigSnapshot | None = None,
) -> ParseResult:
    if not path.exists():
        raise FileNotFoundError(f"config file does not exist: {path}")
    settings = settings or AppSettings()
    parser = GlobalDefsParser(settings.features, service_name=settings.logging.service_name)
    with path.open("r", encoding="utf-8") as handle:
        lines = list(read_global_defs(handle, source=str(path)))
    return parser.parse(lines, previous=previous)
