"""Structured ECS logging for configuration diagnostics."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
import json
import logging
from pathlib import Path
from typing import Callable

from globaldefs.config.schema import LoggingConfig


def _strip_empty(value: object) -> object | None:
    if isinstance(value, dict):
        cleaned = {key: _strip_empty(item) for key, item in value.items()}
        return {key: item for key, item in cleaned.items() if item is not None} or None
    if isinstance(value, list):
        cleaned_list = [_strip_empty(item) for item in value]
        return [item for item in cleaned_list if item is not None] or None
    if value in ("", None):
        return None
    return value


class ECSJsonFormatter(logging.Formatter):
    def __init__(self, service_name: str = "globaldefs") -> None:
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, UTC).isoformat(timespec="microseconds")
        payload: dict[str, object] = {
            "@timestamp": timestamp,
            "message": record.getMessage(),
            "log": {
                "level": record.levelname.lower(),
                "logger": record.name,
            },
            "service": {
                "name": getattr(record, "service_name", self.service_name),
            },
            "event": {
                "kind": "event",
                "category": getattr(record, "event_category", "configuration"),
                "action": getattr(record, "event_action", None),
                "outcome": getattr(record, "event_outcome", None),
            },
            "file": {
                "path": getattr(record, "file_path", None),
                "line": getattr(record, "file_line", None),
            },
            "globaldefs": {
                "directive": getattr(record, "directive", None),
                "value": getattr(record, "value", None),
            },
        }
        cleaned = _strip_empty(payload) or {}
        return json.dumps(cleaned, separators=(",", ":"))


class TextFormatter(logging.Formatter):
    def __init__(self) -> None:
        super().__init__("%(levelname)s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        path = getattr(record, "file_path", None)
        lineno = getattr(record, "file_line", None)
        if path and lineno:
            return f"{path}:{lineno}: {line}"
        return line


def _formatter_for(config: LoggingConfig) -> logging.Formatter:
    if config.fmt == "text":
        return TextFormatter()
    return ECSJsonFormatter(service_name=config.service_name)


def _sink_handler(config: LoggingConfig, formatter: logging.Formatter) -> logging.Handler:
    if config.sink == "file":
        file_path = config.file_path or "logs/globaldefs.log"
        log_file = Path(file_path)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    return handler


def configure_logging(config: LoggingConfig, force: bool = False) -> None:
    root = logging.getLogger("globaldefs")
    if getattr(root, "_globaldefs_configured", False) and not force:
        return

    root.setLevel(config.level)
    for existing in list(root.handlers):
        existing.close()
    root.handlers.clear()
    root.addHandler(_sink_handler(config, _formatter_for(config)))

    root.propagate = False
    setattr(root, "_globaldefs_configured", True)


def get_logger(name: str, level: str = "INFO") -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    if name.startswith("globaldefs"):
        parent = logging.getLogger("globaldefs")
        if parent.handlers:
            logger.setLevel(level)
            logger.propagate = True
            return logger

    handler = logging.StreamHandler()
    handler.setFormatter(ECSJsonFormatter())
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """One message written to the diagnostics channel."""

    message: str
    directive: str
    level: str = "INFO"
    value: str | None = None
    lineno: int | None = None
    source: str | None = None

    def as_dict(self) -> dict[str, object]:
        return {
            "message": self.message,
            "directive": self.directive,
            "level": self.level,
            "value": self.value,
            "line": self.lineno,
            "source": self.source,
        }


@dataclass(slots=True)
class DiagnosticLogger:
    logger: logging.Logger
    service_name: str
    publish_hook: Callable[[Diagnostic], None] | None = None

    def emit(self, diagnostic: Diagnostic, *, outcome: str = "failure") -> None:
        self.logger.log(
            getattr(logging, diagnostic.level.upper(), logging.INFO),
            diagnostic.message,
            extra={
                "service_name": self.service_name,
                "event_action": diagnostic.directive or None,
                "event_category": "configuration",
                "event_outcome": outcome,
                "file_path": diagnostic.source,
                "file_line": diagnostic.lineno,
                "directive": diagnostic.directive or None,
                "value": diagnostic.value,
            },
        )
        if self.publish_hook:
            try:
                self.publish_hook(diagnostic)
            except Exception:
                return
