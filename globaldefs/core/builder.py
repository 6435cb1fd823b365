"""Mutable configuration target for a parse pass and its read-only snapshot."""

from __future__ import annotations

import copy
from dataclasses import FrozenInstanceError, asdict, is_dataclass
from typing import Any

from globaldefs.config.schema import FeatureConfig, GlobalConfig
from globaldefs.core.logging import Diagnostic, DiagnosticLogger, get_logger
from globaldefs.core.tokens import TokenLine


class ConfigSnapshot:
    """Read-only view over a finished :class:`GlobalConfig`.

    Nested sections come back as views too and lists come back as tuples, so
    nothing reachable from a snapshot can be mutated.
    """

    __slots__ = ("_target",)

    def __init__(self, target: Any) -> None:
        object.__setattr__(self, "_target", target)

    def __getattr__(self, name: str) -> Any:
        if name == "_target":
            raise AttributeError(name)
        return _freeze(getattr(self._target, name))

    def __setattr__(self, name: str, value: Any) -> None:
        raise FrozenInstanceError(f"cannot assign to field '{name}'")

    def __delattr__(self, name: str) -> None:
        raise FrozenInstanceError(f"cannot delete field '{name}'")

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ConfigSnapshot):
            return self._target == other._target
        return NotImplemented

    def __repr__(self) -> str:
        return f"ConfigSnapshot({self._target!r})"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self._target)

    def thaw(self) -> Any:
        """Return an independent mutable copy."""
        return copy.deepcopy(self._target)


def _freeze(value: Any) -> Any:
    if is_dataclass(value) and not isinstance(value, type):
        if value.__dataclass_params__.frozen:
            return value
        return ConfigSnapshot(value)
    if isinstance(value, list):
        return tuple(_freeze(item) for item in value)
    return value


class ConfigBuilder:
    """Holds the record being assembled plus everything handlers report.

    Passing ``previous`` marks the pass as a reload: identity settings are
    taken from the previous snapshot and their directives stop mutating.
    """

    def __init__(
        self,
        features: FeatureConfig | None = None,
        *,
        previous: ConfigSnapshot | None = None,
        channel: DiagnosticLogger | None = None,
    ) -> None:
        self.config = GlobalConfig()
        self.features = features or FeatureConfig()
        self.previous = previous
        self.diagnostics: list[Diagnostic] = []
        self._channel = channel or DiagnosticLogger(
            logger=get_logger("globaldefs.parser"),
            service_name="globaldefs",
        )
        if previous is not None:
            self._carry_frozen_fields(previous)

    @property
    def reloading(self) -> bool:
        return self.previous is not None

    def _carry_frozen_fields(self, previous: ConfigSnapshot) -> None:
        namespace = self.config.namespace
        namespace.instance_name = previous.namespace.instance_name
        namespace.network_namespace = previous.namespace.network_namespace
        if namespace.instance_name or namespace.network_namespace:
            namespace.use_pid_dir = True

    def report(
        self,
        line: TokenLine,
        message: str,
        *,
        value: str | None = None,
        level: str = "INFO",
        outcome: str = "failure",
    ) -> None:
        diagnostic = Diagnostic(
            message=message,
            directive=line.directive,
            level=level,
            value=value,
            lineno=line.lineno,
            source=line.source,
        )
        self.diagnostics.append(diagnostic)
        self._channel.emit(diagnostic, outcome=outcome)

    def add_email(self, address: str) -> None:
        self.config.alerts.emails.append(address)

    def snapshot(self) -> ConfigSnapshot:
        return ConfigSnapshot(copy.deepcopy(self.config))
