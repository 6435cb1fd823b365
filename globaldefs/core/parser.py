"""One parse pass over the global_defs token lines."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterable

from globaldefs.config.schema import FeatureConfig
from globaldefs.core.builder import ConfigBuilder, ConfigSnapshot
from globaldefs.core.handlers import DIRECTIVES
from globaldefs.core.logging import Diagnostic, DiagnosticLogger, get_logger
from globaldefs.core.registry import DirectiveRegistry
from globaldefs.core.tokens import TokenLine


@dataclass(slots=True)
class ParseResult:
    snapshot: ConfigSnapshot
    diagnostics: list[Diagnostic] = field(default_factory=list)

    def as_dict(self) -> dict[str, object]:
        return {
            "config": self.snapshot.to_dict(),
            "diagnostics": [diagnostic.as_dict() for diagnostic in self.diagnostics],
        }


class GlobalDefsParser:
    """Dispatches token lines to the directive table for one feature profile.

    The registry is built once per parser; every :meth:`parse` call starts from
    a fresh default record, so repeated passes over the same lines produce
    equal snapshots.
    """

    def __init__(
        self,
        features: FeatureConfig | None = None,
        *,
        service_name: str = "globaldefs",
        publish_hook: Callable[[Diagnostic], None] | None = None,
    ) -> None:
        self.features = features or FeatureConfig()
        self.registry = DirectiveRegistry.for_features(self.features, DIRECTIVES)
        self.channel = DiagnosticLogger(
            logger=get_logger("globaldefs.parser"),
            service_name=service_name,
            publish_hook=publish_hook,
        )

    def builder(self, previous: ConfigSnapshot | None = None) -> ConfigBuilder:
        return ConfigBuilder(self.features, previous=previous, channel=self.channel)

    def parse(self, lines: Iterable[TokenLine], previous: ConfigSnapshot | None = None) -> ParseResult:
        builder = self.builder(previous)
        for line in lines:
            self.registry.dispatch(line, builder)
        return ParseResult(snapshot=builder.snapshot(), diagnostics=list(builder.diagnostics))
