"""Directive table: name to handler, built once per feature profile."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Iterator

from globaldefs.config.schema import FeatureConfig
from globaldefs.core.builder import ConfigBuilder
from globaldefs.core.tokens import TokenLine


Handler = Callable[[TokenLine, ConfigBuilder], None]


@dataclass(frozen=True, slots=True)
class Directive:
    name: str
    handler: Handler
    requires: tuple[str, ...] = ()
    min_args: int = 0
    missing: str | None = None

    def available(self, features: FeatureConfig) -> bool:
        return all(features.enabled(feature) for feature in self.requires)

    def __call__(self, line: TokenLine, builder: ConfigBuilder) -> None:
        if not line:
            return
        if not line.has_args(self.min_args):
            builder.report(line, self.missing or f"{self.name} requires an argument")
            return
        self.handler(line, builder)


class DirectiveRegistry:
    def __init__(self, directives: Iterable[Directive] = ()) -> None:
        self._table: dict[str, Directive] = {}
        for directive in directives:
            self.register(directive)

    @classmethod
    def for_features(cls, features: FeatureConfig, directives: Iterable[Directive]) -> DirectiveRegistry:
        return cls(directive for directive in directives if directive.available(features))

    def register(self, directive: Directive) -> None:
        if directive.name in self._table:
            raise ValueError(f"directive '{directive.name}' is already registered")
        self._table[directive.name] = directive

    def get(self, name: str) -> Directive | None:
        return self._table.get(name)

    def names(self) -> list[str]:
        return sorted(self._table)

    def __contains__(self, name: object) -> bool:
        return name in self._table

    def __iter__(self) -> Iterator[Directive]:
        return iter(self._table.values())

    def __len__(self) -> int:
        return len(self._table)

    def dispatch(self, line: TokenLine, builder: ConfigBuilder) -> bool:
        if not line:
            return False
        directive = self._table.get(line.directive)
        if directive is None:
            builder.report(line, f"Unknown keyword '{line.directive}'", value=line.directive)
            return False
        directive(line, builder)
        return True
