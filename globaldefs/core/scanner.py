"""Order-independent ``keyword value`` scanner for multi-option directives."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable

from globaldefs.config.schema import FeatureConfig
from globaldefs.core.builder import ConfigBuilder
from globaldefs.core.tokens import TokenLine


# Applies one value; returns a diagnostic message when the value is refused.
SubOptionApply = Callable[[str, ConfigBuilder], str | None]


@dataclass(frozen=True, slots=True)
class SubOption:
    keyword: str
    apply: SubOptionApply
    requires: tuple[str, ...] = ()

    def available(self, features: FeatureConfig) -> bool:
        return all(features.enabled(feature) for feature in self.requires)


class SubOptionScanner:
    """Scan ``keyword value`` pairs in any order.

    A recognised keyword consumes the following token as its value; a refused
    value is reported and the scan carries on with the next pair. An unknown
    keyword is reported and skipped on its own, without consuming a value. A
    recognised keyword in last position ends the scan.

    Options gated on a build feature are unknown keywords when the feature is
    disabled.
    """

    def __init__(self, directive: str, options: Iterable[SubOption]) -> None:
        self.directive = directive
        self.options = {option.keyword: option for option in options}

    @property
    def keywords(self) -> tuple[str, ...]:
        return tuple(self.options)

    def options_for(self, features: FeatureConfig) -> dict[str, SubOption]:
        return {keyword: option for keyword, option in self.options.items() if option.available(features)}

    def scan(self, line: TokenLine, start: int, builder: ConfigBuilder) -> None:
        options = self.options_for(builder.features)
        index = start
        count = len(line)
        while index < count:
            keyword = line[index]
            option = options.get(keyword)
            if option is None:
                builder.report(
                    line,
                    f"Unknown option {keyword} specified for {self.directive}",
                    value=keyword,
                )
                index += 1
                continue
            if index == count - 1:
                builder.report(line, f"No value specified for {self.directive} {keyword} - ignoring")
                return
            value = line[index + 1]
            error = option.apply(value, builder)
            if error is not None:
                builder.report(line, error, value=value)
            index += 2
