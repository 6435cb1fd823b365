from __future__ import annotations

import os
from typing import Callable

import pytest

from globaldefs.config.schema import FeatureConfig
from globaldefs.core.builder import ConfigBuilder
from globaldefs.core.handlers import DIRECTIVES
from globaldefs.core.registry import DirectiveRegistry
from globaldefs.core.tokens import TokenLine


# Optional subsystems default to off in the bundled settings; keep test runs
# independent of whatever the calling shell exports.
for _name in ("GLOBALDEFS_WITH_BFD", "GLOBALDEFS_WITH_SNMP", "GLOBALDEFS_WITH_DBUS"):
    os.environ.pop(_name, None)


@pytest.fixture
def builder() -> ConfigBuilder:
    return ConfigBuilder(FeatureConfig())


@pytest.fixture
def registry() -> DirectiveRegistry:
    return DirectiveRegistry.for_features(FeatureConfig(), DIRECTIVES)


@pytest.fixture
def apply(registry: DirectiveRegistry, builder: ConfigBuilder) -> Callable[..., ConfigBuilder]:
    """Dispatch one directive line into the shared builder."""

    def _apply(*tokens: str, block: tuple[str, ...] | None = None) -> ConfigBuilder:
        registry.dispatch(TokenLine.of(*tokens, block=block), builder)
        return builder

    return _apply


@pytest.fixture
def messages(builder: ConfigBuilder) -> Callable[[], list[str]]:
    def _messages() -> list[str]:
        return [diagnostic.message for diagnostic in builder.diagnostics]

    return _messages
