"""ContextVar-based parse configuration for blogmark.

Configuration is set once per parse and read by the tree builder wherever it
needs it, without threading flags through every constructor.

Usage:
    from blogmark.config import ParseConfig, parse_config_context

    with parse_config_context(ParseConfig(treat_soft_break_as_newline=True)):
        components = ComponentParser(source).parse()

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent
    storage, so two documents parsed concurrently never see each other's
    settings.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class ParseConfig:
    """Immutable parse configuration.

    Attributes:
        treat_soft_break_as_newline: Render soft line breaks as explicit
            line breaks instead of a single space. Hard breaks then become
            two line breaks so they stay distinguishable.
    """

    treat_soft_break_as_newline: bool = False

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any]) -> ParseConfig:
        """Create ParseConfig from a mapping.

        Unknown keys are ignored, so a whole site configuration section can be
        passed in as-is.

        Example:
            >>> ParseConfig.from_dict({"treat_soft_break_as_newline": True, "x": 1})
            ParseConfig(treat_soft_break_as_newline=True)
        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


_DEFAULT_CONFIG: ParseConfig = ParseConfig()

_parse_config: ContextVar[ParseConfig] = ContextVar(
    "blogmark_parse_config",
    default=_DEFAULT_CONFIG,
)


def get_parse_config() -> ParseConfig:
    """Get the parse configuration active in this context."""
    return _parse_config.get()


def set_parse_config(config: ParseConfig) -> None:
    """Set parse configuration for the current context."""
    _parse_config.set(config)


def reset_parse_config() -> None:
    """Reset to the default configuration."""
    _parse_config.set(_DEFAULT_CONFIG)


@contextmanager
def parse_config_context(config: ParseConfig) -> Iterator[None]:
    """Temporarily install a configuration.

    The previous configuration is restored even if the body raises.
    """
    previous = _parse_config.get()
    _parse_config.set(config)
    try:
        yield
    finally:
        _parse_config.set(previous)


__all__ = [
    "ParseConfig",
    "get_parse_config",
    "parse_config_context",
    "reset_parse_config",
    "set_parse_config",
]
