"""Click parameter types backed by the value parsers."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import click

from ffrecipe.exceptions import ParseError


class ValueType(click.ParamType):
    """Parses a command-line string with one of the value parsers.

    Args:
        parser: Callable taking the raw string, e.g. ``Time.parse``.
        name: Metavar-style name shown in usage errors.
    """

    def __init__(self, parser: Callable[[str], Any], name: str) -> None:
        self.parser = parser
        self.name = name

    def convert(
        self, value: Any, param: click.Parameter | None, ctx: click.Context | None
    ) -> Any:
        if not isinstance(value, str):
            # Already converted, e.g. a default or a programmatic invoke
            return value
        try:
            return self.parser(value)
        except ParseError as e:
            self.fail(str(e), param, ctx)
