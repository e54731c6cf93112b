"""Filter graph builder.

A graph is an ordered list of chains. Each chain reads zero or more input
pads, applies comma-separated filters, and writes zero or more named
output pads::

    [0:v]scale=320:240[v0];[v0][v1]hstack=inputs=2[row0]

Pads that name an input stream (``0:v``, ``1:a:0``) may be read any number
of times. Every other pad is an intermediate label: it must be produced
exactly once and consumed exactly once, either by a later chain or by an
explicit ``-map``. ``render`` checks this before emitting the text.
"""

from __future__ import annotations

import re
from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from ffrecipe.exceptions import PreconditionError

_STREAM_SPECIFIER_RE = re.compile(r"^\d+(?::[vas])?(?::\d+)?$")


def is_stream_specifier(label: str) -> bool:
    """Return True if ``label`` names an input stream rather than a pad."""
    return _STREAM_SPECIFIER_RE.match(label) is not None


def pad(label: str) -> str:
    """Wrap a label in brackets, e.g. ``v`` -> ``[v]``."""
    return f"[{label}]"


@dataclass(frozen=True)
class Chain:
    """One ``[in]...filter,filter...[out]`` fragment."""

    filters: tuple[str, ...]
    inputs: tuple[str, ...] = ()
    outputs: tuple[str, ...] = ()

    def render(self) -> str:
        return (
            "".join(pad(label) for label in self.inputs)
            + ",".join(self.filters)
            + "".join(pad(label) for label in self.outputs)
        )


class FilterGraph:
    """Ordered filter graph with pad bookkeeping."""

    def __init__(self) -> None:
        self._chains: list[Chain] = []

    def chain(
        self,
        filters: str | Sequence[str],
        inputs: Iterable[str] = (),
        outputs: Iterable[str] = (),
    ) -> FilterGraph:
        """Append a chain and return self for fluent use."""
        if isinstance(filters, str):
            filters = (filters,)
        filters = tuple(f for f in filters if f)
        if not filters:
            raise PreconditionError("A filter chain needs at least one filter")
        self._chains.append(Chain(filters, tuple(inputs), tuple(outputs)))
        return self

    def __len__(self) -> int:
        return len(self._chains)

    @property
    def chains(self) -> tuple[Chain, ...]:
        return tuple(self._chains)

    def validate(self, mapped: Iterable[str] = ()) -> None:
        """Check that every intermediate pad is produced and consumed once.

        Args:
            mapped: Labels consumed by ``-map`` options on the command line.

        Raises:
            PreconditionError: On a dangling, duplicated or unknown pad.
        """
        if not self._chains:
            raise PreconditionError("Filter graph is empty")

        produced: Counter[str] = Counter()
        consumed: Counter[str] = Counter()
        for chain in self._chains:
            for label in chain.inputs:
                if is_stream_specifier(label):
                    continue
                if produced[label] == 0:
                    raise PreconditionError(
                        f"Filter pad [{label}] is read before it is produced"
                    )
                consumed[label] += 1
            for label in chain.outputs:
                if is_stream_specifier(label):
                    raise PreconditionError(
                        f"Filter pad [{label}] collides with an input stream"
                    )
                produced[label] += 1
        for label in mapped:
            consumed[label] += 1

        for label, count in produced.items():
            if count > 1:
                raise PreconditionError(f"Filter pad [{label}] is produced {count} times")
            if consumed[label] == 0:
                raise PreconditionError(f"Filter pad [{label}] is never consumed")
            if consumed[label] > 1:
                raise PreconditionError(
                    f"Filter pad [{label}] is consumed {consumed[label]} times"
                )
        unknown = sorted(set(consumed) - set(produced))
        if unknown:
            raise PreconditionError(f"Mapped pad [{unknown[0]}] is never produced")

    def render(self, mapped: Iterable[str] = ()) -> str:
        """Validate and join the chains with ``;``."""
        self.validate(mapped)
        return ";".join(chain.render() for chain in self._chains)


def simple_chain(*filters: str) -> str:
    """Render a label-free filter chain for ``-vf``/``-af``."""
    return FilterGraph().chain(filters).render()
