"""
Disambiguation algorithm.

Pure functions with no state of their own. The registry owns the set of issued
names and passes it in.
"""

from __future__ import annotations

from collections.abc import Container, Set

from .models import MAX_SUFFIX, START_SUFFIX, NameExhaustedError, SynthesisBase


def synthesis_base(prefix: str, separator: str, empty_marker: str = "") -> SynthesisBase:
    """
    Derive the stem and joined base used to synthesize names for ``prefix``.

    A non-empty prefix is joined to the separator. An empty prefix is replaced
    by the empty marker, or by the separator itself when no marker is
    configured, and no further separator is appended.
    """
    if prefix:
        return SynthesisBase(stem=prefix, joined_base=prefix + separator, from_prefix=True)
    stem = empty_marker or separator
    return SynthesisBase(stem=stem, joined_base=stem, from_prefix=False)


def probe(
    issued: Container[str],
    joined_base: str,
    start: int = START_SUFFIX,
    limit: int = MAX_SUFFIX,
) -> tuple[str, int]:
    """
    Find the first ``joined_base + N`` not in ``issued``, trying N from ``start``.

    Returns:
        The free name and the number it carries

    Raises:
        NameExhaustedError: if every N up to ``limit`` is taken
    """
    number = start
    while number <= limit:
        name = f"{joined_base}{number}"
        if name not in issued:
            return name, number
        number += 1
    raise NameExhaustedError(joined_base, limit)


def uniquify(
    issued: Set[str],
    candidate: str,
    prefix: str | None = None,
    separator: str = "_",
    empty_marker: str = "",
) -> tuple[str, frozenset[str]]:
    """
    Compute the name a registry holding ``issued`` would return for a candidate.

    Args:
        issued: Names already handed out
        candidate: The proposed name
        prefix: Stem for synthesized names; defaults to the candidate
        separator: String joining a stem to its number
        empty_marker: Stand-in stem for an empty prefix

    Returns:
        The new name and the issued set with that name added
    """
    if prefix is None:
        prefix = candidate
    if candidate and candidate not in issued:
        return candidate, frozenset(issued) | {candidate}
    base = synthesis_base(prefix, separator, empty_marker)
    name, _number = probe(issued, base.joined_base)
    return name, frozenset(issued) | {name}
