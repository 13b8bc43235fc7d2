from __future__ import annotations

from dataclasses import dataclass

# Largest numeric suffix a registry will try before giving up on a base.
MAX_SUFFIX = 2**64 - 1

# Every joined base starts probing at this number.
START_SUFFIX = 0


@dataclass(frozen=True, slots=True)
class SynthesisBase:
    """
    Where synthesized names for one prefix come from.

    Example:
        prefix "node", separator "_"  -> stem "node", joined_base "node_"
        prefix "",     separator "_"  -> stem "_",    joined_base "_"
        prefix "",     empty_marker "anon" -> stem "anon", joined_base "anon"
    """
    stem: str
    """The prefix, or its stand-in when the prefix is empty"""

    joined_base: str
    """The string that numeric suffixes are appended to"""

    from_prefix: bool
    """Whether the stem came from a non-empty prefix"""

    def candidate(self, number: int) -> str:
        return f"{self.joined_base}{number}"


class NameRegistryError(Exception):
    """Base class for errors raised by a name registry."""


class NameExhaustedError(NameRegistryError):
    """Raised when every numeric suffix for a joined base is already taken."""

    def __init__(self, joined_base: str, limit: int = MAX_SUFFIX) -> None:
        super().__init__(
            f"no free name left for base {joined_base!r} (suffixes 0..{limit} taken)"
        )
        self.joined_base = joined_base
        self.limit = limit
