"""
Name registry - hands out names that are unique for the registry's lifetime.

A registry remembers every name it has returned. Unused candidates pass through
unchanged; empty or already-issued ones are replaced by a synthesized name of
the form ``<prefix><separator><N>``.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from threading import RLock
from typing import TYPE_CHECKING, Union

from .models import MAX_SUFFIX, START_SUFFIX
from .naming import probe, synthesis_base

if TYPE_CHECKING:
    from .config import RegistrySettings

NameRequest = Union[str, tuple[str, str]]


class NameRegistry:
    """
    Issues collision-free names derived from caller-supplied candidates.

    Not safe for concurrent mutation; wrap calls in a lock or use
    ``SynchronizedNameRegistry`` when a registry is shared between threads.
    """

    def __init__(
        self,
        separator: str = "_",
        empty_marker: str = "",
        *,
        max_suffix: int = MAX_SUFFIX,
    ) -> None:
        """
        Initialize an empty registry.

        Args:
            separator: String placed between a prefix and its number
            empty_marker: Stem used instead of an empty prefix; when empty the
                separator stands in for it
            max_suffix: Largest number tried for any one base
        """
        self._separator = separator
        self._empty_marker = empty_marker
        self._max_suffix = max_suffix
        self._issued: set[str] = set()
        # joined base -> lowest number not yet known to be taken
        self._counters: dict[str, int] = {}

    @classmethod
    def from_settings(cls, settings: RegistrySettings) -> "NameRegistry":
        return cls(separator=settings.separator, empty_marker=settings.empty_marker)

    @property
    def separator(self) -> str:
        return self._separator

    @property
    def empty_marker(self) -> str:
        return self._empty_marker

    @property
    def issued(self) -> frozenset[str]:
        """Snapshot of every name issued or reserved so far."""
        return frozenset(self._issued)

    def add_name(self, candidate: str, prefix: str | None = None) -> str:
        """
        Return a name no earlier call has returned, and record it.

        Args:
            candidate: The proposed name; returned as-is when non-empty and unused
            prefix: Stem for a synthesized name; defaults to ``candidate``

        Returns:
            The issued name

        Raises:
            NameExhaustedError: if no numeric suffix is left for the base
        """
        if candidate and candidate not in self._issued:
            self._issued.add(candidate)
            return candidate
        if prefix is None:
            prefix = candidate
        base = synthesis_base(prefix, self._separator, self._empty_marker)
        start = self._counters.get(base.joined_base, START_SUFFIX)
        name, number = probe(self._issued, base.joined_base, start, self._max_suffix)
        self._counters[base.joined_base] = number + 1
        self._issued.add(name)
        return name

    def add_names(self, requests: Iterable[NameRequest]) -> list[str]:
        """
        Issue a name for each request, in order.

        A request is a candidate string or a ``(candidate, prefix)`` pair.
        """
        names = []
        for request in requests:
            if isinstance(request, str):
                names.append(self.add_name(request))
            else:
                candidate, prefix = request
                names.append(self.add_name(candidate, prefix))
        return names

    def reserve(self, name: str) -> bool:
        """
        Mark ``name`` as taken without issuing it through ``add_name``.

        Returns:
            False if the name was already taken
        """
        if not name:
            raise ValueError("cannot reserve an empty name")
        if name in self._issued:
            return False
        self._issued.add(name)
        return True

    def __contains__(self, name: object) -> bool:
        return name in self._issued

    def __len__(self) -> int:
        return len(self._issued)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._issued))

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(separator={self._separator!r}, "
            f"empty_marker={self._empty_marker!r}, issued={len(self._issued)})"
        )


class SynchronizedNameRegistry(NameRegistry):
    """Name registry whose operations are serialized by a lock."""

    def __init__(
        self,
        separator: str = "_",
        empty_marker: str = "",
        *,
        max_suffix: int = MAX_SUFFIX,
    ) -> None:
        super().__init__(separator, empty_marker, max_suffix=max_suffix)
        self._lock = RLock()

    @property
    def issued(self) -> frozenset[str]:
        with self._lock:
            return frozenset(self._issued)

    def add_name(self, candidate: str, prefix: str | None = None) -> str:
        with self._lock:
            return super().add_name(candidate, prefix)

    def add_names(self, requests: Iterable[NameRequest]) -> list[str]:
        # Held across the batch so its names come out contiguous.
        requests = list(requests)
        with self._lock:
            return super().add_names(requests)

    def reserve(self, name: str) -> bool:
        with self._lock:
            return super().reserve(name)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._issued

    def __len__(self) -> int:
        with self._lock:
            return len(self._issued)

    def __iter__(self) -> Iterator[str]:
        with self._lock:
            snapshot = sorted(self._issued)
        return iter(snapshot)
