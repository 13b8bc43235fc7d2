from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from dataclasses import asdict, dataclass
from typing import Optional, TextIO

from ..registry import NameRegistry

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class IssuedName:
    candidate: str
    prefix: Optional[str]
    name: str

    @property
    def renamed(self) -> bool:
        return self.name != self.candidate


def parse_line(line: str) -> tuple[str, Optional[str]]:
    """Split ``candidate<TAB>prefix``; a line without a tab has no explicit prefix."""
    line = line.rstrip("\r\n")
    if "\t" in line:
        candidate, prefix = line.split("\t", 1)
        return candidate, prefix
    return line, None


def run(
    registry: NameRegistry,
    lines: Iterable[str],
    out: TextIO,
    *,
    reserved: Iterable[str] = (),
    json_output: bool = False,
) -> list[IssuedName]:
    for name in reserved:
        if not registry.reserve(name):
            logger.warning("Reserved name %r listed more than once", name)

    results: list[IssuedName] = []
    for line in lines:
        candidate, prefix = parse_line(line)
        issued = registry.add_name(candidate, prefix)
        result = IssuedName(candidate=candidate, prefix=prefix, name=issued)
        if result.renamed:
            logger.debug("Renamed %r -> %r", candidate, issued)
        results.append(result)
        if not json_output:
            out.write(issued + "\n")

    if json_output:
        json.dump([asdict(result) for result in results], out, indent=2)
        out.write("\n")
    renamed = sum(1 for result in results if result.renamed)
    logger.info("Issued %d name(s), %d renamed", len(results), renamed)
    return results
