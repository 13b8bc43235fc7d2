from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from ..config import RegistrySettings, Settings
from ..registry import NameRegistry

SAMPLE_SIZE = 3

OK = "OK"
WARNING = "WARNING"
ERROR = "ERROR"

# uniquify reads TAB-separated lines and writes one name per line
LINE_BREAKING = ("\t", "\n", "\r")


@dataclass(frozen=True, slots=True)
class Check:
    label: str
    status: str
    detail: Optional[str] = None

    def render(self) -> str:
        if self.detail:
            return f"{self.label}: {self.status} ({self.detail})"
        return f"{self.label}: {self.status}"


@dataclass(slots=True)
class DoctorReport:
    checks: list[Check] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(check.status != ERROR for check in self.checks)

    def lines(self) -> list[str]:
        return [check.render() for check in self.checks]


def _string_check(label: str, value: str, empty_status: str, empty_detail: str) -> Check:
    if any(char in value for char in LINE_BREAKING):
        return Check(label, ERROR, f"{value!r} contains a tab or line break; uniquify output would be unreadable")
    if not value:
        return Check(label, empty_status, empty_detail)
    if value[-1].isdigit():
        return Check(label, WARNING, f"{value!r} ends in a digit; numbered names are hard to read")
    return Check(label, OK, repr(value))


def _sample_names(registry_settings: RegistrySettings, candidate: str) -> list[str]:
    registry = NameRegistry.from_settings(registry_settings)
    return [registry.add_name(candidate) for _ in range(SAMPLE_SIZE)]


def run(settings: Settings, config_path: Optional[Path] = None) -> DoctorReport:
    report = DoctorReport()
    registry_settings = settings.registry

    if config_path is not None:
        report.checks.append(Check("Config", OK, str(config_path)))
    else:
        report.checks.append(Check("Config", OK, "defaults (no name-registry.yaml found)"))

    report.checks.append(
        _string_check("Separator", registry_settings.separator, WARNING, "empty; numbers are appended directly")
    )
    report.checks.append(
        _string_check("Empty marker", registry_settings.empty_marker, OK, "separator stands in for empty names")
    )

    if registry_settings.is_degenerate:
        report.checks.append(
            Check("Anonymous names", WARNING, "bare numbers (set separator or empty_marker)")
        )

    samples = _sample_names(registry_settings, "") + _sample_names(registry_settings, "name")
    report.checks.append(Check("Sample names", OK, ", ".join(repr(name) for name in samples)))
    return report
