"""Risk profiles and their annual net return assumptions."""
from __future__ import annotations

import json
import math
from dataclasses import dataclass
from typing import Dict, Mapping, Optional

PROFILE_TABLE_VERSION = "2026.02"
DEFAULT_PROFILE = "Balanced"


class UnknownProfile(LookupError):
    """Raised when a risk profile identifier is not in the table."""

    def __init__(self, name: str, known) -> None:
        self.name = name
        self.known = sorted(known)
        super().__init__(
            f"Unknown risk profile '{name}' (expected one of: {', '.join(self.known)})"
        )


class InvalidProfileTable(ValueError):
    """Raised when profile table data is incomplete or unordered."""


@dataclass(frozen=True)
class RiskProfile:
    name: str
    expected: float
    worst: float
    best: float

    def rates(self) -> Dict[str, float]:
        return {"expected": self.expected, "worst": self.worst, "best": self.best}


# Net annual returns after costs.
PROFILES: Dict[str, RiskProfile] = {
    "Conservative": RiskProfile("Conservative", expected=0.044, worst=0.024, best=0.054),
    "Balanced": RiskProfile("Balanced", expected=0.057, worst=0.032, best=0.072),
    "Ambitious": RiskProfile("Ambitious", expected=0.069, worst=0.039, best=0.084),
}


def get_profile(
    name: str, table: Optional[Mapping[str, RiskProfile]] = None
) -> RiskProfile:
    """Return the profile called ``name`` or raise :class:`UnknownProfile`."""

    source = PROFILES if table is None else table
    try:
        return source[name]
    except KeyError:
        raise UnknownProfile(name, source.keys()) from None


def profile_names(table: Optional[Mapping[str, RiskProfile]] = None):
    return list((PROFILES if table is None else table).keys())


def validate_profile_table(table: Mapping[str, RiskProfile]) -> None:
    """Check every entry is finite and ordered worst <= expected <= best."""

    if not table:
        raise InvalidProfileTable("Profile table is empty")
    for name, profile in table.items():
        values = (profile.worst, profile.expected, profile.best)
        if not all(math.isfinite(v) for v in values):
            raise InvalidProfileTable(f"Profile '{name}' has a non-finite rate")
        if not profile.worst <= profile.expected <= profile.best:
            raise InvalidProfileTable(
                f"Profile '{name}' must satisfy worst <= expected <= best "
                f"(got {profile.worst}, {profile.expected}, {profile.best})"
            )


def parse_profile_table(data: Mapping[str, Mapping[str, float]]) -> Dict[str, RiskProfile]:
    """Build a profile table from ``{name: {expected, worst, best}}`` data."""

    if not isinstance(data, Mapping):
        raise InvalidProfileTable("Profile table must be a JSON object")
    table: Dict[str, RiskProfile] = {}
    for name, entry in data.items():
        if not isinstance(entry, Mapping):
            raise InvalidProfileTable(f"Profile '{name}' must be an object of rates")
        missing = [key for key in ("expected", "worst", "best") if key not in entry]
        if missing:
            raise InvalidProfileTable(
                f"Profile '{name}' is missing rate(s): {', '.join(missing)}"
            )
        try:
            table[name] = RiskProfile(
                name,
                expected=float(entry["expected"]),
                worst=float(entry["worst"]),
                best=float(entry["best"]),
            )
        except (TypeError, ValueError) as exc:
            raise InvalidProfileTable(f"Profile '{name}' has a non-numeric rate") from exc
    validate_profile_table(table)
    return table


def load_profile_table(path: str) -> Dict[str, RiskProfile]:
    """Read and validate a JSON profile table from ``path``."""

    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as exc:
            raise InvalidProfileTable(f"{path}: {exc}") from exc
    return parse_profile_table(data)


__all__ = [
    "DEFAULT_PROFILE",
    "InvalidProfileTable",
    "PROFILES",
    "PROFILE_TABLE_VERSION",
    "RiskProfile",
    "UnknownProfile",
    "get_profile",
    "load_profile_table",
    "parse_profile_table",
    "profile_names",
    "validate_profile_table",
]
