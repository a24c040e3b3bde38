"""Province lookup models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ProvinceResolution:
    """Result of resolving a province code."""

    code: str
    name: str
    known: bool
