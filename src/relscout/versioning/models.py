"""Data models for version resolution."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ResolutionMode(Enum):
    """How a batch of packages is resolved."""
    SERIAL = "serial"
    CONCURRENT = "concurrent"


@dataclass(frozen=True)
class ResolutionResult:
    """Resolution outcome for one package; ``version`` is None when absent."""
    package: str
    version: Optional[str]

    @property
    def absent(self) -> bool:
        """True when no version could be determined."""
        return self.version is None
