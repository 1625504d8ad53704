"""Domain models for secret registration."""
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class SecretEntry:
    """One parsed key=value declaration."""
    key: str
    value: str
    line_number: int = 0

    def __repr__(self) -> str:
        # Keep values out of logs and tracebacks
        return f"SecretEntry(key={self.key!r}, line_number={self.line_number})"


@dataclass
class RegistrationResult:
    """Outcome of registering a single entry."""
    key: str
    succeeded: bool
    error: Optional[str] = None


@dataclass
class BatchReport:
    """Results of one batch run, in file order."""
    results: List[RegistrationResult] = field(default_factory=list)
    registered_names: List[str] = field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.results if r.succeeded)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if not r.succeeded)
