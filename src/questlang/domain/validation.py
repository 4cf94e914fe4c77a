"""Validation report shared by graph and module checks."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass(slots=True)
class ValidationReport:
    """Ordered human-readable findings.

    Only ``errors`` affect validity; ``warnings`` are lint-level notes.
    """

    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @classmethod
    def from_exception(cls, exc: BaseException) -> "ValidationReport":
        return cls(errors=[str(exc) or type(exc).__name__])
