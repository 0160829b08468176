from __future__ import annotations

from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class ValidationIssue:
    """
    One user-correctable problem.

    ``code`` is stable (e.g. ``TABLE_EMPTY``, ``UPLOAD_SIZE``) and is what
    tests and callbacks branch on; ``message`` is shown to the user as-is.
    """
    code: str
    message: str


class ValidationError(Exception):
    """Raised when input is well-formed but cannot be accepted."""

    def __init__(self, issues: List[ValidationIssue]):
        self.issues = issues
        super().__init__("; ".join(f"[{i.code}] {i.message}" for i in issues))

    @classmethod
    def single(cls, code: str, message: str) -> ValidationError:
        return cls([ValidationIssue(code, message)])

    @property
    def codes(self) -> List[str]:
        return [i.code for i in self.issues]

    @property
    def user_message(self) -> str:
        return " ".join(i.message for i in self.issues)
