"""Configuration errors."""

from typing import Iterable, Optional


class ConfigurationError(Exception):
    """SDK credentials or settings are missing or invalid.

    Raised at setup time (client construction, from_env()), never from an
    operation. ``errors`` lists every problem found, so all of them can be
    fixed in one pass. ``hints`` tells the caller where to look.
    """

    def __init__(
        self,
        message: str,
        errors: Optional[Iterable[str]] = None,
        hints: Optional[Iterable[str]] = None,
    ):
        self.message = message
        self.errors = list(errors or [])
        self.hints = list(hints or [])
        super().__init__(message)

    def __str__(self) -> str:
        lines = [f"{self.message} ({len(self.errors)} problem(s))" if self.errors else self.message]
        lines.extend(f"  - {error}" for error in self.errors)
        if self.hints:
            lines.append("Hints:")
            lines.extend(f"  * {hint}" for hint in self.hints)
        return "\n".join(lines)
