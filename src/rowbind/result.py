"""Explicit found/absent result for dynamic lookups."""

from dataclasses import dataclass
from typing import Any, Optional

from .exceptions import AttributeNotFoundError


@dataclass(frozen=True)
class Result:
    """Outcome of a lookup that may legitimately find nothing.

    A found result may still carry ``None`` as its value (an unset column),
    so callers test ``found`` (or truthiness) rather than the value.

    Attributes:
        found: Whether the lookup succeeded
        value: Resolved value (None when absent)
        name: Name that was looked up
        reason: Why the lookup failed (absent results only)
    """
    found: bool
    value: Any = None
    name: Optional[str] = None
    reason: Optional[str] = None

    @classmethod
    def ok(cls, value: Any, name: Optional[str] = None) -> "Result":
        """Build a found result."""
        return cls(True, value, name)

    @classmethod
    def absent(cls, name: str, reason: Optional[str] = None) -> "Result":
        """Build an absent result."""
        return cls(False, None, name, reason or f"{name!r} not found")

    def __bool__(self) -> bool:
        return self.found

    def unwrap(self) -> Any:
        """Return the value, or raise if the lookup failed.

        Raises:
            AttributeNotFoundError: If the result is absent
        """
        if not self.found:
            raise AttributeNotFoundError(self.reason, name=self.name)
        return self.value

    def value_or(self, default: Any) -> Any:
        """Return the value, or ``default`` if the lookup failed."""
        return self.value if self.found else default
