"""Validation models: rules, violations and the per-call result.

The model is intentionally flat. A Violation carries a property name and a
message only; there is no severity, code or nested path.
"""

from typing import Any, Callable, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class Rule(BaseModel, Generic[T]):
    """A named predicate plus message.

    ``condition`` returns True when the target is INVALID. The name is used for
    reporting only and is never used to read the target.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    property_name: str
    condition: Callable[[Any], bool]
    error_message: str

    def fails(self, target: T) -> bool:
        return bool(self.condition(target))

    def to_violation(self) -> "Violation":
        return Violation(property_name=self.property_name, error_message=self.error_message)


class Violation(BaseModel):
    """A single reported failure."""

    model_config = ConfigDict(frozen=True)

    property_name: str
    error_message: str

    def __str__(self) -> str:
        return f"{self.property_name}: {self.error_message}"


class ValidationResult(BaseModel):
    """Outcome of one validate() call. Insertion order is evaluation order."""

    errors: list[Violation] = Field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def add_error(self, property_name: str, message: str) -> None:
        self.errors.append(Violation(property_name=property_name, error_message=message))

    def errors_for(self, property_name: str) -> list[Violation]:
        """Violations reported against one property, in evaluation order."""
        return [e for e in self.errors if e.property_name == property_name]

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        return {
            "is_valid": self.is_valid,
            "errors": [e.model_dump() for e in self.errors],
        }
