"""Strategies — named, reusable producers of rule batches.

Each strategy is a standalone, independently testable unit. Environmental
facts a strategy depends on (the current day, caller configuration) arrive
through an explicit StrategyContext rather than hidden instance state.
"""

from abc import ABC, abstractmethod
from datetime import date
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from rulebook.models import Rule


class StrategyContext(BaseModel):
    """Immutable facts handed to a strategy when it produces rules.

    ``values`` is stored as a read-only copy. Contexts are not hashable since
    arbitrary caller values may not be.
    """

    model_config = ConfigDict(frozen=True)

    today: date = Field(default_factory=date.today)
    values: Mapping[str, Any] = Field(default_factory=lambda: MappingProxyType({}))

    @field_validator("values")
    @classmethod
    def freeze_values(cls, v: Mapping[str, Any]) -> Mapping[str, Any]:
        return MappingProxyType(dict(v))

    @property
    def is_weekend(self) -> bool:
        # Saturday and Sunday
        return self.today.weekday() >= 5

    def get(self, key: str, default: Any = None) -> Any:
        return self.values.get(key, default)


class BaseStrategy(ABC):
    """Abstract base for all rule strategies.

    Contract:
        - rules() is deterministic: same context → same ordered rules
        - rules() is restartable: every call yields the rules afresh
        - rules() yields a finite sequence
    """

    @property
    def name(self) -> str:
        """Human-readable name for logging."""
        return type(self).__name__

    @abstractmethod
    def rules(self, context: StrategyContext) -> Iterable[Rule]:
        """Produce the strategy's rules for the given context."""
        ...

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"


class RuleSetStrategy(BaseStrategy):
    """Strategy wrapping a fixed list of rules, independent of context."""

    def __init__(self, name: str, rules: Optional[Iterable[Rule]] = None):
        self._name = name
        self._rules = tuple(rules or ())

    @property
    def name(self) -> str:
        return self._name

    def rules(self, context: StrategyContext) -> Iterator[Rule]:
        yield from self._rules
