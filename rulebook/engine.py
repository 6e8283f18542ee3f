"""Validator engine — registers rules, expands strategies, evaluates targets.

Evaluation runs in two phases:
    1. static: every registered Rule, in registration order
    2. dynamic: one optional hook ``hook(target, sink)`` for cross-field logic

Rules and strategies added through the sink during the dynamic phase are
evaluated against the current target immediately and are not kept in the
registry, so no state carries over between validate() calls.

Usage:
    validator = (
        Validator(name="orders")
        .add_rule(P.price, lambda o: o.price <= 0, "Price must be greater than 0")
        .add_strategy(VipStrategy())
    )
    result = validator.validate(order)
    if not result.is_valid:
        ...
"""

import time
from typing import Any, Callable, Generic, Iterable, Optional, TypeVar

import structlog
from pydantic import BaseModel, ConfigDict, Field

from rulebook.config import get_settings
from rulebook.errors import InvalidStrategyError
from rulebook.models import Rule, ValidationResult
from rulebook.selectors import Selector, resolve_property_name
from rulebook.strategies import BaseStrategy, StrategyContext

logger = structlog.get_logger(__name__)

T = TypeVar("T")


def _expand(strategy: BaseStrategy, context: StrategyContext) -> list[Rule]:
    if not isinstance(strategy, BaseStrategy):
        raise InvalidStrategyError(strategy)
    return list(strategy.rules(context))


class ValidationSink(Generic[T]):
    """Write access to the in-flight result, handed to the dynamic hook."""

    def __init__(self, target: T, result: ValidationResult, context: Optional[StrategyContext] = None):
        self._target = target
        self._result = result
        self._context = context

    def add_error(self, property_name: str, message: str) -> "ValidationSink[T]":
        self._result.add_error(property_name, message)
        return self

    def add_rule(self, selector: Selector, condition: Callable[[T], bool], message: str) -> "ValidationSink[T]":
        """Evaluate a one-off rule against the current target right away."""
        rule = Rule(property_name=resolve_property_name(selector), condition=condition, error_message=message)
        self._apply(rule)
        return self

    def add_strategy(self, strategy: BaseStrategy, context: Optional[StrategyContext] = None) -> "ValidationSink[T]":
        """Expand a strategy and evaluate each of its rules in order, right away."""
        for rule in _expand(strategy, context or self._context or StrategyContext()):
            self._apply(rule)
        return self

    def _apply(self, rule: Rule) -> None:
        if rule.fails(self._target):
            self._result.errors.append(rule.to_violation())


DynamicHook = Callable[[Any, ValidationSink], None]


class ValidatorConfig(BaseModel):
    """A domain validator expressed as a value instead of a subclass."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: Optional[str] = None
    rules: list[Rule] = Field(default_factory=list)
    strategies: list[BaseStrategy] = Field(default_factory=list)
    dynamic: Optional[DynamicHook] = None
    context: Optional[StrategyContext] = None


class Validator(Generic[T]):
    """Owns an ordered rule registry and validates targets against it.

    Duplicate and blank property names are accepted as-is. The registry is not
    safe for concurrent mutation; once configured, a validator may be shared
    for concurrent validate() calls since each call owns its own result.
    """

    def __init__(
        self,
        rules: Optional[Iterable[Rule]] = None,
        dynamic: Optional[DynamicHook] = None,
        context: Optional[StrategyContext] = None,
        name: Optional[str] = None,
    ):
        """Initialize the validator.

        Args:
            rules: Initial rules, kept in order
            dynamic: Optional hook(target, sink) run after the static rules
            context: Default context for strategies; a fresh one (today's date) if None
            name: Name used in log events
        """
        self.name = name or type(self).__name__
        self.dynamic = dynamic
        self.context = context
        self._rules: list[Rule] = list(rules or ())

    @classmethod
    def from_config(cls, config: ValidatorConfig) -> "Validator":
        validator = cls(rules=config.rules, dynamic=config.dynamic, context=config.context, name=config.name)
        for strategy in config.strategies:
            validator.add_strategy(strategy)
        return validator

    @property
    def rules(self) -> tuple[Rule, ...]:
        return tuple(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    # ── Registration ──

    def add_rule(self, selector: Selector, condition: Callable[[T], bool], message: str) -> "Validator[T]":
        """Append a rule; ``condition`` returning True means the target is invalid.

        Raises:
            PropertyExpressionError: if ``selector`` is not a direct property read
        """
        property_name = resolve_property_name(selector)
        self._rules.append(Rule(property_name=property_name, condition=condition, error_message=message))
        logger.debug("rule_registered", validator=self.name, property=property_name)
        return self

    def add_strategy(self, strategy: BaseStrategy, context: Optional[StrategyContext] = None) -> "Validator[T]":
        """Expand a strategy now and append its rules in the order it yields them."""
        produced = _expand(strategy, context or self.context or StrategyContext())
        self._rules.extend(produced)
        logger.debug(
            "strategy_registered",
            validator=self.name,
            strategy=strategy.name,
            rule_count=len(produced),
        )
        return self

    # ── Evaluation ──

    def validate(self, target: T) -> ValidationResult:
        """Run every rule, then the dynamic hook, and return all violations.

        Exceptions raised by a condition or by the hook propagate unchanged.
        """
        start_time = time.perf_counter()
        result = ValidationResult()

        for rule in self._rules:
            if rule.fails(target):
                result.errors.append(rule.to_violation())

        if self.dynamic is not None:
            self.dynamic(target, ValidationSink(target, result, self.context))

        settings = get_settings()
        if settings.LOG_VIOLATIONS:
            for violation in result.errors:
                logger.debug(
                    "violation",
                    validator=self.name,
                    property=violation.property_name,
                    message=violation.error_message,
                )

        logger.info(
            "validation_complete",
            validator=self.name,
            is_valid=result.is_valid,
            total_errors=len(result.errors),
            rule_count=len(self._rules),
            duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
        )
        return result

    def validate_many(self, targets: Iterable[T]) -> list[ValidationResult]:
        """Validate each target independently, in order."""
        return [self.validate(target) for target in targets]
