"""Rulebook — embeddable rule-based validation engine.

Usage:
    from rulebook import Validator, P

    validator = Validator().add_rule(P.price, lambda o: o.price <= 0, "Price must be greater than 0")
    result = validator.validate(order)
    if not result.is_valid:
        for error in result.errors:
            print(error.property_name, error.error_message)
"""

from rulebook.engine import Validator, ValidatorConfig, ValidationSink
from rulebook.errors import InvalidStrategyError, PropertyExpressionError, RulebookError
from rulebook.models import Rule, ValidationResult, Violation
from rulebook.selectors import P, PropertyRef, prop, resolve_property_name
from rulebook.strategies import BaseStrategy, RuleSetStrategy, StrategyContext

__version__ = "0.1.0"

__all__ = [
    "Validator",
    "ValidatorConfig",
    "ValidationSink",
    "Rule",
    "Violation",
    "ValidationResult",
    "BaseStrategy",
    "RuleSetStrategy",
    "StrategyContext",
    "P",
    "PropertyRef",
    "prop",
    "resolve_property_name",
    "RulebookError",
    "PropertyExpressionError",
    "InvalidStrategyError",
]
