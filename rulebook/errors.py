"""Usage errors raised by the rule engine.

These are developer-facing contract violations raised at registration time.
Failed business rules are never exceptions; they are Violations in the result.
"""

from typing import Optional


class RulebookError(Exception):
    """Base class for all engine usage errors."""


class PropertyExpressionError(RulebookError, ValueError):
    """A property selector could not be resolved to a single property reference."""

    def __init__(self, message: str = "Expression must be a property", argument: str = "selector",
                 selector: Optional[object] = None):
        self.argument = argument
        self.selector = selector
        super().__init__(f"{message} (argument: {argument})")


class InvalidStrategyError(RulebookError, TypeError):
    """Something other than a strategy was passed to add_strategy()."""

    def __init__(self, strategy: object):
        self.strategy = strategy
        super().__init__(
            f"Expected a BaseStrategy instance, got {type(strategy).__name__}"
        )
