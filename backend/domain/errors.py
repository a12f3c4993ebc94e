"""
Exceptions raised by the domain layer.

Collisions are not errors: the engine reports them as Terminal results.
These exceptions cover misconfiguration and programming mistakes only.
"""


class ConfigurationError(ValueError):
    """Settings or board setup that the engine refuses to start with."""


class InvalidTransition(RuntimeError):
    """A phase change that is not in the allowed transition table."""

    def __init__(self, current, target):
        super().__init__(f"Cannot move from {current.value} to {target.value}")
        self.current = current
        self.target = target
