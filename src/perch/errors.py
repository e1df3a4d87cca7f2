"""Perch exception hierarchy.

Shared across the route table, the controller helpers and the test
assertions so every module raises and catches the same types.

Assertion failures subclass both ``PerchError`` and ``AssertionError``
so ``pytest.raises(AssertionError)`` and test runners treat them as
ordinary test failures.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from perch.testing.origin import Origin


class PerchError(Exception):
    """Base for all perch-specific errors."""


class ConfigurationError(PerchError):
    """Raised when a route table, route pattern or action call is invalid.

    These are test-authoring mistakes, not route mismatches.
    """


class RouteAssertionError(PerchError, AssertionError):
    """A route assertion failed.

    Carries the expected and actual values and, once it has crossed a
    public helper boundary, the :class:`~perch.testing.origin.Origin`
    of the calling test.
    """

    def __init__(self, message: str, *, expected: Any = None, actual: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.expected = expected
        self.actual = actual
        self.origin: Origin | None = None

    @property
    def stack(self) -> tuple[str, ...]:
        """Formatted call stack of the failure, helper frames excluded."""
        if self.origin is None:
            return ()
        return (str(self.origin),)

    def __str__(self) -> str:
        if self.origin is None:
            return self.message
        return f"{self.message}\n{self.origin}"


class NoRouteMatch(RouteAssertionError):
    """No configured route matches the path (or generates a URL)."""


class RouteNotIgnored(RouteAssertionError):
    """The path was expected to hit an ignore rule but did not."""


class ControllerMismatch(RouteAssertionError):
    """The route resolved to a different controller."""


class ActionMismatch(RouteAssertionError):
    """The route resolved to a different action."""


class ParameterMismatch(RouteAssertionError):
    """A route value differs from the expected action argument."""

    def __init__(
        self,
        message: str,
        *,
        parameter: str,
        expected: Any = None,
        actual: Any = None,
    ) -> None:
        super().__init__(message, expected=expected, actual=actual)
        self.parameter = parameter


class UrlMismatch(RouteAssertionError):
    """A generated URL differs from the expected one."""
