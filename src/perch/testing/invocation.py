"""Expected action invocations.

An :class:`ActionCall` names an action and the arguments a test expects
it to receive, e.g. ``action("Foo", 1234)``. Binding it against a
controller resolves the action method and pairs each declared parameter
with its expected value.
"""

import inspect
import typing
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from perch.controller import find_action
from perch.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class BoundAction:
    """An :class:`ActionCall` bound to a controller's action method."""

    function: Callable[..., Any]
    arguments: dict[str, Any]
    supplied: frozenset[str]
    hints: dict[str, Any]
    defaults: dict[str, Any]

    def target_type(self, name: str) -> Any:
        """Annotated type of parameter *name*; unannotated means ``str``."""
        return self.hints.get(name, str)


@dataclass(frozen=True, slots=True)
class ActionCall:
    """An action name plus the arguments it is expected to be called with."""

    name: str
    args: tuple[Any, ...] = ()
    kwargs: Mapping[str, Any] = field(default_factory=dict)

    def bind(self, controller: type) -> BoundAction:
        """Bind the arguments to the action's signature on *controller*.

        Raises ``ConfigurationError`` if the action does not exist or the
        arguments do not fit its signature.
        """
        function = find_action(controller, self.name)
        if function is None:
            msg = f"{controller.__name__} has no action named {self.name!r}."
            raise ConfigurationError(msg)

        signature = _action_signature(function)
        try:
            bound = signature.bind(*self.args, **self.kwargs)
        except TypeError as exc:
            msg = f"Arguments do not fit {controller.__name__}.{function.__name__}{signature}: {exc}"
            raise ConfigurationError(msg) from exc
        supplied = frozenset(bound.arguments)
        bound.apply_defaults()

        arguments: dict[str, Any] = {}
        defaults: dict[str, Any] = {}
        hints = _type_hints(function, signature)
        for name, param in signature.parameters.items():
            if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
                continue
            arguments[name] = bound.arguments[name]
            if param.default is not param.empty:
                defaults[name] = param.default

        return BoundAction(
            function=function,
            arguments=arguments,
            supplied=supplied,
            hints=hints,
            defaults=defaults,
        )

    def __str__(self) -> str:
        rendered = [repr(a) for a in self.args]
        rendered.extend(f"{k}={v!r}" for k, v in self.kwargs.items())
        return f"{self.name}({', '.join(rendered)})"


def action(name: str, *args: Any, **kwargs: Any) -> ActionCall:
    """Describe an expected action call::

        action("Index")
        action("Bar", "widget")
        action("Foo", id=1234)
    """
    return ActionCall(name=name, args=args, kwargs=kwargs)


def _action_signature(function: Callable[..., Any]) -> inspect.Signature:
    """Signature of an action method without its ``self`` parameter."""
    signature = inspect.signature(function)
    params = list(signature.parameters.values())
    if params and params[0].kind in (
        inspect.Parameter.POSITIONAL_ONLY,
        inspect.Parameter.POSITIONAL_OR_KEYWORD,
    ):
        params = params[1:]
    return signature.replace(parameters=params)


def _type_hints(function: Callable[..., Any], signature: inspect.Signature) -> dict[str, Any]:
    """Resolved parameter annotations, falling back to the raw ones."""
    try:
        hints = typing.get_type_hints(function)
    except (NameError, TypeError):
        hints = {}
    result: dict[str, Any] = {}
    for name, param in signature.parameters.items():
        if name in hints:
            result[name] = hints[name]
        elif param.annotation is not param.empty:
            result[name] = param.annotation
    return result
