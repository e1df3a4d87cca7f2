"""Controller base class and MVC naming conventions.

Controllers are plain classes whose public methods are actions::

    class FunkyController(Controller):
        def index(self): ...
        def foo(self, id: int): ...

Perch never instantiates or dispatches to controllers; it only reads
their names and action signatures.
"""

import inspect
from collections.abc import Callable
from typing import Any

from perch.errors import ConfigurationError


class Controller:
    """Base class for MVC controllers.

    Action lookup is case-insensitive, so a route value of ``"Foo"``
    finds the ``foo`` method.
    """

    @classmethod
    def find_action(cls, name: str) -> Callable[..., Any] | None:
        """Return the action function called *name*, or ``None``."""
        return find_action(cls, name)

    @classmethod
    def controller_name(cls, suffix: str = "Controller") -> str:
        """Return the route value for this controller (suffix stripped)."""
        return controller_name(cls, suffix)


def controller_name(controller: type, suffix: str = "Controller") -> str:
    """Return the ``controller`` route value for a controller class.

    ``FunkyController`` -> ``"Funky"``. A class named exactly like the
    suffix keeps its name.
    """
    if not isinstance(controller, type):
        msg = f"Expected a controller class, got {controller!r}"
        raise ConfigurationError(msg)
    name = controller.__name__
    if suffix and name.endswith(suffix) and len(name) > len(suffix):
        return name[: -len(suffix)]
    return name


def find_action(controller: type, name: str) -> Callable[..., Any] | None:
    """Find a public action method on *controller* by case-insensitive name."""
    if not isinstance(controller, type):
        msg = f"Expected a controller class, got {controller!r}"
        raise ConfigurationError(msg)
    wanted = name.lower()
    for klass in controller.__mro__:
        if klass is Controller or klass is object:
            continue
        for attr, value in vars(klass).items():
            if attr.startswith("_") or attr.lower() != wanted:
                continue
            if inspect.isfunction(value):
                return value
    return None
