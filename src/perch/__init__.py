"""Perch — route assertions for MVC-style route tables.

Check that virtual paths resolve to the controller, action and arguments
you expect, that ignore rules swallow what they should, and that outbound
URL generation produces the URLs you expect.

Basic usage::

    from perch import Controller, RouteTable
    from perch.testing import action, assert_route_maps_to

    class FunkyController(Controller):
        def foo(self, id: int): ...

    table = RouteTable()
    table.map_route("default", "{controller}/{action}/{id}",
                    {"controller": "Funky", "action": "Index", "id": ""})

    assert_route_maps_to(table, "~/funky/foo/1234", FunkyController, action("Foo", 1234))
"""

__version__ = "0.1.0-dev"
__all__ = [
    "ActionMismatch",
    "ConfigurationError",
    "Controller",
    "ControllerMismatch",
    "NoRouteMatch",
    "ParameterMismatch",
    "PerchError",
    "Route",
    "RouteAssertionError",
    "RouteData",
    "RouteNotIgnored",
    "RouteTable",
    "RoutingConfig",
    "UrlMismatch",
]

# name -> module that defines it
_LAZY_IMPORTS: dict[str, str] = {
    "ActionMismatch": "perch.errors",
    "ConfigurationError": "perch.errors",
    "Controller": "perch.controller",
    "ControllerMismatch": "perch.errors",
    "NoRouteMatch": "perch.errors",
    "ParameterMismatch": "perch.errors",
    "PerchError": "perch.errors",
    "Route": "perch.routing.route",
    "RouteAssertionError": "perch.errors",
    "RouteData": "perch.routing.route",
    "RouteNotIgnored": "perch.errors",
    "RouteTable": "perch.routing.table",
    "RoutingConfig": "perch.config",
    "UrlMismatch": "perch.errors",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import perch`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)
