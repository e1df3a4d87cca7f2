"""Shared fixtures: the Funky route table used across the route tests."""

from collections.abc import Iterator

import pytest

from perch.routing.table import RouteTable


@pytest.fixture
def table() -> Iterator[RouteTable]:
    """Fresh route table per test, cleared again on teardown."""
    routes = RouteTable()
    routes.ignore_route("{resource}.gif/{*pathInfo}")
    routes.map_route(
        "default",
        "{controller}/{action}/{id}",
        {"controller": "Funky", "Action": "Index", "id": ""},
    )
    yield routes
    routes.clear()
