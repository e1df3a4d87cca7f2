"""Route test helpers for perch route tables.

Provides inbound route assertions, ignore-rule assertions and outbound
URL helpers. All public names are re-exported here::

    from perch.testing import action, assert_maps_to, route
"""

from perch.testing.assertions import (
    assert_ignored,
    assert_maps_to,
    assert_route_maps_to,
    assert_url,
    outbound_url,
    outbound_url_for_route,
    route,
)
from perch.testing.invocation import ActionCall, action
from perch.testing.origin import Origin, assertion_boundary

__all__ = [
    "ActionCall",
    "Origin",
    "action",
    "assert_ignored",
    "assert_maps_to",
    "assert_route_maps_to",
    "assert_url",
    "assertion_boundary",
    "outbound_url",
    "outbound_url_for_route",
    "route",
]
