"""Routing configuration.

RoutingConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups. Each RouteTable owns one.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RoutingConfig:
    """Route table configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RoutingConfig(default_action="Home", lowercase_urls=True)
    """

    # Inbound paths
    virtual_root: str = "~"  # Marker for the application root: "~/users/42"
    default_method: str = "GET"

    # MVC conventions
    default_action: str = "Index"
    controller_suffix: str = "Controller"  # FunkyController -> "Funky"

    # Outbound URLs
    lowercase_urls: bool = False
    append_trailing_slash: bool = False
