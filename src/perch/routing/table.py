"""Ordered route table with inbound matching and outbound URL generation.

Rules are tried in registration order and the first match wins, both
when resolving a path and when generating a URL. A table is ordinary
per-test state: build one in a fixture and ``clear()`` it afterwards.
"""

import logging
import re
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote, unquote, urlencode

from perch.config import RoutingConfig
from perch.errors import ConfigurationError
from perch.routing.pattern import parse_pattern
from perch.routing.route import PathSegment, Route, RouteData, RouteValues

logger = logging.getLogger("perch.routing")


class RouteTable:
    """Route table for MVC-style URL patterns.

    Usage::

        table = RouteTable()
        table.ignore_route("{resource}.gif/{*pathInfo}")
        table.map_route(
            "default",
            "{controller}/{action}/{id}",
            {"controller": "Funky", "action": "Index", "id": ""},
        )
        data = table.match("~/funky/foo/1234")
        url = table.generate_url({"controller": "Funky", "action": "New"})
    """

    __slots__ = ("_routes", "config")

    def __init__(self, config: RoutingConfig | None = None) -> None:
        self.config = config or RoutingConfig()
        self._routes: list[Route] = []

    # -- Registration -------------------------------------------------------

    def map_route(
        self,
        name: str | None,
        pattern: str,
        defaults: Mapping[str, Any] | None = None,
        *,
        constraints: Mapping[str, str] | None = None,
        methods: frozenset[str] | set[str] | tuple[str, ...] | None = None,
    ) -> Route:
        """Register a route and return it.

        Raises ``ConfigurationError`` for malformed patterns or a
        duplicate route name.
        """
        if name is not None and any(r.name == name for r in self._routes):
            msg = f"A route named {name!r} is already registered."
            raise ConfigurationError(msg)
        route = Route(
            pattern=pattern,
            segments=parse_pattern(pattern),
            name=name,
            defaults=RouteValues(defaults or {}),
            constraints=dict(constraints or {}),
            methods=frozenset(m.upper() for m in methods) if methods is not None else None,
        )
        self._routes.append(route)
        return route

    def ignore_route(self, pattern: str, *, constraints: Mapping[str, str] | None = None) -> Route:
        """Register a rule whose matching paths are deliberately unhandled."""
        route = Route(
            pattern=pattern,
            segments=parse_pattern(pattern),
            constraints=dict(constraints or {}),
            ignore=True,
        )
        self._routes.append(route)
        return route

    def clear(self) -> None:
        """Remove every rule."""
        self._routes.clear()

    @property
    def routes(self) -> tuple[Route, ...]:
        """All rules, in registration order."""
        return tuple(self._routes)

    def named(self, name: str) -> Route:
        """Return the route registered as *name*. Raises ``KeyError``."""
        for route in self._routes:
            if route.name == name:
                return route
        raise KeyError(name)

    def __len__(self) -> int:
        return len(self._routes)

    # -- Inbound ------------------------------------------------------------

    def match(self, path: str, method: str | None = None) -> RouteData | None:
        """Resolve a virtual path (``~/funky/foo/1234``) to route data.

        Returns ``None`` when no rule matches. Ignore rules match like any
        other rule; check ``RouteData.is_ignored``.
        """
        parts = self._split(path)
        verb = (method or self.config.default_method).upper()

        for route in self._routes:
            values = _match_route(route, parts, verb)
            if values is not None:
                logger.debug(
                    "%s %r matched %s %r",
                    verb,
                    path,
                    "ignore rule" if route.ignore else "route",
                    route.name or route.pattern,
                )
                return RouteData(values, route=route, path=path, config=self.config)

        logger.debug("%s %r matched no route", verb, path)
        return None

    def is_ignored(self, path: str, method: str | None = None) -> bool:
        """True when the first rule matching *path* is an ignore rule."""
        data = self.match(path, method)
        return data is not None and data.is_ignored

    def _split(self, path: str) -> list[str]:
        root = self.config.virtual_root
        if path != root and not path.startswith(root + "/"):
            msg = f"Path {path!r} must start with the virtual root {root + '/'!r}."
            raise ConfigurationError(msg)
        relative = path[len(root) :].split("?", 1)[0].strip("/")
        if not relative:
            return []
        return [unquote(p) for p in relative.split("/")]

    # -- Outbound -----------------------------------------------------------

    def generate_url(
        self,
        values: Mapping[str, Any] | None = None,
        *,
        route_name: str | None = None,
    ) -> str | None:
        """Build the shortest URL that routes back to *values*.

        Parameters equal to their defaults are dropped from the end of the
        URL; leftover values become the query string. Returns ``None`` when
        no rule can produce a URL.
        """
        explicit = RouteValues(
            (k, v) for k, v in (values or {}).items() if v is not None and v != ""
        )
        if route_name is not None:
            try:
                candidates = [self.named(route_name)]
            except KeyError:
                msg = f"No route named {route_name!r} is registered."
                raise ConfigurationError(msg) from None
        else:
            candidates = self._routes

        for route in candidates:
            if route.ignore:
                continue
            url = self._build(route, explicit)
            if url is not None:
                logger.debug("Generated %r from route %r", url, route.name or route.pattern)
                return url

        logger.debug("No route generates a URL for %r", dict(explicit))
        return None

    def _build(self, route: Route, explicit: RouteValues) -> str | None:
        defaults = route.defaults
        pattern_names = {name.lower() for name in route.param_names}

        # Values that only exist as defaults pin the route to them
        for key, default in defaults.items():
            if key.lower() not in pattern_names and key in explicit:
                if not _same(explicit[key], default):
                    return None

        resolved: dict[str, Any] = {}
        for seg in route.segments:
            for name in seg.param_names:
                if name in explicit:
                    resolved[name.lower()] = explicit[name]
                elif name in defaults and defaults[name] not in (None, ""):
                    resolved[name.lower()] = defaults[name]
                elif name in defaults or seg.catch_all:
                    resolved[name.lower()] = None
                else:
                    return None

        for name, constraint in route.constraints.items():
            value = resolved.get(name.lower(), explicit.get(name, defaults.get(name)))
            if not _satisfies(constraint, value):
                return None

        rendered: list[tuple[str, bool]] = []
        for seg in route.segments:
            piece = _render_segment(seg, resolved, defaults)
            if piece is None:
                return None
            rendered.append(piece)

        while rendered and rendered[-1][1]:
            rendered.pop()
        if any(not text for text, _ in rendered):
            return None

        path = "/" + "/".join(text for text, _ in rendered)
        if self.config.lowercase_urls:
            path = path.lower()
        if self.config.append_trailing_slash and path != "/":
            path += "/"

        extra = [
            (key, str(value))
            for key, value in explicit.items()
            if key.lower() not in pattern_names and key not in defaults
        ]
        if extra:
            path += "?" + urlencode(extra)
        return path


def _match_route(route: Route, parts: list[str], method: str) -> RouteValues | None:
    """Match path parts against one rule. Returns merged values or ``None``."""
    if route.methods is not None and method not in route.methods:
        return None

    defaults = route.defaults
    captured: list[tuple[str, Any]] = []
    consumed = len(parts)

    for index, seg in enumerate(route.segments):
        if seg.catch_all:
            name = seg.param_names[0]
            rest = "/".join(parts[index:])
            if rest:
                captured.append((name, rest))
            elif name in defaults:
                captured.append((name, defaults[name]))
            break

        if index < len(parts):
            m = seg.regex.fullmatch(parts[index])
            if m is None:
                return None
            captured.extend(zip(seg.param_names, m.groups(), strict=True))
            continue

        # Path ran out: the remaining segments must be defaulted parameters
        if not seg.is_param or seg.param_names[0] not in defaults:
            return None
        name = seg.param_names[0]
        captured.append((name, defaults[name]))
    else:
        if consumed > len(route.segments):
            return None

    values = RouteValues([*defaults.items(), *captured])

    for name, constraint in route.constraints.items():
        if not _satisfies(constraint, values.get(name)):
            return None
    return values


def _render_segment(
    seg: PathSegment,
    resolved: Mapping[str, Any],
    defaults: RouteValues,
) -> tuple[str, bool] | None:
    """Render one segment as ``(text, omittable)``; ``None`` if impossible."""
    if seg.is_literal:
        return "".join(p.value for p in seg.parts), False

    if seg.is_param:
        name = seg.param_names[0]
        value = resolved[name.lower()]
        if value is None:
            return "", True
        text = quote(str(value), safe="/" if seg.catch_all else "")
        omittable = name in defaults and _same(value, defaults[name])
        return text, omittable

    pieces: list[str] = []
    for part in seg.parts:
        if not part.is_param:
            pieces.append(part.value)
            continue
        value = resolved[part.value.lower()]
        if value is None:
            return None
        pieces.append(quote(str(value), safe=""))
    return "".join(pieces), False


def _same(a: Any, b: Any) -> bool:
    return str(a).lower() == str(b).lower()


def _satisfies(constraint: str, value: Any) -> bool:
    text = "" if value is None else str(value)
    return re.fullmatch(constraint, text, re.IGNORECASE) is not None
