"""Route, PathSegment and RouteData types."""

import re
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from perch.config import RoutingConfig


@dataclass(frozen=True, slots=True)
class PathPart:
    """A literal run or a parameter inside one segment of a route pattern.

    Literal: ``gif``          (is_param=False, value="gif")
    Param:   ``{id}``         (is_param=True, value="id")
    Catch:   ``{*pathInfo}``  (is_param=True, catch_all=True, value="pathInfo")
    """

    value: str
    is_param: bool = False
    catch_all: bool = False


@dataclass(frozen=True, slots=True)
class PathSegment:
    """One ``/``-delimited segment of a route pattern.

    ``regex`` matches a single incoming path segment, capturing one group
    per parameter part in order.
    """

    parts: tuple[PathPart, ...]
    regex: re.Pattern[str]

    @property
    def is_literal(self) -> bool:
        return not any(p.is_param for p in self.parts)

    @property
    def is_param(self) -> bool:
        """True when the whole segment is a single parameter."""
        return len(self.parts) == 1 and self.parts[0].is_param

    @property
    def catch_all(self) -> bool:
        return self.is_param and self.parts[0].catch_all

    @property
    def param_names(self) -> tuple[str, ...]:
        return tuple(p.value for p in self.parts if p.is_param)


class RouteValues(Mapping[str, Any]):
    """Immutable, case-insensitive mapping of route value names to values.

    The casing of the last key written wins for iteration; lookups ignore
    case entirely.
    """

    __slots__ = ("_items",)

    def __init__(self, values: Mapping[str, Any] | Iterable[tuple[str, Any]] = ()) -> None:
        pairs = values.items() if isinstance(values, Mapping) else values
        items: dict[str, tuple[str, Any]] = {}
        for key, value in pairs:
            items[key.lower()] = (key, value)
        self._items = items

    def __getitem__(self, key: str) -> Any:
        if not isinstance(key, str):
            raise KeyError(key)
        return self._items[key.lower()][1]

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        return key.lower() in self._items

    def __iter__(self) -> Iterator[str]:
        for key, _ in self._items.values():
            yield key

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {v!r}" for k, v in self._items.values())
        return f"{type(self).__name__}({{{items}}})"


@dataclass(frozen=True, slots=True)
class Route:
    """A registered route-table rule.

    Created by ``RouteTable.map_route`` / ``RouteTable.ignore_route``.
    ``methods`` of ``None`` accepts every HTTP method.
    """

    pattern: str
    segments: tuple[PathSegment, ...]
    name: str | None = None
    defaults: RouteValues = field(default_factory=RouteValues)
    constraints: Mapping[str, str] = field(default_factory=dict)
    methods: frozenset[str] | None = None
    ignore: bool = False

    @property
    def param_names(self) -> tuple[str, ...]:
        return tuple(name for seg in self.segments for name in seg.param_names)


class RouteData(RouteValues):
    """Route values resolved for one incoming path.

    Always carries the rule that matched and the configuration of the
    table that produced it.
    """

    __slots__ = ("config", "path", "route")

    def __init__(
        self,
        values: Mapping[str, Any] | Iterable[tuple[str, Any]],
        *,
        route: Route,
        path: str,
        config: RoutingConfig | None = None,
    ) -> None:
        super().__init__(values)
        self.route = route
        self.path = path
        self.config = config or RoutingConfig()

    @property
    def is_ignored(self) -> bool:
        """True when the path hit an ignore rule."""
        return self.route.ignore
