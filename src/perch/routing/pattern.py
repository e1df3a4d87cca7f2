"""Route pattern parsing.

Patterns use ``{name}`` parameters and ``{*name}`` catch-alls::

    "{controller}/{action}/{id}"
    "{resource}.gif/{*pathInfo}"
    "blog/{year}-{month}"
"""

import re

from perch.errors import ConfigurationError
from perch.routing.route import PathPart, PathSegment


def parse_pattern(pattern: str) -> tuple[PathSegment, ...]:
    """Parse a route pattern into compiled segments.

    Examples::

        ""                      -> ()
        "users"                 -> (PathSegment(parts=(PathPart("users"),)),)
        "{controller}/{action}" -> two single-parameter segments
        "{resource}.gif"        -> one segment: param "resource" + literal ".gif"

    Raises ``ConfigurationError`` for malformed patterns.
    """
    if "<" in pattern and ">" in pattern:
        msg = (
            f"Route pattern {pattern!r} uses <param> syntax. "
            "Perch expects {param} placeholders."
        )
        raise ConfigurationError(msg)
    if pattern.startswith(("~", "/")):
        msg = f"Route pattern {pattern!r} must not start with '~' or '/'."
        raise ConfigurationError(msg)
    if "?" in pattern:
        msg = f"Route pattern {pattern!r} must not contain '?'."
        raise ConfigurationError(msg)
    if not pattern:
        return ()

    raw_segments = pattern.split("/")
    segments: list[PathSegment] = []
    seen: set[str] = set()

    for index, raw in enumerate(raw_segments):
        if not raw:
            msg = f"Route pattern {pattern!r} contains an empty segment."
            raise ConfigurationError(msg)
        parts = _parse_segment(pattern, raw)

        for part in parts:
            if not part.is_param:
                continue
            key = part.value.lower()
            if key in seen:
                msg = f"Route pattern {pattern!r} repeats parameter {part.value!r}."
                raise ConfigurationError(msg)
            seen.add(key)
            if part.catch_all and (len(parts) > 1 or index != len(raw_segments) - 1):
                msg = (
                    f"Catch-all parameter {{*{part.value}}} must be the whole "
                    f"last segment of {pattern!r}."
                )
                raise ConfigurationError(msg)

        segments.append(PathSegment(parts=parts, regex=_compile_segment(parts)))

    return tuple(segments)


def _parse_segment(pattern: str, raw: str) -> tuple[PathPart, ...]:
    """Split one raw segment into literal and parameter parts."""
    parts: list[PathPart] = []
    literal: list[str] = []
    i = 0
    while i < len(raw):
        ch = raw[i]
        if ch == "}":
            msg = f"Unbalanced '}}' in route pattern {pattern!r}."
            raise ConfigurationError(msg)
        if ch != "{":
            literal.append(ch)
            i += 1
            continue

        end = raw.find("}", i + 1)
        if end == -1 or "{" in raw[i + 1 : end]:
            msg = f"Unbalanced '{{' in route pattern {pattern!r}."
            raise ConfigurationError(msg)
        if literal:
            parts.append(PathPart("".join(literal)))
            literal = []
        elif parts:
            msg = (
                f"Route pattern {pattern!r} has adjacent parameters in "
                f"segment {raw!r}; separate them with literal text."
            )
            raise ConfigurationError(msg)

        name = raw[i + 1 : end]
        catch_all = name.startswith("*")
        if catch_all:
            name = name[1:]
        if not name or "*" in name:
            msg = f"Invalid parameter name {raw[i : end + 1]!r} in route pattern {pattern!r}."
            raise ConfigurationError(msg)
        parts.append(PathPart(name, is_param=True, catch_all=catch_all))
        i = end + 1

    if literal:
        parts.append(PathPart("".join(literal)))
    return tuple(parts)


def _compile_segment(parts: tuple[PathPart, ...]) -> re.Pattern[str]:
    if len(parts) == 1 and parts[0].is_param:
        return re.compile("(.+)", re.IGNORECASE | re.DOTALL)
    # Greedy groups: each parameter ends at the last occurrence of the literal after it
    pieces = ["(.+)" if p.is_param else re.escape(p.value) for p in parts]
    return re.compile("".join(pieces), re.IGNORECASE | re.DOTALL)
