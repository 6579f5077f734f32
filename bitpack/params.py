"""Parsing and applying the parameters given to a bit field struct definition."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Iterable

from .field_config import ConfigError

USIZE_MAX = (1 << 64) - 1

_ITEM = re.compile(r"(?P<name>[A-Za-z_][A-Za-z0-9_]*)\s*=(?!=)\s*(?P<value>.*)\Z", re.DOTALL)
_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_INT = re.compile(
    r"(?P<digits>0x[0-9A-Fa-f_]+|0o[0-7_]+|0b[01_]+|[0-9][0-9_]*)"
    r"(?:[ui](?:8|16|32|64|128|size))?\Z"
)
_STRING = re.compile(r'"(?P<body>(?:[^"\\]|\\.)*)"\Z', re.DOTALL)
_BASES = {"0x": 16, "0o": 8, "0b": 2}
_CLOSING = {")": "(", "]": "[", "}": "{"}


@dataclass(frozen=True)
class _Expression:
    """A parameter value that is not a literal."""

    text: str


@dataclass(frozen=True)
class Param:
    """One ``name = value`` parameter; literals become int, bool or str."""

    name: str
    value: Any
    span: Any = None
    value_span: Any = None


def _parse_int(text: str) -> int | None:
    match = _INT.match(text)
    if match is None:
        return None
    digits = match.group("digits")
    base = _BASES.get(digits[:2], 10)
    if base != 10:
        digits = digits[2:]
    digits = digits.replace("_", "")
    return int(digits, base) if digits else None


def _parse_value(text: str) -> Any:
    if text in ("true", "false"):
        return text == "true"
    number = _parse_int(text)
    if number is not None:
        return number
    string = _STRING.match(text)
    if string is not None:
        return re.sub(r"\\(.)", r"\1", string.group("body"))
    return _Expression(text)


def _split_top_level(text: str) -> list[tuple[int, int]]:
    pieces: list[tuple[int, int]] = []
    stack: list[str] = []
    in_string = escaped = False
    start = 0
    for pos, char in enumerate(text):
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char in "([{":
            stack.append(char)
        elif char in _CLOSING:
            if not stack or stack.pop() != _CLOSING[char]:
                raise ConfigError(f"unexpected `{char}`", (pos, pos + 1))
        elif char == "," and not stack:
            pieces.append((start, pos))
            start = pos + 1
    if in_string:
        raise ConfigError("unterminated string literal", (start, len(text)))
    if stack:
        raise ConfigError(f"unclosed delimiter `{stack[-1]}`", (start, len(text)))
    pieces.append((start, len(text)))
    return pieces


def _strip(text: str, start: int, end: int) -> tuple[int, int]:
    segment = text[start:end]
    lead = len(segment) - len(segment.lstrip())
    return start + lead, start + len(segment.rstrip())


def parse_params(text: str) -> list[Param]:
    """Parse a comma separated list of ``name = value`` parameters."""
    spans = [_strip(text, start, end) for start, end in _split_top_level(text)]
    if spans[-1][0] >= spans[-1][1]:
        spans.pop()
    params = []
    for start, end in spans:
        if start >= end:
            raise ConfigError("expected a parameter, found `,`", (start, end))
        segment = text[start:end]
        match = _ITEM.match(segment)
        if match is None:
            name = _NAME.match(segment)
            if name is None:
                raise ConfigError("expected a parameter name", (start, end))
            raise ConfigError(f"expected `=` after parameter `{name.group()}`", (start, end))
        value_text = match.group("value")
        if not value_text:
            raise ConfigError(
                f"expected a value for parameter `{match.group('name')}`", (start, end)
            )
        params.append(
            Param(
                name=match.group("name"),
                value=_parse_value(value_text),
                span=(start, end),
                value_span=(start + match.start("value"), end),
            )
        )
    return params


def _feed_int(param: Param, sink: Any) -> None:
    value = param.value
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(
            f"encountered invalid value argument for bitfield `{param.name}` parameter",
            param.value_span,
        )
    if value > USIZE_MAX:
        raise ConfigError(
            f"encountered malformatted integer value for `{param.name}` parameter: "
            "number too large to fit in target type",
            param.value_span,
        )
    getattr(sink, param.name)(value, param.span)


def _feed_filled(param: Param, sink: Any) -> None:
    if not isinstance(param.value, bool):
        raise ConfigError(
            "encountered invalid value argument for bitfield `filled` parameter",
            param.value_span,
        )
    sink.filled(param.value, param.span)


_FEEDERS: dict[str, Callable[[Param, Any], None]] = {
    "bytes": _feed_int,
    "bits": _feed_int,
    "filled": _feed_filled,
}


def feed_params(params: Iterable[Param] | str, sink: Any) -> None:
    """Pass each parameter to ``sink.bytes``, ``sink.bits`` or ``sink.filled``."""
    if isinstance(params, str):
        params = parse_params(params)
    for param in params:
        feeder = _FEEDERS.get(param.name)
        if feeder is None:
            raise ConfigError("encountered unsupported bitfield attribute", param.span)
        feeder(param, sink)