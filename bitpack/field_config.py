"""Per-field configuration of a bit field struct and field information records."""

from __future__ import annotations

import dataclasses
import enum
from dataclasses import dataclass, field
from typing import Any, Generic, Iterable, Iterator, Mapping, TypeVar

T = TypeVar("T")


class ConfigError(ValueError):
    """One or more problems in a bit field definition, each with an optional span."""

    def __init__(self, message: str, span: Any = None) -> None:
        super().__init__(message)
        self.errors: list[tuple[str, Any]] = [(message, span)]

    def combine(self, other: ConfigError) -> ConfigError:
        """Append the errors of ``other`` and return this error."""
        self.errors.extend(other.errors)
        return self

    @property
    def messages(self) -> list[str]:
        return [message for message, _ in self.errors]

    def __str__(self) -> str:
        return "; ".join(self.messages)


@dataclass(frozen=True)
class ConfigValue(Generic[T]):
    """A configured value together with where it was given."""

    value: T
    span: Any = None


def _join_spans(span: Any, other: Any) -> Any:
    if (
        isinstance(span, tuple)
        and isinstance(other, tuple)
        and len(span) == 2
        and len(other) == 2
    ):
        return (min(span[0], other[0]), max(span[1], other[1]))
    return span


class SkipWhich(enum.Enum):
    """Which accessors of a field are left out."""

    ALL = "all"
    GETTERS = "getters"
    SETTERS = "setters"

    def skip_getters(self) -> bool:
        return self in (SkipWhich.ALL, SkipWhich.GETTERS)

    def skip_setters(self) -> bool:
        return self in (SkipWhich.ALL, SkipWhich.SETTERS)


def _skip_error(params: str, span: Any, previous: Any) -> ConfigError:
    return ConfigError(
        f"encountered duplicate `skip{params}` attribute for field", span
    ).combine(ConfigError(f"duplicate `skip{params}` here", previous))


@dataclass
class FieldConfig:
    """Attributes found on one field."""

    retained_attrs: list[Any] = field(default_factory=list)
    bits: ConfigValue[int] | None = None
    skip: ConfigValue[SkipWhich] | None = None

    def retain_attr(self, attr: Any) -> None:
        """Keep an attribute that is passed through untouched."""
        self.retained_attrs.append(attr)

    def add_bits(self, amount: int, span: Any = None) -> None:
        """Record the field's declared bit count; it may be given only once."""
        if self.bits is not None:
            raise ConfigError(
                "encountered duplicate `bits = N` attribute for field", span
            ).combine(ConfigError("duplicate `bits = N` here", self.bits.span))
        self.bits = ConfigValue(amount, span)

    def add_skip(self, which: SkipWhich | str, span: Any = None) -> None:
        """Record skipped accessors; getters and setters given apart combine to all."""
        which = SkipWhich(which)
        previous = self.skip
        if previous is None:
            self.skip = ConfigValue(which, span)
            return
        if which is SkipWhich.ALL:
            raise _skip_error("", span, previous.span)
        if which is SkipWhich.GETTERS and previous.value in (SkipWhich.GETTERS, SkipWhich.ALL):
            raise _skip_error("(getters)", span, previous.span)
        if which is SkipWhich.SETTERS and previous.value in (SkipWhich.SETTERS, SkipWhich.ALL):
            raise _skip_error("(setters)", span, previous.span)
        self.skip = ConfigValue(SkipWhich.ALL, _join_spans(span, previous.span))

    def skip_getters(self) -> bool:
        return self.skip is not None and self.skip.value.skip_getters()

    def skip_setters(self) -> bool:
        return self.skip is not None and self.skip.value.skip_setters()


def _clone(config: FieldConfig) -> FieldConfig:
    return dataclasses.replace(config, retained_attrs=list(config.retained_attrs))


@dataclass
class FieldInfo:
    """A field's position, name, specifier and configuration."""

    index: int
    field_name: str | None
    specifier: Any
    config: FieldConfig

    @property
    def name(self) -> str:
        """The field's name, or its position for unnamed fields."""
        return self.field_name if self.field_name is not None else str(self.index)


def field_infos(
    fields: Iterable[tuple[str | None, Any]],
    configs: Mapping[int, ConfigValue[FieldConfig] | FieldConfig] | None = None,
) -> Iterator[FieldInfo]:
    """Yield a FieldInfo for each ``(name, specifier)`` pair, with a copy of its config."""
    configs = configs or {}
    for index, (name, specifier) in enumerate(fields):
        entry = configs.get(index)
        config = entry.value if isinstance(entry, ConfigValue) else entry
        yield FieldInfo(
            index, name, specifier, _clone(config) if config is not None else FieldConfig()
        )