r"""
Optparser option specifications.

Overview
- OptionKind: VALUE options consume a value (attached or from the next token),
  TRIGGER options only record their presence.
- OptionSpec: an immutable, declared option (short/long names, kind,
  mandatory-ness, help text and textual default).
- ParseResult: the per-option outcome of one parse (raw value + presence).

Introspection & representation
- SpecType metaclass exposes the names listed in __introspectable__ as read-only
  properties (backed by "_<name>" fields) and provides stable __repr__ and
  __rich_repr__ implementations for diagnostics and rich.pretty.

Display names
- OptionSpec.display is the name used in messages and listings:
  "-a", "--long-a", "-a/--long-a", with a trailing "=" after the long name
  for value-bearing options ("-a/--long-a=").
"""
import enum
import functools
import operator
import re

from .convert import strfrom
from .utils import *


class SpecType(type):
    """
    Metaclass wiring read-only properties and representations.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens)
      and used in validation messages.
    - every name in __introspectable__ becomes a property mirroring "_<name>".
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


class OptionKind(enum.Enum):
    VALUE = "value"
    TRIGGER = "trigger"

    def __repr__(self):
        return f"{type(self).__name__}.{self.name}"


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: validate and normalize OptionSpec metadata in place.

    - short: "" or exactly one character.
    - long: any string ("" means no long name).
    - kind: an OptionKind, or its value ("value"/"trigger").
    - optional: coerced to bool.
    - help: string.
    - default: string, or any value rendered through strfrom().

    Raises
    - TypeError: wrong field types.
    - ValueError: a short name longer than one character, or an unknown kind.
    """
    for field in ("short", "long", "help"):
        if not isinstance(metadata[field], str):
            raise TypeError(f"{cls.__typename__} {field!r} must be a string")

    if len(metadata["short"]) > 1:
        raise ValueError(f"{cls.__typename__} 'short' must be a single character")

    if not isinstance(kind := metadata["kind"], OptionKind | str):
        raise TypeError(f"{cls.__typename__} 'kind' must be an option kind")
    metadata["kind"] = OptionKind(kind)

    metadata["optional"] = bool(metadata["optional"])

    if not isinstance(default := metadata["default"], str):
        metadata["default"] = strfrom(default)


class OptionSpec(metaclass=SpecType):
    """
    A declared command-line option.

    Instances are created by Parser.register(); they can also be built directly
    for inspection. All fields are read-only once constructed.

    Any one-character short name and any long name are accepted, but only an
    ASCII letter after "-" and letters, "_" or "-" after "--" are recognised
    on the command line. An option named outside that set can be registered
    and listed, yet it never matches a token: "-1" stays a plain token.
    """

    __introspectable__ = (
        "short",
        "long",
        "kind",
        "optional",
        "help",
        "default",
    )

    def __new__(cls, short="", long="", kind=OptionKind.VALUE, /, optional=False, help="", default=""):
        metadata = {
            "short": short,
            "long": long,
            "kind": kind,
            "optional": optional,
            "help": help,
            "default": default,
        }
        _sanitize_metadata(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    def __setattr__(self, name, value, /):
        if not name.startswith("_") or hasattr(self, name):
            raise AttributeError(f"{type(self).__typename__} is read-only")
        object.__setattr__(self, name, value)

    @property
    def display(self):
        """
        Name used in diagnostics: "-s", "--long", "-s/--long", plus "=" after
        the long name of a VALUE option.
        """
        display = ""
        if self.short:
            display += "-" + self.short
            if self.long:
                display += "/"
        if self.long:
            display += "--" + self.long
            if self.kind is OptionKind.VALUE:
                display += "="
        return display

    def matches(self, name, /):
        """
        Whether `name` is exactly this option's short or long name.
        """
        return bool(name) and name in (self.short, self.long)


class ParseResult:
    """Outcome of one parse for one registered option."""

    __slots__ = ("value", "present")

    def __init__(self, value="", present=False):
        self.value = value
        self.present = present

    def __repr__(self):
        return f"parse-result(value={self.value!r}, present={self.present!r})"

    def __rich_repr__(self):
        yield "value", self.value
        yield "present", self.present

    def __eq__(self, other):
        if not isinstance(other, ParseResult):
            return NotImplemented
        return (self.value, self.present) == (other.value, other.present)

    __hash__ = None


__all__ = (
    "OptionKind",
    "OptionSpec",
    "ParseResult",
)
