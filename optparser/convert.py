"""
Conversion between raw option text and typed values.

The parser stores every option value as the literal text it received; typed
access is deferred until Parser.value() asks for it. This module owns that
conversion so its policy lives in one place.

Policy
- permissive (default): numeric text is read best-effort, like C strtol/strtod.
  The longest valid leading number is used and anything after it is ignored;
  text with no leading number reads as zero. Nothing is raised.
- strict: the same reading, but the number must span the whole text (surrounding
  whitespace aside), otherwise UncastableValueError is raised. Strict mode never
  yields a different number than permissive mode; it only rejects more text.

Converters are looked up by target type; register new ones with @converter.
"""
import builtins
import functools
import re

from .faults import UncastableValueError

_INTEGER = re.compile(r"\s*([+-]?\d+)", re.ASCII)
_FLOAT = re.compile(
    r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE | re.ASCII,
)
_TRUTHS = {"1": True, "true": True, "yes": True, "on": True,
           "0": False, "false": False, "no": False, "off": False}

_converters = {}


def converter(type, /):
    """
    Register the decorated function as the converter for `type`.

    The function receives (text, strict) and returns the converted value.
    A later registration for the same type replaces the earlier one.

        @converter(Path)
        def _(text, strict):
            return Path(text)
    """
    if not isinstance(type, builtins.type):
        raise TypeError("converter() argument must be a type")

    def decorator(function):
        if not callable(function):
            raise TypeError("@converter() must be applied to a callable")
        _converters[type] = function
        return function

    return decorator


def _uncastable(text, type):
    return UncastableValueError(
        "cannot convert %r to %s" % (text, type.__name__),
        text=text,
        type=type,
    )


@converter(str)
def _(text, strict):
    return text


@converter(int)
def _(text, strict):
    if strict:
        if match := _INTEGER.fullmatch(text.rstrip()):
            return int(match[1])
        raise _uncastable(text, int)
    if match := _INTEGER.match(text):
        return int(match[1])
    return 0


@converter(float)
def _(text, strict):
    if strict:
        if match := _FLOAT.fullmatch(text.rstrip()):
            return float(match[1])
        raise _uncastable(text, float)
    if match := _FLOAT.match(text):
        return float(match[1])
    return 0.0


@converter(bool)
def _(text, strict):
    try:
        return _TRUTHS[text.strip().lower()]
    except KeyError:
        if strict:
            raise _uncastable(text, bool) from None
        return False


def strto(text, type=str, /, *, strict=False):
    """
    Convert raw option text to `type`.

    Types without a registered converter are built as type(text). In permissive
    mode a constructor that rejects the text (ValueError/TypeError) yields the
    type's empty value type() instead.
    """
    if not isinstance(text, str):
        raise TypeError("strto() first argument must be a string")
    if not isinstance(type, builtins.type):
        raise TypeError("strto() second argument must be a type")
    try:
        function = _converters[type]
    except KeyError:
        pass
    else:
        return function(text, strict)
    try:
        return type(text)
    except (ValueError, TypeError) as error:
        if strict:
            raise _uncastable(text, type) from error
        return type()


@functools.singledispatch
def strfrom(value, /):
    """
    Render a typed value as option text (used for non-string defaults).
    """
    return str(value)


@strfrom.register
def _(value: bool, /):
    return "true" if value else "false"


__all__ = (
    "converter",
    "strto",
    "strfrom",
)
