"""
Optparser faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every issue the parser
  can report. Codes are grouped by domain to keep logs/searches predictable.
- OptionException: hard errors. They flag programmer mistakes in the embedding
  application (duplicate registration, unknown names, querying before parsing,
  strict conversion failures) and are always raised.
- OptionWarning: soft, recoverable diagnostics found while walking the argument
  vector. The parser collects them and surfaces them at the end of the pass.
- trigger(): central entry point to surface any fault with runtime options.

Rendering
- Warnings render as a single line “warning: <message>” on standard error
  through a rich console (shell mode), or go through warnings.warn otherwise.
- Styles apply only when colorful=True; the host can override them with a
  __styles__ mapping in __main__, and prefix lines with a __prog__ string.
"""
import copy
import warnings
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console
from rich.text import Text

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - registry/query errors (211xx)
      • DUPLICATE_OPTION, UNKNOWN_OPTION, NOT_YET_PARSED, UNCASTABLE_VALUE
    - parse warnings (221xx)
      • UNKNOWN_TOKEN, INTERRUPTED_VALUE, MISSING_VALUE, MISSING_MANDATORY
    """
    # --- registry and query errors (21xxx) ---
    DUPLICATE_OPTION  = 21101
    UNKNOWN_OPTION    = 21102
    NOT_YET_PARSED    = 21103
    UNCASTABLE_VALUE  = 21104

    # --- parse warnings (22xxx) ---
    UNKNOWN_TOKEN     = 22111
    INTERRUPTED_VALUE = 22112
    MISSING_VALUE     = 22113
    MISSING_MANDATORY = 22114

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _render(fault, kind, defaults, /):
    main = __import__("__main__")
    styles = defaultdict(str, defaults | getattr(main, "__styles__", {}))
    colorful = fault.options.get("colorful", False)

    def text(fragment, style):
        return Text(str(fragment), styles[style] if colorful else "")

    parts = []
    if prog := getattr(main, "__prog__", None):
        parts += [text(prog, "prog-name"), ": "]
    parts += [text(kind, kind + "-label"), ": ", text(fault.message, kind + "-message")]
    return Text.assemble(*parts)


class OptionException(Exception):
    code = None

    def __init__(self, message, /, **options):
        if not isinstance(message, str):
            raise TypeError("fault message must be a string")
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        return _render(self, "error", {
            "prog-name": "bold #E6E6F0",  # near-white program name
            "error-label": "bold #FF4DA6",  # friendly pinky label
            "error-message": "#C8C8D0",  # soft light gray message
        })

    def __trigger__(self):
        raise self from None

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class DuplicateOptionError(OptionException, ValueError):
    code = FaultCode.DUPLICATE_OPTION


class UnknownOptionError(OptionException, LookupError):
    code = FaultCode.UNKNOWN_OPTION


class NotYetParsedError(OptionException, RuntimeError):
    code = FaultCode.NOT_YET_PARSED


class UncastableValueError(OptionException, ValueError):
    code = FaultCode.UNCASTABLE_VALUE


class OptionWarning(Warning):
    code = None

    def __init__(self, message, /, **options):
        if not isinstance(message, str):
            raise TypeError("fault message must be a string")
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        return _render(self, "warning", {
            "prog-name": "bold #E6E6F0",  # near-white program name
            "warning-label": "bold #FFB400",  # amber label
            "warning-message": "#D6D6DE",  # slightly lighter gray body
        })

    def __trigger__(self):
        if not self.options.get("shell", True):
            return warnings.warn(self, stacklevel=self.options.get("stacklevel", 2))
        console.print(self, soft_wrap=True, highlight=False)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnknownOptionWarning(OptionWarning):
    code = FaultCode.UNKNOWN_TOKEN


class InterruptedValueWarning(OptionWarning):
    code = FaultCode.INTERRUPTED_VALUE


class MissingValueWarning(OptionWarning):
    code = FaultCode.MISSING_VALUE


class MissingMandatoryWarning(OptionWarning):
    code = FaultCode.MISSING_MANDATORY


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via copy.replace() before triggering.
    - exceptions are raised; warnings are printed (shell=True) or emitted
      through warnings.warn (shell=False).
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


__all__ = (
    "FaultCode",
    "OptionException",
    "DuplicateOptionError",
    "UnknownOptionError",
    "NotYetParsedError",
    "UncastableValueError",
    "OptionWarning",
    "UnknownOptionWarning",
    "InterruptedValueWarning",
    "MissingValueWarning",
    "MissingMandatoryWarning",
    "trigger",
)
