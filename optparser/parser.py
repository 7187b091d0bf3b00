"""
Optparser parser: option registry, parse state machine, queries and listing.

Parsing model
- one forward pass over the argument vector, one token of lookahead state:
  the index of a VALUE option still waiting for its value (`awaiting`).
- each token is classified by a single, process-wide compiled pattern:
    short  "-x" + optional attached text       (-a, -a5, -afile.txt)
    long   "--name" + optional "=" + value     (--long-a, --long-a=5)
    plain  anything else                       (values and positionals)
- accepted value forms: -xVALUE, -x VALUE, --name=VALUE, --name VALUE.

Faults
- hard errors (duplicate registration, unknown names, queries before parsing)
  are raised immediately.
- soft problems (unknown option, missing value, missing mandatory option) are
  collected during the pass and surfaced at its end; parse() then returns False.
  Everything matched before or after a soft problem stays available.

Example
    >>> parser = Parser(shell=False)
    >>> _ = parser.register("a", "long-a", OptionKind.VALUE, True, "option a")
    >>> parser.parse(["-a", "5", "file.txt"])
    True
    >>> parser.value("a", int), parser.positionals
    (5, ['file.txt'])
"""
import re
import sys

from rich.text import Text

from .convert import strto
from .faults import *
from .options import OptionKind, OptionSpec, ParseResult
from .utils import *

# Module-level so every Parser shares one compiled grammar.
_TOKEN = re.compile(r"-(?P<short>[a-zA-Z])(?P<attached>.+)?|--(?P<long>[a-zA-Z_-]+)=?(?P<inline>.+)?")


class Parser:
    """
    Command-line option parser.

    Options are registered once, then parse() can be called any number of
    times; each call replaces the previous results and positionals.

    Parameters
    - shell: bool (keyword-only, default True)
      print soft warnings on standard error; when False they are emitted
      through the warnings module instead.
    - colorful: bool (keyword-only, default False)
      style printed warnings and the rich option listing.

    With shell=False the warnings module applies its own filters, and the
    default filter shows a given message only once per call site. The faults
    property always holds every warning of the last parse.
    """

    options = mirror("options")
    positionals = mirror("positionals")
    faults = mirror("faults")

    def __init__(self, *, shell=True, colorful=False):
        self._options = []
        self._results = []
        self._positionals = []
        self._faults = []
        self.shell = bool(shell)
        self.colorful = bool(colorful)

    # registry ////////////////////////////////////////////////////////////////

    def register(self, short, long, kind, optional=False, help="", default=""):
        """
        Declare a new option and return its OptionSpec.

        Raises DuplicateOptionError when a non-empty short or long name is
        already taken; the registry is left unchanged in that case.
        """
        spec = OptionSpec(short, long, kind, optional=optional, help=help, default=default)
        for other in self._options:
            if (spec.short and spec.short == other.short) or (spec.long and spec.long == other.long):
                trigger(DuplicateOptionError(
                    "duplicate option %s" % other.display.rstrip("="),
                    option=other,
                ))
        self._options.append(spec)
        return spec

    def __contains__(self, name):
        return self._index(name) is not None

    def _index(self, name):
        for index, spec in enumerate(self._options):
            if spec.matches(name):
                return index
        return None

    def _lookup(self, name):
        if not isinstance(name, str):
            raise TypeError("option name must be a string")
        if (index := self._index(name)) is None:
            trigger(UnknownOptionError("no option with name '%s'" % name, name=name))
        if len(self._results) != len(self._options):
            trigger(NotYetParsedError("options not parsed", name=name))
        return self._results[index]

    # queries /////////////////////////////////////////////////////////////////

    def present(self, name):
        """
        Whether the option named `name` (short or long) was given in the last parse.
        """
        return self._lookup(name).present

    def value(self, name, type=str, *, strict=False):
        """
        Value of the option named `name` from the last parse, converted to `type`.

        The raw value is the option default unless the option was given with a
        value. Numeric conversion is best-effort (malformed numbers read as zero)
        unless strict=True, which raises UncastableValueError instead.
        """
        return strto(self._lookup(name).value, type, strict=strict)

    # parse ///////////////////////////////////////////////////////////////////

    def parse(self, tokens=Unset, /):
        """
        Parse an argument vector (program name excluded; sys.argv[1:] when omitted).

        Returns True when the vector was fully well-formed, False when any
        warning was produced.
        """
        tokens = coalesce(tokens, sys.argv[1:])
        if isinstance(tokens, str):
            raise TypeError("parse() tokens must be a sequence of strings, not a string")
        tokens = list(tokens)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("parse() tokens must be strings")

        self._results = [ParseResult(spec.default) for spec in self._options]
        self._positionals = []
        self._faults = []
        awaiting = None

        for token in tokens:
            if match := _TOKEN.fullmatch(token):
                if awaiting is not None:
                    self._faults.append(InterruptedValueWarning(
                        "expected value for option %s, got option '%s' instead" % (
                            self._options[awaiting].display,
                            token,
                        ),
                        option=self._options[awaiting],
                        token=token,
                    ))
                    awaiting = None

                if match["short"]:
                    index = self._find(match["short"], "short")
                    attached = match["attached"]
                else:
                    index = self._find(match["long"], "long")
                    attached = match["inline"]

                if index is None:
                    self._faults.append(UnknownOptionWarning(
                        "unknown option '%s'" % token,
                        token=token,
                    ))
                    continue

                self._results[index].present = True
                if self._options[index].kind is OptionKind.VALUE:
                    if attached is not None:
                        self._results[index].value = attached
                    else:
                        awaiting = index
            elif awaiting is not None:
                self._results[awaiting].value = token
                awaiting = None
            else:
                self._positionals.append(token)

        if awaiting is not None:
            self._faults.append(MissingValueWarning(
                "expected value for option %s" % self._options[awaiting].display,
                option=self._options[awaiting],
            ))

        for spec, result in zip(self._options, self._results):
            if not spec.optional and not result.present:
                self._faults.append(MissingMandatoryWarning(
                    "mandatory option %s is missing" % spec.display,
                    option=spec,
                ))

        return self._finalize()

    def _find(self, name, field):
        for index, spec in enumerate(self._options):
            if getattr(spec, field) == name:
                return index
        return None

    def _finalize(self):
        for fault in self._faults:
            trigger(fault, shell=self.shell, colorful=self.colorful, stacklevel=5)
        return not self._faults

    # listing /////////////////////////////////////////////////////////////////

    def __str__(self):
        lines = []
        for spec in self._options:
            line = "%20s: %s" % (spec.display, spec.help)
            if spec.default:
                line += " (default: %s)" % spec.default
            lines.append(line)
        return "\n".join(lines)

    def __rich__(self):
        styles = {
            "name": "bold #00E5FF",  # neon cyan option names
            "default": "dim",
        } | getattr(__import__("__main__"), "__styles__", {})

        def text(fragment, style):
            return Text(fragment, styles.get(style, "") if self.colorful else "")

        listing = Text()
        for spec in self._options:
            listing.append(text("%20s" % spec.display, "name")).append(": ").append(spec.help)
            if spec.default:
                listing.append(text(" (default: %s)" % spec.default, "default"))
            listing.append("\n")
        listing.rstrip()
        return listing

    def __repr__(self):
        return "parser(options=%r, shell=%r, colorful=%r)" % (self._options, self.shell, self.colorful)


__all__ = (
    "Parser",
)
