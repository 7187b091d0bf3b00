import sys

from rich.console import Console
from rich.pretty import pprint

from optparser import Parser, OptionKind

__prog__ = "optparser"


def main(argv=None):
    parser = Parser(colorful=True)
    parser.register("a", "long-a", OptionKind.VALUE, False, "option a")
    parser.register("b", "long-b", OptionKind.TRIGGER, False, "option b")
    parser.register("n", "count", OptionKind.VALUE, True, "repetitions", 1)

    if not parser.parse(sys.argv[1:] if argv is None else argv):
        Console(stderr=True).print(parser)
        return 1

    pprint({
        "long-a": parser.value("long-a"),
        "long-b": parser.present("long-b"),
        "count": parser.value("count", int),
        "positionals": parser.positionals,
    })
    return 0


if __name__ == '__main__':
    sys.exit(main())
