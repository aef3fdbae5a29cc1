from rich.pretty import pprint

from optics import *
from optics.readers import collect, integer, string

__prog__ = "copy"

callback = Command(
    "copy files",
    [RequiredArgument("src", string), OptionalArgument("dst", ".", string)],
    [
        help_option(),
        version_option(__version__, "V"),
        Option("f", "force", None, "overwrite existing files"),
        Option("x", "exclude", RequiredOptionArgument("pattern", collect(string)), "skip matching files"),
        Option("j", "jobs", OptionalOptionArgument("n", 1, lambda raw, jobs: integer(raw)), "parallel jobs"),
    ],
    lambda args, opts: pprint({"arguments": args, "options": opts}),
)


if __name__ == '__main__':
    pprint(callback)
    invoke(callback)
