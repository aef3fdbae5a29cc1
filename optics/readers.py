"""
Ready-made readers.

Argument readers take the raw token and return a value:
    string, integer, number, boolean, choice(*values)

Option readers also receive the value accumulated so far for the same option
(Unset on its first occurrence). The helpers below lift an argument reader into
an option reader with a given folding policy:
    last(reader)     keep the last occurrence
    collect(reader)  list of every occurrence, in command-line order
    total(reader)    sum of every occurrence
    count()          number of occurrences (for options with a value)

Every reader raises ConversionError when the token cannot be converted.

    >>> from optics.options import Option, RequiredOptionArgument
    >>> Option("I", "include", RequiredOptionArgument("dir", collect(string)), "add a directory")
"""
from .faults import ConversionError
from .utils import Unset, rename

_TRUE = frozenset({"1", "true", "yes", "on", "y"})
_FALSE = frozenset({"0", "false", "no", "off", "n"})


def string(raw, /):
    return raw


def integer(raw, /):
    try:
        return int(raw, 10)
    except ValueError:
        raise ConversionError("invalid integer %r" % raw, raw=raw) from None


def number(raw, /):
    try:
        return float(raw)
    except ValueError:
        raise ConversionError("invalid number %r" % raw, raw=raw) from None


def boolean(raw, /):
    lowered = raw.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ConversionError("invalid boolean %r" % raw, raw=raw)


def choice(*values):
    """
    Build a reader accepting only the given strings.
    """
    if not values:
        raise TypeError("choice() requires at least one value")
    for value in values:
        if not isinstance(value, str):
            raise TypeError("choice() values must be strings")

    @rename("choice")
    def read(raw, /):
        if raw not in values:
            raise ConversionError(
                "invalid choice %r (choose from %s)" % (raw, ", ".join(map(repr, values))),
                raw=raw,
            )
        return raw

    return read


def last(reader, /):
    if not callable(reader):
        raise TypeError("last() argument must be callable")

    @rename("last")
    def read(raw, accumulator, /):
        return reader(raw)

    return read


def collect(reader, /):
    if not callable(reader):
        raise TypeError("collect() argument must be callable")

    @rename("collect")
    def read(raw, accumulator, /):
        values = [] if accumulator is Unset else list(accumulator)
        values.append(reader(raw))
        return values

    return read


def total(reader, /):
    if not callable(reader):
        raise TypeError("total() argument must be callable")

    @rename("total")
    def read(raw, accumulator, /):
        value = reader(raw)
        return value if accumulator is Unset else accumulator + value

    return read


def count():
    @rename("count")
    def read(raw, accumulator, /):
        return 1 if accumulator is Unset else accumulator + 1

    return read


__all__ = (
    "string",
    "integer",
    "number",
    "boolean",
    "choice",
    "last",
    "collect",
    "total",
    "count",
)
