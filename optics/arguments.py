"""
Optics positional argument specifications.

Overview
- Argument: abstract base of every positional slot.
- RequiredArgument: must be given; running out of tokens before it is a usage
  error ("too few argument").
- OptionalArgument: carries a default substituted when the token is absent.

Each spec has a name (the key in the parsed argument dictionary and the help
placeholder) and a reader: a callable turning the raw token into a value.
Readers may raise; the failure propagates out of the parse untouched (see
optics.faults.ConversionError).

Ordering
- Commands validate that no required argument follows an optional one; that
  check lives in Command because a lone spec cannot know its neighbours.

Quick example:
    >>> from optics.arguments import RequiredArgument, OptionalArgument
    >>> src = RequiredArgument("src", str)
    >>> count = OptionalArgument("count", 1, int)
    >>> src.to_placeholder(), count.to_placeholder()
    ('<src>', '[count]')
"""
import copy

from .faults import ConfigurationError, ConfigurationTypeError
from .utils import SpecType


def _sanitize(cls, name, reader):
    if not isinstance(name, str):
        raise ConfigurationTypeError(f"{cls.__typename__} 'name' must be a string")
    elif not name:
        raise ConfigurationError(f"{cls.__typename__} 'name' cannot be empty")
    if not callable(reader):
        raise ConfigurationTypeError(f"{cls.__typename__} 'reader' must be callable")


class Argument(metaclass=SpecType):
    """
    Positional argument slot.

    Not meant to be instantiated directly: use RequiredArgument or
    OptionalArgument. Subclasses define is_required(), to_placeholder() and,
    for optional ones, the default value.
    """

    __introspectable__ = (
        "name",
        "reader",
    )

    def __init__(self, name, reader, /):
        if type(self) is Argument:
            raise TypeError("type 'Argument' is abstract; use RequiredArgument or OptionalArgument")
        _sanitize(type(self), name, reader)
        self._name = name
        self._reader = reader

    def is_required(self):
        raise NotImplementedError

    def to_placeholder(self):
        raise NotImplementedError

    @property
    def default(self):
        raise AttributeError(f"{type(self).__typename__} {self._name!r} has no default value")

    def read(self, raw, /):
        """
        Convert a raw token through the reader; failures are not caught.
        """
        return self._reader(raw)


class RequiredArgument(Argument):
    def is_required(self):
        return True

    def to_placeholder(self):
        return "<" + self._name + ">"


class OptionalArgument(Argument):
    """
    Positional argument that may be omitted.

    The default is handed out as a deep copy, so a list or dict default is
    never shared between two parses.
    """

    __displayable__ = (
        "name",
        "default",
        "reader",
    )

    def __init__(self, name, default, reader, /):
        super().__init__(name, reader)
        self._default = default

    @property
    def default(self):
        return copy.deepcopy(self._default)

    def is_required(self):
        return False

    def to_placeholder(self):
        return "[" + self._name + "]"


__all__ = (
    "Argument",
    "RequiredArgument",
    "OptionalArgument",
)
