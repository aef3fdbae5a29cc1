"""
Optics option specifications.

Overview
- OptionArgument: what an option expects after its name.
  • None (no OptionArgument at all): the option is a flag; presence stores True.
  • RequiredOptionArgument: a value must follow (-tVALUE, -t VALUE,
    --test=VALUE, --test VALUE).
  • OptionalOptionArgument: the value may be left out; the default is stored.
- Option: a short name (one character) and/or a long name bound to an
  OptionArgument (or None) and a description.
- SpecialOption: an Option carrying an action that runs while parsing. A truthy
  return value stops the parse; the command's own action is never called.
- help_option / version_option: the two special options most commands want.

Accumulation
- Option readers take two arguments: the raw text and the value stored so far
  for the same option, or Unset on its first occurrence. This lets repeated
  options fold (sum, collect, keep the last one); see optics.readers.

Quick example:
    >>> from optics.options import Option, RequiredOptionArgument
    >>> tag = Option("t", "tag", RequiredOptionArgument("name", lambda raw, tags: [*(tags or []), raw]), "add a tag")
    >>> tag.key, tag.label()
    ('tag', '-t, --tag=name')
"""
import copy

from .faults import ConfigurationError, ConfigurationTypeError
from .output import Output
from .utils import SpecType


class OptionArgument(metaclass=SpecType):
    """
    Value expected by an option.

    Not meant to be instantiated directly: use RequiredOptionArgument or
    OptionalOptionArgument.
    """

    __introspectable__ = (
        "name",
        "reader",
    )

    def __init__(self, name, reader, /):
        if type(self) is OptionArgument:
            raise TypeError("type 'OptionArgument' is abstract; use RequiredOptionArgument or OptionalOptionArgument")
        if not isinstance(name, str):
            raise ConfigurationTypeError(f"{type(self).__typename__} 'name' must be a string")
        elif not name:
            raise ConfigurationError(f"{type(self).__typename__} 'name' cannot be empty")
        if not callable(reader):
            raise ConfigurationTypeError(f"{type(self).__typename__} 'reader' must be callable")
        self._name = name
        self._reader = reader

    def is_required(self):
        raise NotImplementedError

    def to_short_placeholder(self):
        raise NotImplementedError

    def to_long_placeholder(self):
        raise NotImplementedError

    @property
    def default(self):
        raise AttributeError(f"{type(self).__typename__} {self._name!r} has no default value")

    def read(self, raw, accumulator, /):
        """
        Convert `raw` given the value accumulated so far (Unset at first).
        """
        return self._reader(raw, accumulator)


class RequiredOptionArgument(OptionArgument):
    def is_required(self):
        return True

    def to_short_placeholder(self):
        return self._name

    def to_long_placeholder(self):
        return "=" + self._name


class OptionalOptionArgument(OptionArgument):
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

    def to_short_placeholder(self):
        return "[" + self._name + "]"

    def to_long_placeholder(self):
        return "[=" + self._name + "]"


def _sanitize_names(cls, short_name, long_name):
    if short_name is not None:
        if not isinstance(short_name, str):
            raise ConfigurationTypeError(f"{cls.__typename__} 'short_name' must be a string or None")
        elif len(short_name) != 1:
            raise ConfigurationError(f"{cls.__typename__} 'short_name' must be exactly one character")
        elif short_name == "-":
            raise ConfigurationError(f"{cls.__typename__} 'short_name' cannot be a dash")
    if long_name is not None:
        if not isinstance(long_name, str):
            raise ConfigurationTypeError(f"{cls.__typename__} 'long_name' must be a string or None")
        elif not long_name:
            raise ConfigurationError(f"{cls.__typename__} 'long_name' cannot be empty")
        elif long_name.startswith("-") or "=" in long_name:
            raise ConfigurationError(f"{cls.__typename__} 'long_name' cannot start with a dash nor contain '='")
    if short_name is None and long_name is None:
        raise ConfigurationError(f"{cls.__typename__} must specify a short name, a long name or both")


class Option(metaclass=SpecType):
    """
    Named option.

    Parameters
    - short_name: None | str, a single character used as `-x`.
    - long_name: None | str, used as `--name`.
    - arg: None | OptionArgument. None makes the option a flag.
    - description: str shown in help.

    The option's values are stored under `key`: the long name when present,
    otherwise the short name. Both spellings of one option share that key, so
    they feed the same accumulator.
    """

    __introspectable__ = (
        "short_name",
        "long_name",
        "arg",
        "description",
    )

    def __init__(self, short_name, long_name, arg, description, /):
        _sanitize_names(type(self), short_name, long_name)
        if arg is not None and not isinstance(arg, OptionArgument):
            raise ConfigurationTypeError(f"{type(self).__typename__} 'arg' must be an option argument or None")
        if not isinstance(description, str):
            raise ConfigurationTypeError(f"{type(self).__typename__} 'description' must be a string")
        self._short_name = short_name
        self._long_name = long_name
        self._arg = arg
        self._description = description

    @property
    def key(self):
        return self._long_name if self._long_name is not None else self._short_name

    def takes_argument(self):
        return self._arg is not None

    def label(self):
        """
        Return the spelling shown in help, e.g. "-o, --output=file".
        """
        parts = []
        if self._short_name is not None:
            short = "-" + self._short_name
            if self._arg is not None and self._long_name is None:
                short += " " + self._arg.to_short_placeholder()
            parts.append(short)
        if self._long_name is not None:
            long = "--" + self._long_name
            if self._arg is not None:
                long += self._arg.to_long_placeholder()
            parts.append(long)
        return ", ".join(parts)


class SpecialOption(Option):
    """
    Option whose action runs as soon as the option is resolved.

    The action is called as action(command, invocation_name, out, value) and may
    print (help, version ...) through `out`. A truthy return interrupts the
    parse: no further token is read and the command's action is not called.
    """

    __introspectable__ = (
        "short_name",
        "long_name",
        "arg",
        "description",
        "action",
    )

    def __init__(self, short_name, long_name, arg, description, action, /):
        super().__init__(short_name, long_name, arg, description)
        if not callable(action):
            raise ConfigurationTypeError(f"{type(self).__typename__} 'action' must be callable")
        self._action = action

    def invoke(self, command, invocation_name, out, value, /):
        from .commands import CommandBase

        if not isinstance(command, CommandBase):
            raise TypeError("invoke() 'command' must be a command")
        if not isinstance(invocation_name, str):
            raise TypeError("invoke() 'invocation_name' must be a string")
        if not isinstance(out, Output):
            raise TypeError("invoke() 'out' must be an output")
        return self._action(command, invocation_name, out, value)


def _show_help(command, invocation_name, out, value):
    out.write(command.help_text(invocation_name))
    return True


def help_option(short_name="h", long_name="help", description="show this help", /):
    """
    Build a special flag printing the command's help text and stopping there.
    """
    return SpecialOption(short_name, long_name, None, description, _show_help)


def version_option(version, short_name="v", long_name="version", description="show version", /):
    """
    Build a special flag printing `version` and stopping there.
    """
    if not isinstance(version, str):
        raise ConfigurationTypeError("version_option() 'version' must be a string")

    def show_version(command, invocation_name, out, value):
        out.write(version + "\n")
        return True

    return SpecialOption(short_name, long_name, None, description, show_version)


__all__ = (
    "OptionArgument",
    "RequiredOptionArgument",
    "OptionalOptionArgument",
    "Option",
    "SpecialOption",
    "help_option",
    "version_option",
)
