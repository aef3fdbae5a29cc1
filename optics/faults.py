"""
Optics faults (errors and warnings).

Scope
- OpticsError: root of every exception raised by the library.
- ConfigurationError / ConfigurationTypeError: malformed specs, raised while a
  command, option or argument is being built. These are programmer errors and
  are never caught by the engine.
- ConversionError: raised by readers (see optics.readers) when a raw token cannot
  be converted. The engine lets it propagate out of run() untouched.
- UsageError and its subclasses: user errors found while parsing a token list.
  Command.parse raises them; Command.run and CommandGroup.run turn each one into
  exactly one message on the output's error channel.
- OpticsWarning / DuplicateSubcommandWarning: non-fatal construction notices,
  emitted through warnings.warn.

Message contract
- str(usage_error) is the exact text written to the error channel, e.g.
  "error: unknown option `-n'\\n". Keep these byte-stable; callers match on them.
- __rich__ renders the same message with styling for interactive consoles.
"""
from rich.text import Text


class OpticsError(Exception):
    """Base exception for the optics library."""


class ConfigurationError(OpticsError, ValueError):
    """A command, option or argument spec is malformed."""


class ConfigurationTypeError(ConfigurationError, TypeError):
    """A spec was given a value of the wrong type."""


class ConversionError(OpticsError, ValueError):
    """A reader could not convert a raw token into a value."""

    def __init__(self, message, /, raw=None):
        super().__init__(message)
        self.raw = raw


class UsageError(OpticsError):
    """
    A user error found while parsing a token list.

    The message is the text after the "error: " prefix; newline handling is
    decided by each subclass (command errors end with a newline, subcommand
    routing errors do not).
    """
    terminator = "\n"

    def __init__(self, message, /):
        super().__init__(message)
        self.message = message

    def __str__(self):
        return "error: " + self.message + self.terminator

    def __rich__(self):
        return Text.assemble(("error", "bold red"), ": ", (self.message, "default"))


class UnknownOptionError(UsageError):
    def __init__(self, spelling, /):
        super().__init__("unknown option `%s'" % spelling)
        self.spelling = spelling


class UnexpectedOptionArgumentError(UsageError):
    def __init__(self, spelling, /):
        super().__init__("option `%s' takes no argument" % spelling)
        self.spelling = spelling


class MissingOptionArgumentError(UsageError):
    def __init__(self, spelling, /):
        super().__init__("missing argument for `%s'" % spelling)
        self.spelling = spelling


class TooFewArgumentsError(UsageError):
    def __init__(self):
        super().__init__("too few argument")


class MissingSubcommandError(UsageError):
    terminator = ""

    def __init__(self):
        super().__init__("missing subcommand name")


class UnknownSubcommandError(UsageError):
    terminator = ""

    def __init__(self, name, /):
        super().__init__("unknown subcommand name `%s'" % name)
        self.name = name


class OpticsWarning(UserWarning):
    """Base warning for the optics library."""


class DuplicateSubcommandWarning(OpticsWarning):
    """A command group registers the same subcommand name more than once."""


__all__ = (
    "OpticsError",
    "ConfigurationError",
    "ConfigurationTypeError",
    "ConversionError",
    "UsageError",
    "UnknownOptionError",
    "UnexpectedOptionArgumentError",
    "MissingOptionArgumentError",
    "TooFewArgumentsError",
    "MissingSubcommandError",
    "UnknownSubcommandError",
    "OpticsWarning",
    "DuplicateSubcommandWarning",
)
