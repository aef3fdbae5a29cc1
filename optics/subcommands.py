"""
Command groups: route the first token to a named subcommand.

    app = CommandGroup("project tool", [
        Subcommand("build", build),
        Subcommand("clean", clean),
    ], default_command=status)

    app.run("app", std, ["build", "--release"])   # build.run("app build", std, ["--release"])
    app.run("app", std, [])                       # status.run("app", std, [])
    app.run("app", std, ["--verbose"])            # status.run("app", std, ["--verbose"])

Routing
- No tokens: the default command runs with the same invocation name, or
  "error: missing subcommand name" is reported.
- First token names a subcommand: that subcommand runs with the invocation name
  extended by a space and the subcommand name, and with the remaining tokens.
- Otherwise the default command runs with the full, unconsumed token list, or
  "error: unknown subcommand name `...'" is reported.

Groups are commands themselves, so they nest.
"""
import warnings

from .commands import CommandBase, _check_invocation
from .faults import *
from .help import format_help_text
from .utils import SpecType


class Subcommand(metaclass=SpecType):
    """A (name, command) pair registered in a CommandGroup."""

    __introspectable__ = (
        "name",
        "command",
    )

    def __init__(self, name, command, /):
        if not isinstance(name, str):
            raise ConfigurationTypeError(f"{type(self).__typename__} 'name' must be a string")
        elif not name:
            raise ConfigurationError(f"{type(self).__typename__} 'name' cannot be empty")
        if not isinstance(command, CommandBase):
            raise ConfigurationTypeError(f"{type(self).__typename__} 'command' must be a command")
        self._name = name
        self._command = command


class CommandGroup(CommandBase):
    """
    Named collection of subcommands with an optional default command.

    Parameters
    - description: str shown in help.
    - subcommands: list | tuple of Subcommand or (name, command) pairs. When a
      name is registered twice the first registration wins and a
      DuplicateSubcommandWarning is emitted.
    - default_command: CommandBase | None run when no subcommand matches.
    """

    __introspectable__ = (
        "description",
        "subcommands",
        "default_command",
    )

    def __init__(self, description, subcommands, default_command=None, /):
        super().__init__(description)
        cls = type(self)

        if not isinstance(subcommands, list | tuple):
            raise ConfigurationTypeError(f"{cls.__typename__} 'subcommands' must be a list or a tuple of subcommands")
        if default_command is not None and not isinstance(default_command, CommandBase):
            raise ConfigurationTypeError(f"{cls.__typename__} 'default_command' must be a command or None")

        entries = []
        table = {}
        for entry in subcommands:
            if isinstance(entry, tuple) and len(entry) == 2:
                entry = Subcommand(*entry)
            elif not isinstance(entry, Subcommand):
                raise ConfigurationTypeError(f"{cls.__typename__} 'subcommands' must be a list or a tuple of subcommands")
            if table.setdefault(entry.name, entry.command) is not entry.command:
                warnings.warn(DuplicateSubcommandWarning(
                    f"{cls.__typename__} subcommand name {entry.name!r} is already in use; the first one is kept"
                ), stacklevel=2)
            entries.append(entry)

        self._subcommands = tuple(entries)
        self._default_command = default_command
        self._table = table

    def run(self, invocation_name, out, argv, /):
        _check_invocation("run", invocation_name, out, argv)
        try:
            self._route(invocation_name, out, argv)
        except UsageError as fault:
            out.write_error(str(fault))

    def _route(self, invocation_name, out, argv):
        if not argv:
            if self._default_command is None:
                raise MissingSubcommandError()
            return self._default_command.run(invocation_name, out, argv)

        name, *rest = argv
        try:
            command = self._table[name]
        except KeyError:
            if self._default_command is None:
                raise UnknownSubcommandError(name) from None
            return self._default_command.run(invocation_name, out, argv)

        return command.run(invocation_name + " " + name, out, rest)

    def help_text(self, invocation_name, /):
        if not isinstance(invocation_name, str):
            raise TypeError("help_text() argument must be a string")

        usage = "usage: %s <command> [...]" % invocation_name
        if self._default_command is not None:
            usage = "usage: %s [<command>] [...]" % invocation_name

        lines = [usage]
        if self._description:
            lines.extend(("", self._description))
        text = format_help_text(0, lines)

        if self._subcommands:
            text += "\ncommands:\n" + format_help_text(2, [
                [name, command.description] for name, command in self._table.items()
            ])
        return text


__all__ = (
    "Subcommand",
    "CommandGroup",
)
