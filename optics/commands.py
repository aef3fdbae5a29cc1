"""
Optics command layer: describe a command, parse a token list, run the action.

What this module provides
- CommandBase: the runnable capability shared by Command and CommandGroup
  (see optics.subcommands). run(invocation_name, out, argv) is its only verb.
- Command: description + ordered positional arguments + options + action.
  • parse(...) walks the tokens once and returns an Invocation (argument and
    option dictionaries), None when a special option interrupted, or raises a
    UsageError.
  • run(...) is parse(...) with the error routed to `out.write_error` and the
    action called on success.
  • help_text(...) renders usage and the option table.
- invoke(command, prompt): convenience runner for scripts (sys.argv, a shell
  string, or an iterable of tokens) on the standard output channels.

Token classification, in order, for every token
1. a value owed to the previous option (`-t VALUE`, `--test VALUE`);
2. short options `-x`, clusters `-xyz`, inline values `-xVALUE`;
3. long options `--name`, `--name=VALUE`;
4. positional values, consumed in declared order. Tokens beyond the last
   declared argument are dropped.

A token that looks like an option is never taken as a positional value.

Quick start
    from optics import Command, RequiredArgument, Option, RequiredOptionArgument, invoke
    from optics.readers import string, last

    greet = Command(
        "print a greeting",
        [RequiredArgument("name", string)],
        [Option("g", "greeting", RequiredOptionArgument("text", last(string)), "greeting word")],
        lambda args, opts: print(opts.get("greeting", "hello"), args["name"]),
    )

    if __name__ == "__main__":
        invoke(greet)
"""
import os.path
import re
import shlex
import sys
from collections.abc import Iterable
from typing import NamedTuple

from .arguments import Argument
from .faults import *
from .help import format_help_text
from .options import Option, SpecialOption
from .output import Output, std
from .utils import SpecType, Unset

_SHORT = re.compile(r"-(?P<name>[^-])(?P<rest>.*)", re.DOTALL)
_LONG = re.compile(r"--(?P<name>[^-=][^=]*)(?:=(?P<value>.*))?", re.DOTALL)


class Invocation(NamedTuple):
    """Parsed values of one successful parse."""
    arguments: dict
    options: dict


def _check_invocation(function, invocation_name, out, argv):
    """
    Validate the public (invocation_name, out, argv) triple of run/parse.
    """
    if not isinstance(invocation_name, str):
        raise TypeError(f"{function}() 'invocation_name' must be a string")
    if not isinstance(out, Output):
        raise TypeError(f"{function}() 'out' must be an output")
    if not isinstance(argv, list | tuple):
        raise TypeError(f"{function}() 'argv' must be a list or a tuple of strings")
    for token in argv:
        if not isinstance(token, str):
            raise TypeError(f"{function}() 'argv' must be a list or a tuple of strings")


class CommandBase(metaclass=SpecType):
    """
    Something that can be run against a token list.

    Implemented by Command and CommandGroup. The base itself is not runnable.
    """

    __introspectable__ = (
        "description",
    )

    def __init__(self, description="", /):
        if not isinstance(description, str):
            raise ConfigurationTypeError(f"{type(self).__typename__} 'description' must be a string")
        self._description = description

    def run(self, invocation_name, out, argv, /):
        raise NotImplementedError(f"{type(self).__typename__} cannot be run")

    def help_text(self, invocation_name, /):
        raise NotImplementedError(f"{type(self).__typename__} has no help text")


class _Interrupted(Exception):
    """Raised inside a session when a special option stops the parse."""


class _Session:
    """
    Per-parse state: one left-to-right pass over the tokens.

    Nothing here outlives the parse call, so a Command can be parsed from
    several threads at once.
    """

    def __init__(self, command, invocation_name, out):
        self.command = command
        self.invocation_name = invocation_name
        self.out = out
        self.arguments = {}
        self.options = {}
        self.cursor = 0
        self.pending = None
        self.pending_spelling = None

    def feed(self, tokens):
        for token in tokens:
            if self.pending is not None:
                option, self.pending, self.pending_spelling = self.pending, None, None
                self._read(option, token)
            elif match := _SHORT.fullmatch(token):
                self._short(match["name"], match["rest"])
            elif match := _LONG.fullmatch(token):
                self._long(match["name"], match["value"])
            else:
                self._positional(token)

        if self.pending is not None:
            raise MissingOptionArgumentError(self.pending_spelling)

        for argument in self.command._arguments[self.cursor:]:
            if argument.is_required():
                raise TooFewArgumentsError()
            self.arguments[argument.name] = argument.default

        return Invocation(self.arguments, self.options)

    def _short(self, name, rest):
        # flags reparse their remainder as a new cluster: -st == -s -t
        while True:
            try:
                option = self.command._shorts[name]
            except KeyError:
                raise UnknownOptionError("-" + name) from None

            if option.arg is None:
                self._store(option, True)
                if not rest:
                    return
                # no short name is "-", so "-s-" reports `--' as unknown
                name, rest = rest[0], rest[1:]
                continue

            if rest:
                self._read(option, rest)
            else:
                self._await(option, "-" + name)
            return

    def _long(self, name, value):
        try:
            option = self.command._longs[name]
        except KeyError:
            raise UnknownOptionError("--" + name) from None

        if option.arg is None:
            if value is not None:
                raise UnexpectedOptionArgumentError("--" + name)
            self._store(option, True)
        elif value is not None:
            self._read(option, value)
        else:
            self._await(option, "--" + name)

    def _positional(self, token):
        if self.cursor >= len(self.command._arguments):
            return
        argument = self.command._arguments[self.cursor]
        self.arguments[argument.name] = argument.read(token)
        self.cursor += 1

    def _await(self, option, spelling):
        if option.arg.is_required():
            self.pending = option
            self.pending_spelling = spelling
        else:
            self._store(option, option.arg.default)

    def _read(self, option, raw):
        self._store(option, option.arg.read(raw, self.options.get(option.key, Unset)))

    def _store(self, option, value):
        if isinstance(option, SpecialOption):
            if option.invoke(self.command, self.invocation_name, self.out, value):
                raise _Interrupted
        self.options[option.key] = value


class Command(CommandBase):
    """
    Command with positional arguments, options and an action.

    Parameters
    - description: str shown in help.
    - arguments: list | tuple of Argument, in positional order. No required
      argument may follow an optional one.
    - options: list | tuple of Option (SpecialOption included). Short names and
      long names must be unique across the command.
    - action: Callable[[dict, dict], Any] called with the argument values (keyed
      by argument name) and the option values (keyed by Option.key).

    Errors at construction
    - ConfigurationTypeError (a TypeError) for values of the wrong type.
    - ConfigurationError for ordering violations and duplicated names.
    """

    __introspectable__ = (
        "description",
        "arguments",
        "options",
        "action",
    )

    def __init__(self, description, arguments, options, action, /):
        super().__init__(description)
        cls = type(self)

        if not isinstance(arguments, list | tuple):
            raise ConfigurationTypeError(f"{cls.__typename__} 'arguments' must be a list or a tuple of arguments")
        if not isinstance(options, list | tuple):
            raise ConfigurationTypeError(f"{cls.__typename__} 'options' must be a list or a tuple of options")
        if not callable(action):
            raise ConfigurationTypeError(f"{cls.__typename__} 'action' must be callable")

        names = set()
        optional = None
        for argument in arguments:
            if not isinstance(argument, Argument):
                raise ConfigurationTypeError(f"{cls.__typename__} 'arguments' must be a list or a tuple of arguments")
            if argument.name in names:
                raise ConfigurationError(f"{cls.__typename__} argument name {argument.name!r} is already in use")
            names.add(argument.name)
            if not argument.is_required():
                optional = argument
            elif optional is not None:
                raise ConfigurationError(
                    f"{cls.__typename__} required argument {argument.name!r} "
                    f"cannot follow optional argument {optional.name!r}"
                )

        shorts = {}
        longs = {}
        for option in options:
            if not isinstance(option, Option):
                raise ConfigurationTypeError(f"{cls.__typename__} 'options' must be a list or a tuple of options")
            if option.short_name is not None:
                if shorts.setdefault(option.short_name, option) is not option:
                    raise ConfigurationError(f"{cls.__typename__} option name '-{option.short_name}' is already in use")
            if option.long_name is not None:
                if longs.setdefault(option.long_name, option) is not option:
                    raise ConfigurationError(f"{cls.__typename__} option name '--{option.long_name}' is already in use")

        self._arguments = tuple(arguments)
        self._options = tuple(options)
        self._action = action
        self._shorts = shorts
        self._longs = longs

    def parse(self, invocation_name, out, argv, /):
        """
        Parse `argv` without calling the action.

        Returns
        - Invocation(arguments, options) on success.
        - None when a special option interrupted the parse (its action ran).

        Raises
        - UsageError subclasses for user errors (unknown option, missing option
          value, too few arguments).
        - Whatever a reader raises (typically ConversionError), unchanged.
        - TypeError when the inputs have the wrong types.
        """
        _check_invocation("parse", invocation_name, out, argv)
        session = _Session(self, invocation_name, out)
        try:
            return session.feed(argv)
        except _Interrupted:
            return None

    def run(self, invocation_name, out, argv, /):
        """
        Parse `argv` and call the action with the parsed values.

        A usage error is written once to `out.write_error` and the action is not
        called. A special option that interrupts also skips the action.
        """
        _check_invocation("run", invocation_name, out, argv)
        try:
            invocation = self.parse(invocation_name, out, argv)
        except UsageError as fault:
            out.write_error(str(fault))
            return
        if invocation is None:
            return
        self._action(invocation.arguments, invocation.options)

    def help_text(self, invocation_name, /):
        if not isinstance(invocation_name, str):
            raise TypeError("help_text() argument must be a string")

        usage = ["usage:", invocation_name]
        if self._options:
            usage.append("[options]")
        usage.extend(argument.to_placeholder() for argument in self._arguments)

        lines = [" ".join(usage)]
        if self._description:
            lines.extend(("", self._description))
        text = format_help_text(0, lines)

        if self._options:
            text += "\noptions:\n" + format_help_text(2, [
                [option.label(), option.description] for option in self._options
            ])
        return text


def _program_name():
    main = sys.modules.get("__main__")
    return getattr(main, "__prog__", None) or os.path.basename(sys.argv[0] or "") or "command"


def invoke(command, prompt=Unset, /, *, name=Unset, out=std):
    """
    Run a command the way a script entry point would.

    Parameters
    - command: CommandBase to run.
    - prompt:
      • Unset: tokens from sys.argv[1:].
      • str: shell-like string, split with shlex.split.
      • Iterable[str]: tokens as given.
    - name: invocation name; defaults to `__prog__` from __main__, then the
      script's basename.
    - out: Output to write to, the standard streams by default.

    Exit codes are left to the caller.
    """
    if not isinstance(command, CommandBase):
        raise TypeError("invoke() first argument must be a command")

    if prompt is Unset:
        tokens = sys.argv[1:]
    elif isinstance(prompt, str):
        tokens = shlex.split(prompt)
    elif isinstance(prompt, Iterable):
        tokens = list(prompt)
        for token in tokens:
            if not isinstance(token, str):
                raise TypeError("invoke() argument must be a string or an iterable of strings")
    else:
        raise TypeError("invoke() argument must be a string or an iterable of strings")

    command.run(_program_name() if name is Unset else name, out, list(tokens))


__all__ = (
    "CommandBase",
    "Command",
    "Invocation",
    "invoke",
)
