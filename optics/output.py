"""
Output channels consumed by commands.

An Output pairs two callables: one for normal output (help, version, anything
an action chooses to print) and one for error messages. The engine only ever
writes finished, newline-terminated strings to it; it never reads from it.

`std` is bound to rich consoles over the process streams. Text goes through
Console.out with markup, emoji and highlighting disabled, so messages reach the
terminal byte for byte.
"""
from rich.console import Console

console = Console(highlight=False)
error_console = Console(stderr=True, highlight=False)


class Output:
    """
    Two write channels: `write` for normal output, `write_error` for errors.

    Parameters
    - out: Callable[[str], Any] receiving normal messages.
    - err: Callable[[str], Any] receiving error messages.
    """

    __slots__ = ("_out", "_err")

    def __init__(self, out, err, /):
        if not callable(out):
            raise TypeError("Output 'out' must be callable")
        if not callable(err):
            raise TypeError("Output 'err' must be callable")
        self._out = out
        self._err = err

    def write(self, message, /):
        if not isinstance(message, str):
            raise TypeError("write() argument must be a string")
        self._out(message)

    def write_error(self, message, /):
        if not isinstance(message, str):
            raise TypeError("write_error() argument must be a string")
        self._err(message)

    def __repr__(self):
        return "output(out=%r, err=%r)" % (self._out, self._err)


def _writer(console, /):
    def write(message):
        console.out(message, end="", highlight=False)
    return write


std = Output(_writer(console), _writer(error_console))


__all__ = (
    "Output",
    "std",
)
